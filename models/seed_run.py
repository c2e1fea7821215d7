from sqlalchemy import Column, BigInteger, Enum, DateTime, Float, Integer, Text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from datetime import datetime
import uuid
from models.base import Base, SeedMode, RunStatus


class SeedRun(Base):
    """
    Tracks metadata for each seeding run.

    Purpose:
    - Audit trail of all seeding runs
    - Request and failure counters per run
    - Snapshot of the progress ledger and error log at run end
    """
    __tablename__ = "seed_runs"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    run_id = Column(UUID(as_uuid=True), default=uuid.uuid4, unique=True, nullable=False, index=True)

    mode = Column(Enum(SeedMode), nullable=False)
    status = Column(Enum(RunStatus), default=RunStatus.PENDING, nullable=False, index=True)

    # Timestamps
    started_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    completed_at = Column(DateTime, nullable=True)
    duration_seconds = Column(Float, nullable=True)

    # Statistics
    total_requests = Column(Integer, default=0)
    failed_requests = Column(Integer, default=0)
    items_processed = Column(Integer, default=0)
    items_failed = Column(Integer, default=0)
    categories_completed = Column(Integer, default=0)

    # Error tracking
    error_message = Column(Text, nullable=True)
    error_log = Column(JSONB, nullable=True)

    progress_snapshot = Column(JSONB, nullable=True)
    config_snapshot = Column(JSONB, nullable=True)

    def __repr__(self):
        return f"<SeedRun(run_id={self.run_id}, mode={self.mode}, status={self.status})>"
