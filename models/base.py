from sqlalchemy.orm import declarative_base
import enum

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================

class SeedMode(str, enum.Enum):
    """Transport/processing mode of a seeding run"""
    STANDARD = "standard"  # forwarding proxy, sequential
    PREMIUM = "premium"    # authenticated tunnel, batched-parallel


class RunStatus(str, enum.Enum):
    """Seeding run status"""
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"
