"""
Existing-ID oracle: which primary keys of a kind are already materialized
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Set, Type

from sqlalchemy import select, union
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.exceptions import DatabaseError
from ingestion.registry import EntityKind
from models.base import Base
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationshipCheck:
    """
    A relationship table that must hold at least one row per primary id.

    ``columns`` are the foreign-key columns pointing at the primary row;
    when several are given (e.g. damage and target type) a row in any of
    them counts.

    With ``via`` the columns point at an intermediate table instead, and
    ``via_column`` of that table holds the primary id (version names reach
    their version group through ``versions.version_group_id``).
    """
    model: Type[Base]
    columns: Sequence[str]
    via: Optional[Type[Base]] = None
    via_column: Optional[str] = None

    @classmethod
    def on(cls, model: Type[Base], *columns: str) -> "RelationshipCheck":
        return cls(model=model, columns=tuple(columns))

    @classmethod
    def through(
        cls,
        model: Type[Base],
        column: str,
        via: Type[Base],
        via_column: str
    ) -> "RelationshipCheck":
        return cls(model=model, columns=(column,), via=via, via_column=via_column)


class ExistingIdOracle:
    """Reads existing primary keys from the relational store"""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def all_ids(self, kind: EntityKind) -> Set[int]:
        """Every primary key stored for ``kind``"""
        model = kind.model
        return await self._scalar_set(select(model.id), model.__tablename__)

    async def related_ids(self, check: RelationshipCheck) -> Set[int]:
        """Distinct primary ids referenced by a relationship table"""
        table = check.model.__table__
        if check.via is None:
            selects = [select(table.c[column]) for column in check.columns]
        else:
            via = check.via.__table__
            selects = [
                select(via.c[check.via_column]).select_from(
                    table.join(via, table.c[column] == via.c.id)
                )
                for column in check.columns
            ]
        stmt = selects[0] if len(selects) == 1 else union(*selects)
        return await self._scalar_set(stmt, table.name)

    async def complete_ids(
        self,
        kind: EntityKind,
        checks: Sequence[RelationshipCheck]
    ) -> Set[int]:
        """
        Primary ids whose every relationship table is populated.

        Rows missing at least one relationship are left out, so they get
        processed again.
        """
        ids = await self.all_ids(kind)
        for check in checks:
            if not ids:
                break
            ids &= await self.related_ids(check)
        return ids

    async def _scalar_set(self, stmt, table_name: str) -> Set[int]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return {value for value in result.scalars().all() if value is not None}
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to read existing ids from {table_name}",
                context={"operation": "SELECT", "table_name": table_name},
                original_exception=e
            )
