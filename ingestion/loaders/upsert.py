"""
Idempotent writes into the catalog tables (INSERT ... ON CONFLICT)
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Type, Union

from sqlalchemy import and_, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.exceptions import DatabaseError, UpsertError
from ingestion.context import RunContext
from ingestion.oracle import ExistingIdOracle
from ingestion.registry import EntityKind, FOREIGN_KEY_KINDS
from models.base import Base
from schemas.resources import extract_id_from_url
import logging

logger = logging.getLogger(__name__)

FieldSpec = Union[Sequence[str], Mapping[str, str]]


def read_field(entry: Any, name: str) -> Any:
    """Read ``name`` from a pydantic entry or a plain dict"""
    if isinstance(entry, dict):
        return entry.get(name)
    return getattr(entry, name, None)


def reference_id(reference: Any) -> Optional[int]:
    """Numeric id of a ``{name, url}`` reference (model or dict)"""
    if reference is None:
        return None
    return extract_id_from_url(read_field(reference, "url"))


def _field_pairs(fields: FieldSpec) -> List[Tuple[str, str]]:
    """(column, source attribute) pairs; a plain list maps names to themselves"""
    if isinstance(fields, Mapping):
        return list(fields.items())
    return [(name, name) for name in fields]


class UpsertEngine:
    """
    Create-or-update writes keyed by primary key or composite natural key.

    Ensures:
    - No duplicate rows on repeated runs
    - Existing rows are updated in place
    - Join rows are only written when the referenced entity exists

    Every primitive uses its own short-lived session, so concurrent items in
    a batch never share one.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        context: RunContext,
        oracle: Optional[ExistingIdOracle] = None
    ):
        self.session_factory = session_factory
        self.context = context
        self.oracle = oracle or ExistingIdOracle(session_factory)

    # ------------------------------------------------------------------
    # Existence
    # ------------------------------------------------------------------

    async def known_ids(self, kind: EntityKind) -> Set[int]:
        """Existing ids of ``kind``, loaded once and kept current by upserts"""
        ids = self.context.known_ids.get(kind)
        if ids is None:
            ids = await self.oracle.all_ids(kind)
            self.context.known_ids[kind] = ids
        return ids

    async def exists(self, kind: EntityKind, record_id: Optional[int]) -> bool:
        if record_id is None:
            return False
        return record_id in await self.known_ids(kind)

    async def count(self, model: Type[Base]) -> int:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(func.count()).select_from(model))
                return result.scalar_one()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to count {model.__tablename__}",
                context={"operation": "SELECT", "table_name": model.__tablename__},
                original_exception=e
            )

    def _remember(self, model: Type[Base], record_id: int) -> None:
        for kind, ids in self.context.known_ids.items():
            if kind.model is model:
                ids.add(record_id)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    async def upsert_record(
        self,
        model: Type[Base],
        record_id: Optional[int],
        fields: Dict[str, Any]
    ) -> bool:
        """
        Create or update a row by primary key.

        Returns:
            False when ``record_id`` is missing and nothing was written
        """
        if record_id is None:
            return False

        stmt = insert(model).values(id=record_id, **fields)
        if fields:
            stmt = stmt.on_conflict_do_update(index_elements=["id"], set_=fields)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=["id"])

        await self._execute(stmt, model, {"id": record_id})
        self._remember(model, record_id)
        return True

    async def upsert_composite(
        self,
        model: Type[Base],
        keys: Dict[str, Any],
        fields: Optional[Dict[str, Any]] = None,
        returning: Optional[str] = None,
        overwrite: bool = True
    ) -> Any:
        """
        Create or update a row by a composite (or unique) key.

        Args:
            model: Target model
            keys: Key columns; must match the table's primary key or a unique constraint
            fields: Payload columns updated on conflict
            returning: Optional column whose value is returned
            overwrite: When False an existing row is left untouched

        Returns:
            The ``returning`` column value, if requested
        """
        fields = fields or {}
        stmt = insert(model).values(**keys, **fields)
        if fields and overwrite:
            stmt = stmt.on_conflict_do_update(index_elements=list(keys), set_=fields)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=list(keys))

        if returning is None:
            await self._execute(stmt, model, keys)
            return None

        if not (fields and overwrite):
            # DO NOTHING returns no row on conflict; look the row up instead
            await self._execute(stmt, model, keys)
            return await self._lookup(model, keys, returning)

        stmt = stmt.returning(getattr(model, returning))
        return await self._execute(stmt, model, keys, scalar=True)

    async def upsert_join_record(
        self,
        model: Type[Base],
        primary_key: str,
        primary_id: int,
        entries: Optional[Iterable[Any]],
        secondary_key: str,
        reference_field: Optional[str] = None
    ) -> int:
        """
        Write one payload-less join row per entry.

        Each entry's secondary id comes from its reference (the entry itself
        when ``reference_field`` is None). Entries referencing an entity that
        does not exist yet are skipped with a warning.

        Returns:
            Number of rows written
        """
        written = 0
        for entry in entries or []:
            reference = entry if reference_field is None else read_field(entry, reference_field)
            secondary_id = await self._guarded_secondary_id(
                model, secondary_key, reference
            )
            if secondary_id is None:
                continue

            await self.upsert_composite(
                model, {primary_key: primary_id, secondary_key: secondary_id}
            )
            written += 1
        return written

    async def add_joined_record_data(
        self,
        model: Type[Base],
        primary_key: str,
        primary_id: int,
        entries: Optional[Iterable[Any]],
        fields: FieldSpec,
        secondary_key: str = "language_id",
        reference_field: Optional[str] = None
    ) -> int:
        """
        Write localized/joined rows carrying payload fields.

        ``fields`` is a list of column names read from each entry, or a
        mapping ``{column: entry attribute}`` when they differ. Entries whose
        secondary entity is missing or whose fields are all empty are skipped.

        Returns:
            Number of rows written
        """
        reference_field = reference_field or secondary_key[:-len("_id")]
        pairs = _field_pairs(fields)
        written = 0

        for entry in entries or []:
            payload = {column: read_field(entry, source) for column, source in pairs}
            if all(value is None for value in payload.values()):
                continue

            secondary_id = await self._guarded_secondary_id(
                model, secondary_key, read_field(entry, reference_field)
            )
            if secondary_id is None:
                continue

            await self.upsert_composite(
                model,
                {primary_key: primary_id, secondary_key: secondary_id},
                payload
            )
            written += 1
        return written

    async def add_versioned_text(
        self,
        model: Type[Base],
        primary_key: str,
        primary_id: int,
        entries: Optional[Iterable[Any]],
        fields: FieldSpec,
        version_key: str = "version_group_id"
    ) -> int:
        """
        Write flavor-text rows keyed by (primary, version dimension, language).

        Both the language and the version (group) must exist.
        """
        version_field = version_key[:-len("_id")]
        pairs = _field_pairs(fields)
        written = 0

        for entry in entries or []:
            payload = {column: read_field(entry, source) for column, source in pairs}
            if all(value is None for value in payload.values()):
                continue

            language_id = await self._guarded_secondary_id(
                model, "language_id", read_field(entry, "language")
            )
            version_id = await self._guarded_secondary_id(
                model, version_key, read_field(entry, version_field)
            )
            if language_id is None or version_id is None:
                continue

            await self.upsert_composite(
                model,
                {primary_key: primary_id, version_key: version_id, "language_id": language_id},
                payload
            )
            written += 1
        return written

    async def find_or_create(self, model: Type[Base], criteria: Dict[str, Any]) -> Tuple[int, bool]:
        """
        Return the id of the row matching every criterion, creating it if absent.

        ``None`` criteria match NULL columns.

        Returns:
            (id, created)
        """
        existing_id = await self._lookup(model, criteria, "id")
        if existing_id is not None:
            return existing_id, False

        stmt = insert(model).values(**criteria).returning(model.id)
        new_id = await self._execute(stmt, model, criteria, scalar=True)
        return new_id, True

    async def update_fields(
        self,
        model: Type[Base],
        record_id: int,
        fields: Dict[str, Any]
    ) -> int:
        """Update columns of an existing row; returns the number of rows changed"""
        stmt = update(model).where(model.id == record_id).values(**fields)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to update {model.__tablename__} {record_id}",
                context={"operation": "UPDATE", "table_name": model.__tablename__, "id": record_id},
                original_exception=e
            )

    async def update_many(
        self,
        model: Type[Base],
        record_ids: Sequence[int],
        fields: Dict[str, Any]
    ) -> int:
        """Update the same columns on several rows in one statement"""
        if not record_ids:
            return 0
        ids = list(record_ids)
        stmt = update(model).where(model.id.in_(ids)).values(**fields)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to update {len(ids)} rows of {model.__tablename__}",
                context={"operation": "UPDATE", "table_name": model.__tablename__, "ids": ids},
                original_exception=e
            )

    async def select_rows(self, *columns, where=None) -> List[Tuple]:
        """Run a plain SELECT of ``columns`` and return all rows"""
        stmt = select(*columns)
        if where is not None:
            stmt = stmt.where(where)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return [tuple(row) for row in result.all()]
        except SQLAlchemyError as e:
            raise DatabaseError(
                "Failed to read rows",
                context={"operation": "SELECT"},
                original_exception=e
            )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _guarded_secondary_id(
        self,
        model: Type[Base],
        secondary_key: str,
        reference: Any
    ) -> Optional[int]:
        secondary_id = reference_id(reference)
        if secondary_id is None:
            return None

        kind = FOREIGN_KEY_KINDS.get(secondary_key)
        if kind is not None and not await self.exists(kind, secondary_id):
            logger.warning(
                f"Skipping {model.__tablename__} row: {kind.value} {secondary_id} does not exist"
            )
            return None
        return secondary_id

    async def _lookup(self, model: Type[Base], criteria: Dict[str, Any], column: str) -> Any:
        conditions = [
            getattr(model, name).is_(None) if value is None else getattr(model, name) == value
            for name, value in criteria.items()
        ]
        stmt = select(getattr(model, column)).where(and_(*conditions)).limit(1)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to look up {model.__tablename__}",
                context={"operation": "SELECT", "table_name": model.__tablename__},
                original_exception=e
            )

    async def _execute(self, stmt, model: Type[Base], key: Dict[str, Any], scalar: bool = False) -> Any:
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                value = result.scalar_one_or_none() if scalar else None
                await session.commit()
                return value
        except SQLAlchemyError as e:
            raise UpsertError(
                f"Failed to write {model.__tablename__}",
                context={"table_name": model.__tablename__, "key": key},
                original_exception=e
            )
