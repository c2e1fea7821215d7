"""
Unit tests for the upsert engine
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from core.exceptions import DatabaseError, UpsertError
from ingestion.loaders.upsert import UpsertEngine, reference_id
from ingestion.registry import EntityKind
from models.language import Language, LanguageName, VersionName
from models.types import TypeEfficacy, TypeName
from schemas.resources import Name, NamedResource
from tests.helpers import make_session_factory, ref


def compiled(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


def executed_statements(session) -> list:
    return [compiled(call.args[0]) for call in session.execute.await_args_list]


def make_engine(run_context, known=None, execute_result=None):
    factory, session = make_session_factory(execute_result)
    run_context.known_ids.update(known or {})
    oracle = MagicMock()
    oracle.all_ids = AsyncMock(return_value=set())
    return UpsertEngine(factory, run_context, oracle), session


class TestReferenceId:
    """Test id extraction from references"""

    def test_from_model(self):
        assert reference_id(NamedResource(name="en", url="https://pokeapi.co/api/v2/language/9/")) == 9

    def test_from_dict(self):
        assert reference_id({"url": "https://pokeapi.co/api/v2/type/12/"}) == 12

    def test_missing(self):
        assert reference_id(None) is None
        assert reference_id({"url": "https://pokeapi.co/api/v2/type/"}) is None


class TestUpsertRecord:
    """Test primary-key upserts"""

    @pytest.mark.asyncio
    async def test_missing_id_writes_nothing(self, run_context):
        engine, session = make_engine(run_context)

        assert await engine.upsert_record(Language, None, {"name": "en"}) is False
        session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upsert_updates_on_conflict(self, run_context):
        engine, session = make_engine(run_context)

        assert await engine.upsert_record(Language, 9, {"name": "en", "official": True}) is True

        sql = executed_statements(session)[0]
        assert "INSERT INTO languages" in sql
        assert "ON CONFLICT (id) DO UPDATE" in sql
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_written_id_becomes_known(self, run_context):
        engine, _ = make_engine(run_context, known={EntityKind.LANGUAGE: {1}})

        await engine.upsert_record(Language, 9, {"name": "en"})

        assert await engine.exists(EntityKind.LANGUAGE, 9)

    @pytest.mark.asyncio
    async def test_database_failure_is_wrapped(self, run_context):
        engine, session = make_engine(run_context)
        session.execute.side_effect = IntegrityError("INSERT", {}, Exception("fk violation"))

        with pytest.raises(UpsertError) as exc_info:
            await engine.upsert_record(Language, 9, {"name": "en"})

        assert exc_info.value.context["table_name"] == "languages"
        assert exc_info.value.context["key"] == {"id": 9}


class TestUpsertComposite:
    """Test composite-key upserts"""

    @pytest.mark.asyncio
    async def test_without_overwrite_does_nothing_on_conflict(self, run_context):
        engine, session = make_engine(run_context)

        await engine.upsert_composite(
            TypeEfficacy,
            {"damage_type_id": 1, "target_type_id": 2},
            {"damage_factor": 1.0},
            overwrite=False
        )

        sql = executed_statements(session)[0]
        assert "ON CONFLICT (damage_type_id, target_type_id) DO NOTHING" in sql

    @pytest.mark.asyncio
    async def test_overwrite_updates_payload(self, run_context):
        engine, session = make_engine(run_context)

        await engine.upsert_composite(
            TypeEfficacy,
            {"damage_type_id": 1, "target_type_id": 2},
            {"damage_factor": 2.0}
        )

        assert "DO UPDATE SET damage_factor" in executed_statements(session)[0]


class TestJoinedRecordData:
    """Test localized row writes and their skip rules"""

    @pytest.mark.asyncio
    async def test_writes_rows_for_known_languages(self, run_context):
        engine, session = make_engine(run_context, known={EntityKind.LANGUAGE: {9}})
        names = [
            Name(name="Fire", language=NamedResource(**ref("language", 9, "en"))),
        ]

        written = await engine.add_joined_record_data(TypeName, "type_id", 10, names, ["name"])

        assert written == 1
        assert "INSERT INTO type_names" in executed_statements(session)[0]

    @pytest.mark.asyncio
    async def test_unknown_language_is_skipped(self, run_context):
        engine, session = make_engine(run_context, known={EntityKind.LANGUAGE: {9}})
        names = [Name(name="Feu", language=NamedResource(**ref("language", 5, "fr")))]

        written = await engine.add_joined_record_data(TypeName, "type_id", 10, names, ["name"])

        assert written == 0
        session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_payload_is_skipped(self, run_context):
        engine, session = make_engine(run_context, known={EntityKind.LANGUAGE: {9}})
        names = [Name(name=None, language=NamedResource(**ref("language", 9, "en")))]

        assert await engine.add_joined_record_data(TypeName, "type_id", 10, names, ["name"]) == 0
        session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_custom_secondary_key_and_reference(self, run_context):
        engine, session = make_engine(run_context, known={EntityKind.LANGUAGE: {9}})
        names = [Name(name="English", language=NamedResource(**ref("language", 9, "en")))]

        written = await engine.add_joined_record_data(
            LanguageName, "language_id", 9, names, ["name"],
            secondary_key="local_language_id", reference_field="language"
        )

        assert written == 1
        assert "local_language_id" in executed_statements(session)[0]

    @pytest.mark.asyncio
    async def test_none_entries(self, run_context):
        engine, _ = make_engine(run_context)

        assert await engine.add_joined_record_data(VersionName, "version_id", 1, None, ["name"]) == 0


class TestFindOrCreate:
    """Test lookup-or-insert of surrogate-keyed rows"""

    @pytest.mark.asyncio
    async def test_returns_existing_row(self, run_context):
        result = MagicMock()
        result.scalar_one_or_none.return_value = 42
        engine, session = make_engine(run_context, execute_result=result)

        row_id, created = await engine.find_or_create(Language, {"name": "en", "iso639": None})

        assert (row_id, created) == (42, False)
        assert session.execute.await_count == 1
        assert "iso639 IS NULL" in executed_statements(session)[0]

    @pytest.mark.asyncio
    async def test_creates_missing_row(self, run_context):
        missing = MagicMock()
        missing.scalar_one_or_none.return_value = None
        inserted = MagicMock()
        inserted.scalar_one_or_none.return_value = 7
        engine, session = make_engine(run_context)
        session.execute.side_effect = [missing, inserted]

        row_id, created = await engine.find_or_create(Language, {"name": "en"})

        assert (row_id, created) == (7, True)
        assert "RETURNING languages.id" in executed_statements(session)[1]


class TestReads:
    """Test read helpers"""

    @pytest.mark.asyncio
    async def test_count(self, run_context):
        result = MagicMock()
        result.scalar_one.return_value = 18
        engine, _ = make_engine(run_context, execute_result=result)

        assert await engine.count(Language) == 18

    @pytest.mark.asyncio
    async def test_known_ids_are_loaded_once(self, run_context):
        engine, _ = make_engine(run_context)
        engine.oracle.all_ids.return_value = {1, 2}

        assert await engine.exists(EntityKind.TYPE, 1)
        assert not await engine.exists(EntityKind.TYPE, 3)
        assert not await engine.exists(EntityKind.TYPE, None)
        engine.oracle.all_ids.assert_awaited_once_with(EntityKind.TYPE)

    @pytest.mark.asyncio
    async def test_select_failure_is_wrapped(self, run_context):
        engine, session = make_engine(run_context)
        session.execute.side_effect = IntegrityError("SELECT", {}, Exception("boom"))

        with pytest.raises(DatabaseError):
            await engine.select_rows(Language.id)
