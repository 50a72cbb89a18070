"""Tests for the SQL-backed state store (SQLite via aiosqlite)."""

from __future__ import annotations

import asyncio
import json

import pytest

from zenfit.db import make_engine, make_sessionmaker, normalize_url
from zenfit.kernel.persistence import PersistenceQueue
from zenfit.kernel.store import StateStore


@pytest.fixture()
async def sql_store(tmp_path):
    db_engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'state.db'}")
    store = StateStore(make_sessionmaker(db_engine), key="test_state")
    await store.ensure_schema()
    yield store
    await db_engine.dispose()


class TestNormalizeUrl:
    def test_postgres_scheme(self):
        assert normalize_url("postgres://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"

    def test_postgresql_scheme(self):
        assert normalize_url("postgresql://u:p@h/db") == "postgresql+asyncpg://u:p@h/db"

    def test_other_untouched(self):
        assert normalize_url("sqlite+aiosqlite:///x.db") == "sqlite+aiosqlite:///x.db"


class TestStateStore:
    @pytest.mark.asyncio
    async def test_load_absent(self, sql_store):
        assert await sql_store.load() is None

    @pytest.mark.asyncio
    async def test_save_then_load(self, sql_store):
        assert await sql_store.save('{"streak": 1}') is True
        assert await sql_store.load() == '{"streak": 1}'

    @pytest.mark.asyncio
    async def test_overwrite_single_key(self, sql_store):
        await sql_store.save('{"streak": 1}')
        await sql_store.save('{"streak": 2}')
        assert json.loads(await sql_store.load()) == {"streak": 2}

    @pytest.mark.asyncio
    async def test_opaque_payload(self, sql_store):
        await sql_store.save("not even json")
        assert await sql_store.load() == "not even json"

    @pytest.mark.asyncio
    async def test_keys_are_isolated(self, sql_store, tmp_path):
        other = StateStore(sql_store._sessionmaker, key="other_state")
        await sql_store.save("mine")
        assert await other.load() is None

    @pytest.mark.asyncio
    async def test_table_created_on_first_use(self, tmp_path):
        db_engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        store = StateStore(make_sessionmaker(db_engine))
        assert store.schema_ready is False
        assert await store.save("{}") is True
        assert store.schema_ready is True
        assert await store.load() == "{}"
        await db_engine.dispose()

    @pytest.mark.asyncio
    async def test_unreachable_database_degrades(self, tmp_path):
        db_engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing_dir' / 'x.db'}")
        store = StateStore(make_sessionmaker(db_engine))
        assert await store.ensure_schema() is False
        assert await store.load() is None
        assert await store.save("{}") is False
        assert store.schema_ready is False
        await db_engine.dispose()

    @pytest.mark.asyncio
    async def test_recovers_once_database_appears(self, tmp_path):
        folder = tmp_path / "later"
        db_engine = make_engine(f"sqlite+aiosqlite:///{folder / 'x.db'}")
        store = StateStore(make_sessionmaker(db_engine))
        assert await store.save("{}") is False
        folder.mkdir()
        assert await store.save('{"streak": 3}') is True
        assert await store.load() == '{"streak": 3}'
        await db_engine.dispose()

    def test_rejects_bad_table_name(self):
        with pytest.raises(ValueError):
            StateStore(make_sessionmaker(make_engine("sqlite+aiosqlite:///:memory:")), table="x; DROP TABLE y")


class TestQueueAgainstSql:
    @pytest.mark.asyncio
    async def test_last_submitted_snapshot_wins(self, sql_store):
        queue = PersistenceQueue(sql_store)
        for n in range(20):
            queue.submit(json.dumps({"streak": n}))
            if n % 5 == 0:
                await asyncio.sleep(0)
        assert await queue.flush() is True
        assert json.loads(await sql_store.load()) == {"streak": 19}
