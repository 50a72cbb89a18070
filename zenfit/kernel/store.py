"""Persisted state store — one row, one fixed key, opaque payload.

Table: app_state
  state_key (VARCHAR, primary key), payload (TEXT, the serialized snapshot)

The store never looks inside the payload. Failures are logged and
reported through return values, never raised to the caller. The table is
created on first use when `ensure_schema` could not reach the database.
"""

from __future__ import annotations

import logging
import re

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from zenfit.config import settings

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class StateStore:
    """Async key-value store holding the application snapshot under a single key."""

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        key: str | None = None,
        table: str | None = None,
    ) -> None:
        table = table or settings.state_table
        if not _IDENTIFIER.match(table):
            raise ValueError(f"Invalid table name: {table!r}")
        self._sessionmaker = sessionmaker
        self.key = key or settings.state_key
        self.table = table
        self.schema_ready = False

    async def ensure_schema(self) -> bool:
        """Create the state table if needed. Returns False when storage is unreachable."""
        try:
            async with self._sessionmaker() as session:
                await session.execute(
                    text(
                        f"CREATE TABLE IF NOT EXISTS {self.table} "
                        "(state_key VARCHAR(128) PRIMARY KEY, payload TEXT NOT NULL)"
                    )
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Failed to prepare state table '%s': %s", self.table, exc)
            return False
        self.schema_ready = True
        return True

    async def load(self) -> str | None:
        """Return the stored payload, or None when absent or unreadable."""
        if not self.schema_ready and not await self.ensure_schema():
            return None
        try:
            async with self._sessionmaker() as session:
                result = await session.execute(
                    text(f"SELECT payload FROM {self.table} WHERE state_key = :key"),
                    {"key": self.key},
                )
                row = result.fetchone()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Failed to load state '%s': %s", self.key, exc)
            return None
        if row is None:
            logger.info("No stored state under '%s' (fresh install)", self.key)
            return None
        return row[0]

    async def save(self, payload: str) -> bool:
        """Upsert the whole payload. Returns False on failure."""
        if not self.schema_ready and not await self.ensure_schema():
            return False
        try:
            async with self._sessionmaker() as session:
                await session.execute(
                    text(
                        f"INSERT INTO {self.table} (state_key, payload) VALUES (:key, :payload) "
                        "ON CONFLICT (state_key) DO UPDATE SET payload = excluded.payload"
                    ),
                    {"key": self.key, "payload": payload},
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Failed to save state '%s': %s", self.key, exc)
            return False
        logger.debug("Saved state '%s' (%d bytes)", self.key, len(payload))
        return True
