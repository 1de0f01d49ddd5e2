"""Shared plumbing for the store adapters."""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, ClassVar, Self

from sqlalchemy import func, select, text
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from library_service.core.exceptions import AppException, StoreOperationError
from library_service.infra.metrics.tracking import track_store_error, track_store_operation

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping, Sequence

    from sqlalchemy import MetaData, Table

    from library_service.core.settings.stores import StoreSettingsBase

logger = logging.getLogger(__name__)


class BaseStore:
    """One store, one engine, one table.

    Subclasses set ``name``, ``metadata`` and ``table``. Every public call runs
    inside :meth:`_operation`, which times it and wraps driver faults in
    :class:`StoreOperationError`. Application exceptions raised inside pass
    through untouched.

    Stores that set ``serialized = True`` additionally funnel every call
    through one ``asyncio.Lock``; their methods must not nest operations.
    """

    name: ClassVar[str]
    metadata: ClassVar[MetaData]
    table: ClassVar[Table]
    serialized: ClassVar[bool] = False

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._lock = asyncio.Lock() if self.serialized else None

    @classmethod
    def from_settings(cls, settings: StoreSettingsBase) -> Self:
        engine = create_async_engine(settings.url, **settings.sqlalchemy_engine_kwargs())
        return cls(engine)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    @asynccontextmanager
    async def _operation(self, operation: str) -> AsyncIterator[None]:
        start = time.perf_counter()
        try:
            if self._lock is not None:
                async with self._lock:
                    yield
            else:
                yield
        except AppException:
            raise
        except (SQLAlchemyError, OSError) as exc:
            track_store_error(self.name, operation)
            logger.warning(
                "Store operation failed",
                extra={"store": self.name, "operation": operation, "error": str(exc)},
            )
            raise StoreOperationError(self.name, operation, exc) from exc
        finally:
            track_store_operation(self.name, operation, time.perf_counter() - start)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        """Yield a connection inside a transaction.

        Commits when the block exits normally and rolls back on any exception,
        which is then re-raised.
        """
        async with self._operation("transaction"), self.engine.begin() as conn:
            yield conn

    async def ping(self) -> None:
        """Run ``SELECT 1``; raises :class:`StoreOperationError` when unreachable."""
        async with self._operation("ping"), self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        async with self._operation("create_schema"), self.engine.begin() as conn:
            await conn.run_sync(self.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def count(self) -> int:
        async with self._operation("count"), self.engine.connect() as conn:
            result = await conn.execute(select(func.count()).select_from(self.table))
            return int(result.scalar_one())

    async def upsert_many(self, rows: Sequence[Mapping[str, Any]]) -> int:
        """Insert or overwrite ``rows`` by primary key in one transaction."""
        if not rows:
            return 0
        async with self._operation("upsert_many"), self.engine.begin() as conn:
            await conn.execute(self._upsert_statement(), [dict(row) for row in rows])
        return len(rows)

    async def resync_id_sequence(self) -> None:
        """Move the store's id counter past the highest id in the table.

        Needed after rows were written with caller-supplied ids, which do not
        advance the counter.
        """
        async with self._operation("resync_id_sequence"), self.engine.begin() as conn:
            await self._resync_id_sequence(conn)

    async def _resync_id_sequence(self, conn: AsyncConnection) -> None:
        table_name = self.table.name
        if self.dialect == "postgresql":
            # Held until commit; resyncs of one table run one at a time.
            await conn.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:table))"),
                {"table": table_name},
            )
            # The sequence only moves forward.
            await conn.execute(
                text(
                    "WITH seq AS (SELECT pg_get_serial_sequence(:table, 'id')::regclass AS oid) "
                    "SELECT setval(seq.oid, GREATEST("
                    f"(SELECT COALESCE(MAX(id), 0) FROM {table_name}) + 1, "
                    "COALESCE(pg_sequence_last_value(seq.oid) + 1, 1)), false) FROM seq"
                ),
                {"table": table_name},
            )
        elif self.dialect in {"mysql", "mariadb"}:
            result = await conn.execute(select(func.coalesce(func.max(self.table.c.id), 0)))
            next_id = int(result.scalar_one()) + 1
            # DDL takes no bind parameters.
            await conn.execute(text(f"ALTER TABLE {table_name} AUTO_INCREMENT = {next_id}"))
        # SQLite INTEGER PRIMARY KEY always continues from MAX(id).

    def _upsert_statement(self) -> Any:
        updatable = [column.name for column in self.table.columns if not column.primary_key]
        if self.dialect in {"mysql", "mariadb"}:
            stmt = mysql.insert(self.table)
            return stmt.on_duplicate_key_update({name: stmt.inserted[name] for name in updatable})
        dialect_module = postgresql if self.dialect == "postgresql" else sqlite
        stmt = dialect_module.insert(self.table)
        return stmt.on_conflict_do_update(
            index_elements=[self.table.c.id],
            set_={name: stmt.excluded[name] for name in updatable},
        )
