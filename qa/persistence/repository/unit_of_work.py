"""PostgreSQL implementation of the unit of work."""

from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

import logfire
from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from qa.config import VotingSettings
from qa.domain.error import ConflictingWriteError
from qa.domain.repository import UnitOfWork
from qa.domain.value import TargetType
from qa.persistence.tables import answers_table, questions_table

# serialization_failure, deadlock_detected, lock_not_available
CONFLICT_SQLSTATES = {"40001", "40P01", "55P03"}


def _sqlstate(error: DBAPIError) -> str | None:
    orig = error.orig
    state = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if state is None and orig is not None:
        state = getattr(orig.__cause__, "sqlstate", None)
    return state


class PostgresUnitOfWork(UnitOfWork):
    """Unit of work backed by SAVEPOINTs in the request's session.

    Each atomic block is a SAVEPOINT, so a failed block rolls back without
    poisoning the outer transaction and may be retried. When the outermost
    block succeeds the session is committed before control returns to the
    caller, so a response is only built from committed writes and a commit
    failure reaches the caller as an error.
    """

    def __init__(self, session: AsyncSession, settings: VotingSettings) -> None:
        """Initialize unit of work.

        Args:
            session: SQLAlchemy async session (request scoped)
            settings: Voting settings (lock timeout)
        """
        self.session = session
        self.settings = settings
        self._depth = 0

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        outermost = self._depth == 0
        self._depth += 1
        try:
            async with self.session.begin_nested():
                lock_timeout_ms = int(self.settings.lock_timeout_seconds * 1000)
                await self.session.execute(
                    text(f"SET LOCAL lock_timeout = '{lock_timeout_ms}ms'")
                )
                yield
            if outermost:
                await self._commit()
        except IntegrityError as e:
            logfire.warn("Unit of work rolled back on integrity error", error=str(e))
            raise ConflictingWriteError("Concurrent write conflict") from e
        except DBAPIError as e:
            if _sqlstate(e) in CONFLICT_SQLSTATES:
                logfire.warn(
                    "Unit of work rolled back on lock conflict",
                    sqlstate=_sqlstate(e),
                )
                raise ConflictingWriteError("Concurrent write conflict") from e
            logfire.error("Unit of work failed", error=str(e))
            raise
        finally:
            self._depth -= 1

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except DBAPIError:
            await self.session.rollback()
            raise

    async def lock_target(self, target_type: TargetType, target_id: UUID) -> None:
        """Lock the target row until the outermost atomic block commits."""
        table = questions_table if target_type == TargetType.QUESTION else answers_table
        stmt = select(table.c.id).where(table.c.id == target_id).with_for_update()
        await self.session.execute(stmt)
