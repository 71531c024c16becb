"""In-memory unit of work for testing."""

import asyncio
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator
from uuid import UUID

import logfire
from sqlalchemy.exc import IntegrityError

from qa.domain.error import ConflictingWriteError
from qa.domain.repository import UnitOfWork
from qa.domain.value import TargetType

from . import journal

LockKey = tuple[TargetType, UUID]

# Locks taken by the current task's outermost atomic block
_held: ContextVar[list[LockKey] | None] = ContextVar("inmemory_held_locks", default=None)


class InMemoryUnitOfWork(UnitOfWork):
    """In-memory implementation of UnitOfWork.

    Per-target asyncio locks stand in for SELECT ... FOR UPDATE and are held
    until the outermost atomic block ends. Failed blocks are rolled back from
    the undo journal.
    """

    def __init__(self, lock_timeout_seconds: float = 2.0) -> None:
        self._locks: dict[LockKey, asyncio.Lock] = {}
        self._lock_timeout = lock_timeout_seconds

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        parent = journal.current()
        outermost = parent is None
        held_token = _held.set([]) if outermost else None
        entries, token = journal.open_journal()
        try:
            yield
        except IntegrityError as e:
            journal.rollback(entries)
            logfire.warn("Unit of work rolled back on conflict", error=str(e))
            raise ConflictingWriteError("Concurrent write conflict") from e
        except BaseException:
            journal.rollback(entries)
            raise
        else:
            if parent is not None:
                parent.extend(entries)
        finally:
            journal.close_journal(token)
            if outermost:
                self._release(_held.get() or [])
                _held.reset(held_token)  # type: ignore[arg-type]

    async def lock_target(self, target_type: TargetType, target_id: UUID) -> None:
        held = _held.get()
        if held is None:
            raise RuntimeError("lock_target called outside an atomic block")

        key = (target_type, target_id)
        if key in held:
            return

        lock = self._locks.setdefault(key, asyncio.Lock())
        try:
            await asyncio.wait_for(lock.acquire(), timeout=self._lock_timeout)
        except asyncio.TimeoutError:
            logfire.warn(
                "Timed out waiting for target lock",
                target_type=target_type.value,
                target_id=str(target_id),
            )
            raise ConflictingWriteError(
                f"Timed out waiting for {target_type.value} {target_id}"
            ) from None
        held.append(key)

    def _release(self, held: list[LockKey]) -> None:
        for key in reversed(held):
            self._locks[key].release()
        held.clear()
