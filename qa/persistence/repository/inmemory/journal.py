"""Undo journal for the in-memory repositories.

Each atomic block of InMemoryUnitOfWork opens a journal in a context
variable. Repositories record how to undo every mutation they make; a
failed block replays the journal backwards, so a rollback leaves ledger,
counters and statistics exactly as they were. Undo entries revert only
the change they recorded, never whole rows, so writes committed by other
tasks in the meantime survive.
"""

from contextvars import ContextVar
from typing import Callable

UndoFn = Callable[[], None]

_journal: ContextVar[list[UndoFn] | None] = ContextVar(
    "inmemory_undo_journal", default=None
)


def record(undo: UndoFn) -> None:
    """Record an undo step if an atomic block is open."""
    entries = _journal.get()
    if entries is not None:
        entries.append(undo)


def current() -> list[UndoFn] | None:
    return _journal.get()


def open_journal() -> tuple[list[UndoFn], object]:
    """Start a new journal for an atomic block; returns (entries, reset token)."""
    entries: list[UndoFn] = []
    return entries, _journal.set(entries)


def close_journal(token: object) -> None:
    _journal.reset(token)  # type: ignore[arg-type]


def rollback(entries: list[UndoFn]) -> None:
    """Undo the recorded mutations, newest first."""
    for undo in reversed(entries):
        undo()
    entries.clear()
