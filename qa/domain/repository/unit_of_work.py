"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from uuid import UUID

from qa.domain.value import TargetType


class UnitOfWork(ABC):
    """Atomic scope for one mutating operation.

    Every write made inside atomic() commits or rolls back together.
    Storage conflicts (duplicate ledger rows, lock timeouts, serialization
    failures) surface as ConflictingWriteError after the rollback.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block. Blocks may nest."""
        pass

    @abstractmethod
    async def lock_target(self, target_type: TargetType, target_id: UUID) -> None:
        """Take the per-target lock for the rest of the current atomic block.

        Waits are bounded; a timeout raises ConflictingWriteError.

        Args:
            target_type: Type of target (question or answer)
            target_id: ID of the target
        """
        pass
