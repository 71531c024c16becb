"""Unit tests for the commit boundary of the PostgreSQL unit of work."""

from contextlib import asynccontextmanager
from uuid import uuid4

import pytest
from sqlalchemy.exc import DBAPIError

from qa.config import VotingSettings
from qa.domain.error import ConflictingWriteError
from qa.domain.value import TargetType
from qa.persistence.repository.unit_of_work import PostgresUnitOfWork


class SerializationFailure(Exception):
    sqlstate = "40001"


class RecordingSession:
    """Stands in for AsyncSession and records the transaction calls made."""

    def __init__(self, commit_error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self.commit_error = commit_error

    @asynccontextmanager
    async def begin_nested(self):
        self.calls.append("savepoint")
        try:
            yield
        except BaseException:
            self.calls.append("rollback to savepoint")
            raise
        self.calls.append("release savepoint")

    async def execute(self, stmt):
        self.calls.append("execute")

    async def commit(self):
        self.calls.append("commit")
        if self.commit_error is not None:
            raise self.commit_error

    async def rollback(self):
        self.calls.append("rollback")


class TestCommitBoundary:
    """Writes are committed when the outermost atomic block ends."""

    @pytest.mark.asyncio
    async def test_outermost_block_commits_once(self):
        session = RecordingSession()
        uow = PostgresUnitOfWork(session, VotingSettings())

        async with uow.atomic():
            await uow.lock_target(TargetType.QUESTION, uuid4())
            async with uow.atomic():
                await uow.lock_target(TargetType.ANSWER, uuid4())
            assert "commit" not in session.calls

        assert session.calls.count("commit") == 1
        assert session.calls[-1] == "commit"

    @pytest.mark.asyncio
    async def test_failed_block_does_not_commit(self):
        session = RecordingSession()
        uow = PostgresUnitOfWork(session, VotingSettings())

        with pytest.raises(RuntimeError):
            async with uow.atomic():
                raise RuntimeError("boom")

        assert "rollback to savepoint" in session.calls
        assert "commit" not in session.calls

    @pytest.mark.asyncio
    async def test_commit_conflict_reaches_caller(self):
        failure = DBAPIError("COMMIT", None, SerializationFailure())
        session = RecordingSession(commit_error=failure)
        uow = PostgresUnitOfWork(session, VotingSettings())

        with pytest.raises(ConflictingWriteError):
            async with uow.atomic():
                await uow.lock_target(TargetType.QUESTION, uuid4())

        assert session.calls[-2:] == ["commit", "rollback"]

    @pytest.mark.asyncio
    async def test_next_block_commits_again(self):
        session = RecordingSession()
        uow = PostgresUnitOfWork(session, VotingSettings())

        async with uow.atomic():
            pass
        async with uow.atomic():
            pass

        assert session.calls.count("commit") == 2
