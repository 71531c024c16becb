"""PostgreSQL implementation of Answer repository."""

from typing import List, Optional

import logfire
from sqlalchemy import asc, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from qa.domain.model import Answer
from qa.domain.repository import AnswerRepository, AnswerSortOrder
from qa.domain.value import AnswerId, CountDelta, QuestionId, SearchTerm, UserId
from qa.persistence.mappers import answer_to_dict, row_to_answer
from qa.persistence.tables import answers_table

a = answers_table.c

SORT_COLUMNS = {
    AnswerSortOrder.NEWEST: [desc(a.created_at)],
    AnswerSortOrder.OLDEST: [asc(a.created_at)],
    AnswerSortOrder.MOST_VOTED: [desc(a.upvote_count - a.downvote_count)],
}


class PostgresAnswerRepository(AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _filtered(self, stmt, search: Optional[SearchTerm], author_id: Optional[UserId]):
        stmt = stmt.where(a.deleted_at.is_(None))
        if search:
            stmt = stmt.where(a.content.ilike(search.like_pattern, escape="\\"))
        if author_id:
            stmt = stmt.where(a.author_id == author_id)
        return stmt

    async def find_by_id(
        self, answer_id: AnswerId, include_deleted: bool = False
    ) -> Optional[Answer]:
        """Find an answer by ID."""
        stmt = select(answers_table).where(a.id == answer_id)
        if not include_deleted:
            stmt = stmt.where(a.deleted_at.is_(None))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_answer(row._asdict()) if row else None

    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find a question's non-deleted answers, highest net votes first."""
        stmt = (
            select(answers_table)
            .where(a.question_id == question_id, a.deleted_at.is_(None))
            .order_by(desc(a.upvote_count - a.downvote_count), asc(a.id))
        )
        result = await self.session.execute(stmt)
        return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def find_accepted(self, question_id: QuestionId) -> Optional[Answer]:
        """Find the accepted answer of a question, if any."""
        stmt = select(answers_table).where(
            a.question_id == question_id,
            a.is_accepted.is_(True),
            a.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_answer(row._asdict()) if row else None

    async def find_all(
        self,
        sort: AnswerSortOrder = AnswerSortOrder.NEWEST,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Answer]:
        """Find answers with filtering, sorting and pagination."""
        with logfire.span(
            "answer_repository.find_all",
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            stmt = self._filtered(select(answers_table), search, author_id)
            stmt = stmt.order_by(*SORT_COLUMNS[sort], asc(a.id))
            stmt = stmt.limit(limit).offset(offset)
            result = await self.session.execute(stmt)
            return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def count(
        self,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count answers matching the given filters."""
        stmt = self._filtered(
            select(func.count()).select_from(answers_table), search, author_id
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_author(self, author_id: UserId) -> List[Answer]:
        """Find all non-deleted answers by an author."""
        stmt = (
            select(answers_table)
            .where(a.author_id == author_id, a.deleted_at.is_(None))
            .order_by(asc(a.id))
        )
        result = await self.session.execute(stmt)
        return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update)."""
        existing = await self.find_by_id(answer.id, include_deleted=True)
        answer_dict = answer_to_dict(answer)

        if existing:
            stmt = update(answers_table).where(a.id == answer.id).values(**answer_dict)
        else:
            stmt = insert(answers_table).values(**answer_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return answer

    async def apply_vote_delta(self, answer_id: AnswerId, delta: CountDelta) -> None:
        """Atomically apply a counter delta (never below zero)."""
        stmt = (
            update(answers_table)
            .where(a.id == answer_id)
            .values(
                upvote_count=func.greatest(a.upvote_count + delta.upvote, 0),
                downvote_count=func.greatest(a.downvote_count + delta.downvote, 0),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_accepted(self, answer_id: AnswerId, accepted: bool) -> None:
        """Set the accepted flag of an answer."""
        stmt = (
            update(answers_table)
            .where(a.id == answer_id)
            .values(is_accepted=accepted, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def soft_delete(self, answer_id: AnswerId) -> None:
        """Mark an answer as deleted."""
        stmt = (
            update(answers_table)
            .where(a.id == answer_id)
            .values(deleted_at=func.now(), updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_content(self, answer_id: AnswerId, content: str) -> None:
        """Replace an answer's body."""
        stmt = (
            update(answers_table)
            .where(a.id == answer_id)
            .values(content=content, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()
