"""PostgreSQL implementation of Question repository."""

from typing import List, Optional, Sequence

import logfire
from sqlalchemy import asc, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from qa.domain.model import Question
from qa.domain.repository import QuestionRepository, QuestionSortOrder
from qa.domain.value import CountDelta, QuestionId, SearchTerm, UserId
from qa.persistence.mappers import question_to_dict, row_to_question
from qa.persistence.tables import questions_table

q = questions_table.c

SORT_COLUMNS = {
    QuestionSortOrder.NEWEST: [desc(q.created_at)],
    QuestionSortOrder.OLDEST: [asc(q.created_at)],
    QuestionSortOrder.MOST_VOTED: [desc(q.upvote_count - q.downvote_count)],
    QuestionSortOrder.MOST_ANSWERED: [desc(q.answer_count)],
}


class PostgresQuestionRepository(QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _filtered(self, stmt, search: Optional[SearchTerm], author_id: Optional[UserId]):
        stmt = stmt.where(q.deleted_at.is_(None))
        if search:
            stmt = stmt.where(q.title.ilike(search.like_pattern, escape="\\"))
        if author_id:
            stmt = stmt.where(q.author_id == author_id)
        return stmt

    async def find_by_id(
        self, question_id: QuestionId, include_deleted: bool = False
    ) -> Optional[Question]:
        """Find a question by ID."""
        stmt = select(questions_table).where(q.id == question_id)
        if not include_deleted:
            stmt = stmt.where(q.deleted_at.is_(None))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_question(row._asdict()) if row else None

    async def find_by_ids(self, question_ids: Sequence[QuestionId]) -> List[Question]:
        """Find several questions at once (deleted ones included)."""
        if not question_ids:
            return []
        stmt = select(questions_table).where(q.id.in_(question_ids))
        result = await self.session.execute(stmt)
        return [row_to_question(row._asdict()) for row in result.fetchall()]

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering, sorting and pagination."""
        with logfire.span(
            "question_repository.find_all",
            sort=sort.value,
            search=search.root if search else None,
            limit=limit,
            offset=offset,
        ):
            stmt = self._filtered(select(questions_table), search, author_id)
            # Ties broken by id so pages never overlap
            stmt = stmt.order_by(*SORT_COLUMNS[sort], asc(q.id))
            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            questions = [row_to_question(row._asdict()) for row in result.fetchall()]
            logfire.info("Found questions", count=len(questions))
            return questions

    async def count(
        self,
        search: Optional[SearchTerm] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count questions matching the given filters."""
        stmt = self._filtered(
            select(func.count()).select_from(questions_table), search, author_id
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_author(self, author_id: UserId) -> List[Question]:
        """Find all non-deleted questions by an author."""
        stmt = (
            select(questions_table)
            .where(q.author_id == author_id, q.deleted_at.is_(None))
            .order_by(asc(q.id))
        )
        result = await self.session.execute(stmt)
        return [row_to_question(row._asdict()) for row in result.fetchall()]

    async def save(self, question: Question) -> Question:
        """Save a question (create or update)."""
        with logfire.span("question_repository.save", question_id=str(question.id)):
            existing = await self.find_by_id(question.id, include_deleted=True)
            question_dict = question_to_dict(question)

            if existing:
                stmt = (
                    update(questions_table)
                    .where(q.id == question.id)
                    .values(**question_dict)
                )
            else:
                stmt = insert(questions_table).values(**question_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return question

    async def apply_vote_delta(self, question_id: QuestionId, delta: CountDelta) -> None:
        """Atomically apply a counter delta (never below zero)."""
        stmt = (
            update(questions_table)
            .where(q.id == question_id)
            .values(
                upvote_count=func.greatest(q.upvote_count + delta.upvote, 0),
                downvote_count=func.greatest(q.downvote_count + delta.downvote, 0),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def adjust_answer_count(self, question_id: QuestionId, delta: int) -> None:
        """Atomically change answer_count by delta (minimum 0)."""
        stmt = (
            update(questions_table)
            .where(q.id == question_id)
            .values(answer_count=func.greatest(q.answer_count + delta, 0))
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def soft_delete(self, question_id: QuestionId) -> None:
        """Mark a question as deleted."""
        stmt = (
            update(questions_table)
            .where(q.id == question_id)
            .values(deleted_at=func.now(), updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_content(
        self, question_id: QuestionId, title: str, content: str
    ) -> None:
        """Replace a question's title and body."""
        stmt = (
            update(questions_table)
            .where(q.id == question_id)
            .values(title=title, content=content, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()
