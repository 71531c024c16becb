"""Test configuration and shared helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from dishka import AsyncContainer

from qa.domain.model import Answer, Question, User
from qa.domain.repository import AnswerRepository, QuestionRepository, UserRepository
from qa.domain.value import AnswerId, QuestionId, UserId, UserRole

BASE_TIME = datetime(2025, 1, 15, 12, 0, 0)


async def add_user(
    env: AsyncContainer,
    name: str = "Alice",
    email: str | None = None,
    role: UserRole = UserRole.USER,
    active: bool = True,
    created_at: datetime | None = None,
    **fields,
) -> User:
    """Store a user directly in the repository."""
    user_repo = await env.get(UserRepository)
    created = created_at or BASE_TIME
    user = User(
        id=UserId(uuid4()),
        name=name,
        email=email or f"{name.lower().replace(' ', '.')}.{uuid4().hex[:6]}@example.com",
        role=role,
        active=active,
        created_at=created,
        updated_at=created,
        **fields,
    )
    return await user_repo.save(user)


async def add_question(
    env: AsyncContainer,
    author: User,
    title: str = "How do I invert a binary tree?",
    content: str = "I keep getting a recursion error on large inputs.",
    created_at: datetime | None = None,
    **counters,
) -> Question:
    """Store a question directly, bypassing stats bookkeeping.

    Prefer QuestionService.create_question when the author's counts matter.
    """
    question_repo = await env.get(QuestionRepository)
    created = created_at or BASE_TIME
    question = Question(
        id=QuestionId(uuid4()),
        author_id=author.id,
        title=title,
        content=content,
        created_at=created,
        updated_at=created,
        **counters,
    )
    return await question_repo.save(question)


async def add_answer(
    env: AsyncContainer,
    question: Question,
    author: User,
    content: str = "Use an explicit stack instead of recursion.",
    created_at: datetime | None = None,
    **counters,
) -> Answer:
    """Store an answer directly, bypassing stats bookkeeping."""
    answer_repo = await env.get(AnswerRepository)
    created = created_at or BASE_TIME
    answer = Answer(
        id=AnswerId(uuid4()),
        question_id=question.id,
        author_id=author.id,
        content=content,
        created_at=created,
        updated_at=created,
        **counters,
    )
    return await answer_repo.save(answer)


def minutes(n: int) -> datetime:
    """BASE_TIME shifted by n minutes, for ordering by creation time."""
    return BASE_TIME + timedelta(minutes=n)
