"""Read models and pagination envelopes shared by the Q&A use cases."""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from qa.domain.model import Answer, Page, Question, User
from qa.domain.value import UserId, VoteType


class AuthorSummary(BaseModel):
    """Public author info shown next to content."""

    id: str
    name: str
    avatar_url: str | None = None
    reputation: int = 0

    @classmethod
    def from_user(cls, user: User | None, user_id: UserId) -> "AuthorSummary":
        if user is None:
            # Author row missing, keep the item renderable
            return cls(id=str(user_id), name="Unknown")
        return cls(
            id=str(user.id),
            name=user.name,
            avatar_url=user.avatar_url,
            reputation=user.reputation,
        )


class QuestionItem(BaseModel):
    """Question in a listing or detail response."""

    id: str
    title: str
    content: str
    author: AuthorSummary
    upvote_count: int
    downvote_count: int
    net_votes: int
    answer_count: int
    created_at: datetime
    updated_at: datetime
    user_vote_status: VoteType | None = None


class AnswerItem(BaseModel):
    """Answer in a listing or detail response."""

    id: str
    question_id: str
    content: str
    author: AuthorSummary
    upvote_count: int
    downvote_count: int
    net_votes: int
    is_accepted: bool
    created_at: datetime
    updated_at: datetime
    user_vote_status: VoteType | None = None


def build_question_items(
    questions: Sequence[Question],
    authors: dict[UserId, User],
    vote_statuses: dict[UUID, VoteType],
) -> list[QuestionItem]:
    """Combine questions with their authors and the caller's votes."""
    return [
        QuestionItem(
            id=str(question.id),
            title=question.title,
            content=question.content,
            author=AuthorSummary.from_user(
                authors.get(question.author_id), question.author_id
            ),
            upvote_count=question.upvote_count,
            downvote_count=question.downvote_count,
            net_votes=question.net_votes,
            answer_count=question.answer_count,
            created_at=question.created_at,
            updated_at=question.updated_at,
            user_vote_status=vote_statuses.get(question.id),
        )
        for question in questions
    ]


def build_answer_items(
    answers: Sequence[Answer],
    authors: dict[UserId, User],
    vote_statuses: dict[UUID, VoteType],
) -> list[AnswerItem]:
    """Combine answers with their authors and the caller's votes."""
    return [
        AnswerItem(
            id=str(answer.id),
            question_id=str(answer.question_id),
            content=answer.content,
            author=AuthorSummary.from_user(
                authors.get(answer.author_id), answer.author_id
            ),
            upvote_count=answer.upvote_count,
            downvote_count=answer.downvote_count,
            net_votes=answer.net_votes,
            is_accepted=answer.is_accepted,
            created_at=answer.created_at,
            updated_at=answer.updated_at,
            user_vote_status=vote_statuses.get(answer.id),
        )
        for answer in answers
    ]


class QAPagination(BaseModel):
    """Pagination block of the Q&A envelope (snake_case)."""

    current_page: int
    per_page: int
    total: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> "QAPagination":
        return cls(
            current_page=page.current_page,
            per_page=page.page_size,
            total=page.total_items,
            total_pages=page.total_pages,
        )


class DirectoryPagination(BaseModel):
    """Pagination block of the user directory envelope (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_items: int = Field(alias="totalItems")
    items_per_page: int = Field(alias="itemsPerPage")

    @classmethod
    def from_page(cls, page: Page) -> "DirectoryPagination":
        return cls(
            current_page=page.current_page,
            total_pages=page.total_pages,
            total_items=page.total_items,
            items_per_page=page.page_size,
        )
