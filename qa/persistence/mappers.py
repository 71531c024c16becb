"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from qa.domain.model import Answer, Question, User, Vote
from qa.domain.value import (
    AnswerId,
    QuestionId,
    TargetType,
    UserId,
    UserRole,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        email=row["email"],
        role=UserRole(row["role"]),
        active=row["active"],
        avatar_url=row.get("avatar_url"),
        bio=row.get("bio"),
        reputation=row["reputation"],
        question_count=row["question_count"],
        answer_count=row["answer_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_question(row: Dict[str, Any]) -> Question:
    """Convert database row to Question domain model."""
    return Question(
        id=QuestionId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        content=row["content"],
        upvote_count=row["upvote_count"],
        downvote_count=row["downvote_count"],
        answer_count=row["answer_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def question_to_dict(question: Question) -> Dict[str, Any]:
    """Convert Question domain model to database dict."""
    return question.model_dump()


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer domain model."""
    return Answer(
        id=AnswerId(_uuid(row["id"])),
        question_id=QuestionId(_uuid(row["question_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        upvote_count=row["upvote_count"],
        downvote_count=row["downvote_count"],
        is_accepted=row["is_accepted"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert Answer domain model to database dict."""
    return answer.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        voter_id=UserId(_uuid(row["voter_id"])),
        target_type=TargetType(row["target_type"]),
        target_id=_uuid(row["target_id"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": vote.id,
        "voter_id": vote.voter_id,
        "target_type": vote.target_type.value,
        "target_id": vote.target_id,
        "vote_type": vote.vote_type.value,
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }
