"""Domain value objects for the Q&A community."""

from qa.domain.value.identifiers import (
    AnswerId,
    QuestionId,
    UserId,
    VoteId,
)
from qa.domain.value.types import (
    CountDelta,
    SearchTerm,
    TargetType,
    UserRole,
    VoteCounts,
    VoteTransition,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "AnswerId",
    "VoteId",
    # Types
    "VoteType",
    "TargetType",
    "UserRole",
    "VoteCounts",
    "CountDelta",
    "VoteTransition",
    "SearchTerm",
]
