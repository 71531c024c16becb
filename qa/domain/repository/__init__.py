"""Repository interfaces for the Q&A domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from qa.domain.repository.answer import AnswerRepository, AnswerSortOrder
from qa.domain.repository.question import QuestionRepository, QuestionSortOrder
from qa.domain.repository.unit_of_work import UnitOfWork
from qa.domain.repository.user import UserRepository, UserSortOrder
from qa.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "UserSortOrder",
    "QuestionRepository",
    "QuestionSortOrder",
    "AnswerRepository",
    "AnswerSortOrder",
    "VoteRepository",
    "UnitOfWork",
]
