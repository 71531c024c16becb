"""In-memory repository implementations for testing."""

from .answer import InMemoryAnswerRepository
from .question import InMemoryQuestionRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryAnswerRepository",
    "InMemoryQuestionRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
