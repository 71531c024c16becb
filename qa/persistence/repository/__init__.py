"""PostgreSQL repository implementations."""

from qa.persistence.repository.answer import PostgresAnswerRepository
from qa.persistence.repository.question import PostgresQuestionRepository
from qa.persistence.repository.unit_of_work import PostgresUnitOfWork
from qa.persistence.repository.user import PostgresUserRepository
from qa.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresAnswerRepository",
    "PostgresQuestionRepository",
    "PostgresUnitOfWork",
    "PostgresUserRepository",
    "PostgresVoteRepository",
]
