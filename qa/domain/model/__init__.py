"""Domain model entities for the Q&A community."""

from qa.domain.model.answer import Answer
from qa.domain.model.page import Page, PageRequest
from qa.domain.model.question import Question
from qa.domain.model.user import User, UserStats
from qa.domain.model.vote import Vote

__all__ = [
    "User",
    "UserStats",
    "Question",
    "Answer",
    "Vote",
    "Page",
    "PageRequest",
]
