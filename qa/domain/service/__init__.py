"""Domain services."""

from .answer_service import AnswerService
from .base import Service
from .counter_service import CounterService
from .jwt_service import JWTService
from .listing_service import ListingService, parse_role, parse_sort
from .question_service import QuestionService
from .reputation_service import ReputationService
from .user_service import UserService
from .vote_service import VoteService
from .vote_transition import TRANSITIONS, resolve_transition

__all__ = [
    "AnswerService",
    "CounterService",
    "JWTService",
    "ListingService",
    "QuestionService",
    "ReputationService",
    "Service",
    "TRANSITIONS",
    "UserService",
    "VoteService",
    "parse_role",
    "parse_sort",
    "resolve_transition",
]
