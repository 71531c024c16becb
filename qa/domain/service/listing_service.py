"""Listing domain service.

Paginated, sorted and search-filtered read models over questions, answers
and users. Filters and search are applied before pagination, and the page
and the total always use the same predicate.
"""

from enum import Enum
from typing import TypeVar

import logfire

from qa.config import PaginationSettings
from qa.domain.model import Answer, Page, PageRequest, Question, User
from qa.domain.repository import (
    AnswerRepository,
    AnswerSortOrder,
    QuestionRepository,
    QuestionSortOrder,
    UserRepository,
    UserSortOrder,
)
from qa.domain.value import SearchTerm, UserId, UserRole

from .base import Service

SortT = TypeVar("SortT", bound=Enum)


def parse_sort(sort_type: type[SortT], value: str | None, default: SortT) -> SortT:
    """Parse an untrusted sort key.

    A missing sort uses the listing's default; an unknown one falls back to
    "newest" (every sort enum has it).
    """
    if value is None or not value.strip():
        return default
    try:
        return sort_type(value.strip().lower())
    except ValueError:
        logfire.info("Unknown sort order, using newest", sort=value)
        return sort_type("newest")


def parse_role(value: str | None) -> UserRole | None:
    """Parse a role filter; "all", blank and unknown values mean no filter."""
    if value is None:
        return None
    try:
        return UserRole(value.strip().lower())
    except ValueError:
        return None


class ListingService(Service):
    """Domain service for paginated listings."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_repository: UserRepository,
        settings: PaginationSettings,
    ) -> None:
        """Initialize listing service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            user_repository: User repository
            settings: Page size defaults and cap
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.user_repository = user_repository
        self.settings = settings

    def page_request(
        self, page: object, limit: object, admin: bool = False
    ) -> PageRequest:
        """Build a page request from query values, degrading bad input."""
        default_limit = (
            self.settings.admin_default_limit if admin else self.settings.default_limit
        )
        return PageRequest.parse(
            page, limit, default_limit=default_limit, max_limit=self.settings.max_limit
        )

    async def list_questions(
        self,
        request: PageRequest,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        search: SearchTerm | None = None,
        author_id: UserId | None = None,
    ) -> Page[Question]:
        """List non-deleted questions.

        Args:
            request: Page to fetch
            sort: Sort order
            search: Case-insensitive title search
            author_id: Only questions by this author

        Returns:
            The requested page
        """
        with logfire.span(
            "listing_service.list_questions",
            page=request.page,
            limit=request.limit,
            sort=sort.value,
        ):
            questions = await self.question_repository.find_all(
                sort=sort,
                search=search,
                author_id=author_id,
                limit=request.limit,
                offset=request.offset,
            )
            total = await self.question_repository.count(
                search=search, author_id=author_id
            )
            logfire.info("Questions listed", count=len(questions), total=total)
            return Page[Question].build(questions, total, request)

    async def list_answers(
        self,
        request: PageRequest,
        sort: AnswerSortOrder = AnswerSortOrder.NEWEST,
        search: SearchTerm | None = None,
        author_id: UserId | None = None,
    ) -> Page[Answer]:
        """List non-deleted answers (content search, optional author filter)."""
        with logfire.span(
            "listing_service.list_answers",
            page=request.page,
            limit=request.limit,
            sort=sort.value,
        ):
            answers = await self.answer_repository.find_all(
                sort=sort,
                search=search,
                author_id=author_id,
                limit=request.limit,
                offset=request.offset,
            )
            total = await self.answer_repository.count(
                search=search, author_id=author_id
            )
            return Page[Answer].build(answers, total, request)

    async def list_users(
        self,
        request: PageRequest,
        sort: UserSortOrder = UserSortOrder.REPUTATION,
        search: SearchTerm | None = None,
        search_email: bool = False,
        active: bool | None = True,
        role: UserRole | None = None,
    ) -> Page[User]:
        """List users.

        The community directory searches names of active users; the admin
        listing also searches emails and filters by active flag and role.

        Args:
            request: Page to fetch
            sort: Sort order
            search: Case-insensitive search
            search_email: Whether the search also matches email
            active: Active flag filter (None for all)
            role: Role filter (None for all)

        Returns:
            The requested page
        """
        with logfire.span(
            "listing_service.list_users",
            page=request.page,
            limit=request.limit,
            sort=sort.value,
        ):
            users = await self.user_repository.find_all(
                sort=sort,
                search=search,
                search_email=search_email,
                active=active,
                role=role,
                limit=request.limit,
                offset=request.offset,
            )
            total = await self.user_repository.count(
                search=search, search_email=search_email, active=active, role=role
            )
            return Page[User].build(users, total, request)
