"""List questions use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.repository import QuestionSortOrder
from qa.domain.service import (
    ListingService,
    UserService,
    VoteService,
    parse_sort,
)
from qa.domain.value import SearchTerm, TargetType, UserId

from ..common import QAPagination, QuestionItem, build_question_items


class ListQuestionsRequest(BaseModel):
    """List questions request.

    Query values arrive untrusted; bad page, limit and sort values degrade
    to defaults instead of failing.
    """

    page: str | None = None
    limit: str | None = None
    search: str | None = None
    sort: str | None = None
    author_id: str | None = None  # Filter by author (userId query param)
    mine: bool = False  # Caller's own questions unless author_id is given
    viewer_id: str | None = None  # Current user ID (if authenticated)


class ListQuestionsResponse(BaseModel):
    """Q&A envelope."""

    success: bool = True
    data: list[QuestionItem]
    pagination: QAPagination


class ListQuestionsUseCase:
    """Use case for listing questions with search, sorting and pagination."""

    def __init__(
        self,
        listing_service: ListingService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        """Initialize list questions use case.

        Args:
            listing_service: Listing domain service
            vote_service: Vote domain service (caller's vote statuses)
            user_service: User domain service (authors)
        """
        self.listing_service = listing_service
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Raises:
            UnauthorizedError: If listing "mine" without being signed in
        """
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None

        author_id = UserId(UUID(request.author_id)) if request.author_id else None
        if request.mine and author_id is None:
            if viewer_id is None:
                raise UnauthorizedError("list your questions")
            author_id = viewer_id

        page_request = self.listing_service.page_request(request.page, request.limit)
        sort = parse_sort(QuestionSortOrder, request.sort, QuestionSortOrder.NEWEST)

        with logfire.span(
            "list_questions.execute",
            page=page_request.page,
            limit=page_request.limit,
            sort=sort.value,
            search=request.search,
        ):
            page = await self.listing_service.list_questions(
                page_request,
                sort=sort,
                search=SearchTerm.from_optional(request.search),
                author_id=author_id,
            )

            # Batch lookups to avoid N+1
            question_ids = [question.id for question in page.items]
            statuses = await self.vote_service.get_vote_statuses(
                viewer_id, TargetType.QUESTION, question_ids
            )
            authors = await self.user_service.get_users_by_ids(
                [question.author_id for question in page.items]
            )

            return ListQuestionsResponse(
                data=build_question_items(page.items, authors, statuses),
                pagination=QAPagination.from_page(page),
            )
