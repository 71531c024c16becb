"""List answers use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from qa.domain.error import UnauthorizedError
from qa.domain.repository import AnswerSortOrder
from qa.domain.service import ListingService, UserService, VoteService, parse_sort
from qa.domain.value import SearchTerm, TargetType, UserId

from ..common import AnswerItem, QAPagination, build_answer_items


class ListAnswersRequest(BaseModel):
    """List a user's answers (my-answers)."""

    page: str | None = None
    limit: str | None = None
    search: str | None = None
    sort: str | None = None
    author_id: str | None = None  # userId query param, defaults to the caller
    viewer_id: str | None = None  # Current user ID (if authenticated)


class ListAnswersResponse(BaseModel):
    """Q&A envelope."""

    success: bool = True
    data: list[AnswerItem]
    pagination: QAPagination


class ListAnswersUseCase:
    """Use case for paging through a user's answers."""

    def __init__(
        self,
        listing_service: ListingService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        """Initialize list answers use case.

        Args:
            listing_service: Listing domain service
            vote_service: Vote domain service
            user_service: User domain service
        """
        self.listing_service = listing_service
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: ListAnswersRequest) -> ListAnswersResponse:
        """Execute list answers flow.

        Raises:
            UnauthorizedError: If the caller is not signed in
        """
        if not request.viewer_id:
            raise UnauthorizedError("list answers")
        viewer_id = UserId(UUID(request.viewer_id))
        author_id = UserId(UUID(request.author_id)) if request.author_id else viewer_id

        page_request = self.listing_service.page_request(request.page, request.limit)
        sort = parse_sort(AnswerSortOrder, request.sort, AnswerSortOrder.NEWEST)

        with logfire.span(
            "list_answers.execute",
            author_id=str(author_id),
            page=page_request.page,
            sort=sort.value,
        ):
            page = await self.listing_service.list_answers(
                page_request,
                sort=sort,
                search=SearchTerm.from_optional(request.search),
                author_id=author_id,
            )
            statuses = await self.vote_service.get_vote_statuses(
                viewer_id, TargetType.ANSWER, [answer.id for answer in page.items]
            )
            authors = await self.user_service.get_users_by_ids(
                [answer.author_id for answer in page.items]
            )
            return ListAnswersResponse(
                data=build_answer_items(page.items, authors, statuses),
                pagination=QAPagination.from_page(page),
            )
