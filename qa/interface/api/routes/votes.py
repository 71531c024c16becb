"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel, ConfigDict, Field

from qa.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetVoteStatusRequest,
    GetVoteStatusResponse,
    GetVoteStatusUseCase,
)
from qa.domain.error import DomainError
from qa.domain.service import JWTService
from qa.domain.value import TargetType
from qa.interface.api.session import caller_id
from qa.interface.error import http_error

router = APIRouter(prefix="/qa", tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """Body of the generic vote endpoint."""

    target_id: UUID
    target_type: TargetType
    vote_type: str


class TargetVoteAPIRequest(BaseModel):
    """Body of the per-target vote endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    vote_type: str = Field(alias="voteType")


async def _cast(
    use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
    target_type: TargetType,
    target_id: UUID,
    vote_type: str,
) -> CastVoteResponse:
    try:
        return await use_case.execute(
            CastVoteRequest(
                target_type=target_type,
                target_id=str(target_id),
                vote_type=vote_type,
                voter_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Vote")


async def _status(
    use_case: GetVoteStatusUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
    target_type: TargetType,
    target_id: UUID,
) -> GetVoteStatusResponse:
    try:
        return await use_case.execute(
            GetVoteStatusRequest(
                target_type=target_type,
                target_id=str(target_id),
                voter_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Vote status")


@router.post("/votes", response_model=CastVoteResponse)
async def cast_vote(
    request: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on a question or answer.

    Voting the same way twice retracts the vote; voting the other way
    switches it. The response carries no counts: clients refresh them from
    the next listing. The vote is committed before the response is built,
    so a success response means the vote is durable; a commit conflict
    that persists after the retry answers 409.

    Requires authentication.

    Example:
        POST /qa/votes
        Cookie: auth_token=...

        Request:
        {
            "target_id": "123e4567-e89b-12d3-a456-426614174000",
            "target_type": "answer",
            "vote_type": "upvote"
        }

        Response:
        {"success": true, "message": "Vote recorded", "vote_status": "upvote"}
    """
    return await _cast(
        cast_vote_use_case,
        jwt_service,
        auth_token,
        request.target_type,
        request.target_id,
        request.vote_type,
    )


@router.post("/questions/{question_id}/vote", response_model=CastVoteResponse)
async def vote_on_question(
    question_id: UUID,
    request: TargetVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on a question. Body: {"voteType": "upvote" | "downvote"}."""
    return await _cast(
        cast_vote_use_case,
        jwt_service,
        auth_token,
        TargetType.QUESTION,
        question_id,
        request.vote_type,
    )


@router.post("/answers/{answer_id}/vote", response_model=CastVoteResponse)
async def vote_on_answer(
    answer_id: UUID,
    request: TargetVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on an answer. Body: {"voteType": "upvote" | "downvote"}."""
    return await _cast(
        cast_vote_use_case,
        jwt_service,
        auth_token,
        TargetType.ANSWER,
        answer_id,
        request.vote_type,
    )


@router.get("/questions/{question_id}/vote-status", response_model=GetVoteStatusResponse)
async def question_vote_status(
    question_id: UUID,
    get_vote_status_use_case: FromDishka[GetVoteStatusUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetVoteStatusResponse:
    """The caller's current vote on a question. Requires authentication."""
    return await _status(
        get_vote_status_use_case,
        jwt_service,
        auth_token,
        TargetType.QUESTION,
        question_id,
    )


@router.get("/answers/{answer_id}/vote-status", response_model=GetVoteStatusResponse)
async def answer_vote_status(
    answer_id: UUID,
    get_vote_status_use_case: FromDishka[GetVoteStatusUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetVoteStatusResponse:
    """The caller's current vote on an answer. Requires authentication."""
    return await _status(
        get_vote_status_use_case,
        jwt_service,
        auth_token,
        TargetType.ANSWER,
        answer_id,
    )
