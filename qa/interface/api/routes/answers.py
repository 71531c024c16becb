"""Answer routes."""

from uuid import UUID

import pydantic
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from qa.application.usecase.answer import (
    AcceptAnswerRequest,
    AcceptAnswerResponse,
    AcceptAnswerUseCase,
    CreateAnswerRequest,
    CreateAnswerResponse,
    CreateAnswerUseCase,
    DeleteAnswerRequest,
    DeleteAnswerResponse,
    DeleteAnswerUseCase,
    GetAnswerRequest,
    GetAnswerResponse,
    GetAnswerUseCase,
    GetQuestionAnswersRequest,
    GetQuestionAnswersResponse,
    GetQuestionAnswersUseCase,
    ListAnswersRequest,
    ListAnswersResponse,
    ListAnswersUseCase,
    UpdateAnswerRequest,
    UpdateAnswerResponse,
    UpdateAnswerUseCase,
)
from qa.domain.error import DomainError
from qa.domain.service import JWTService
from qa.interface.api.session import caller_id
from qa.interface.error import http_error, unexpected_error, validation_error

router = APIRouter(prefix="/qa/answers", tags=["answers"], route_class=DishkaRoute)


class CreateAnswerAPIRequest(BaseModel):
    """API request for answering a question."""

    content: str = Field(min_length=2)


class UpdateAnswerAPIRequest(BaseModel):
    """API request for editing an answer."""

    content: str = Field(min_length=2)


@router.get("/my-answers", response_model=ListAnswersResponse)
async def list_my_answers(
    list_answers_use_case: FromDishka[ListAnswersUseCase],
    jwt_service: FromDishka[JWTService],
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    user_id: UUID | None = Query(default=None, alias="userId"),
    auth_token: str | None = Cookie(default=None),
) -> ListAnswersResponse:
    """List the caller's answers, or another user's when userId is given.

    Requires authentication.
    """
    try:
        return await list_answers_use_case.execute(
            ListAnswersRequest(
                page=page,
                limit=limit,
                search=search,
                sort=sort,
                author_id=str(user_id) if user_id else None,
                viewer_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "List answers")


@router.get("/question/{question_id}", response_model=GetQuestionAnswersResponse)
async def get_question_answers(
    question_id: UUID,
    get_question_answers_use_case: FromDishka[GetQuestionAnswersUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetQuestionAnswersResponse:
    """Answers of a question, highest net votes first."""
    try:
        return await get_question_answers_use_case.execute(
            GetQuestionAnswersRequest(
                question_id=str(question_id),
                viewer_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Get answers")


@router.post(
    "/question/{question_id}",
    response_model=CreateAnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_answer(
    question_id: UUID,
    request: CreateAnswerAPIRequest,
    create_answer_use_case: FromDishka[CreateAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateAnswerResponse:
    """Answer a question.

    Requires authentication.
    """
    try:
        return await create_answer_use_case.execute(
            CreateAnswerRequest(
                question_id=str(question_id),
                content=request.content,
                author_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Create answer")
    except pydantic.ValidationError as e:
        raise validation_error(e, "Create answer")
    except Exception as e:
        raise unexpected_error(e, "create answer")


@router.get("/{answer_id}", response_model=GetAnswerResponse)
async def get_answer(
    answer_id: UUID,
    get_answer_use_case: FromDishka[GetAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetAnswerResponse:
    """Get a single answer with the caller's user_vote_status."""
    try:
        return await get_answer_use_case.execute(
            GetAnswerRequest(
                answer_id=str(answer_id),
                viewer_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Get answer")


@router.put("/{answer_id}", response_model=UpdateAnswerResponse)
async def update_answer(
    answer_id: UUID,
    request: UpdateAnswerAPIRequest,
    update_answer_use_case: FromDishka[UpdateAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateAnswerResponse:
    """Edit an answer's content. Only the author may edit.

    Requires authentication.
    """
    try:
        return await update_answer_use_case.execute(
            UpdateAnswerRequest(
                answer_id=str(answer_id),
                content=request.content,
                user_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Update answer")
    except pydantic.ValidationError as e:
        raise validation_error(e, "Update answer")


@router.delete("/{answer_id}", response_model=DeleteAnswerResponse)
async def delete_answer(
    answer_id: UUID,
    delete_answer_use_case: FromDishka[DeleteAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteAnswerResponse:
    """Delete an answer. Only the author may delete.

    Requires authentication.
    """
    try:
        return await delete_answer_use_case.execute(
            DeleteAnswerRequest(
                answer_id=str(answer_id),
                user_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Delete answer")


@router.post("/{answer_id}/accept", response_model=AcceptAnswerResponse)
async def accept_answer(
    answer_id: UUID,
    accept_answer_use_case: FromDishka[AcceptAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptAnswerResponse:
    """Accept an answer, or un-accept it if it is already accepted.

    Only the question's author may accept. A question has at most one
    accepted answer; accepting another moves the bonus to it.

    Requires authentication.
    """
    try:
        return await accept_answer_use_case.execute(
            AcceptAnswerRequest(
                answer_id=str(answer_id),
                user_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Accept answer")
