"""Question routes."""

from uuid import UUID

import pydantic
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from qa.application.usecase.question import (
    CreateQuestionRequest,
    CreateQuestionResponse,
    CreateQuestionUseCase,
    DeleteQuestionRequest,
    DeleteQuestionResponse,
    DeleteQuestionUseCase,
    GetQuestionRequest,
    GetQuestionResponse,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
    UpdateQuestionRequest,
    UpdateQuestionResponse,
    UpdateQuestionUseCase,
)
from qa.domain.error import DomainError
from qa.domain.service import JWTService
from qa.interface.api.session import caller_id
from qa.interface.error import http_error, unexpected_error, validation_error

router = APIRouter(prefix="/qa/questions", tags=["questions"], route_class=DishkaRoute)


class CreateQuestionAPIRequest(BaseModel):
    """API request for asking a question."""

    title: str = Field(min_length=10, max_length=255)
    content: str = Field(min_length=20)


class UpdateQuestionAPIRequest(BaseModel):
    """API request for editing a question. Omitted fields are kept."""

    title: str | None = Field(default=None, min_length=10, max_length=255)
    content: str | None = Field(default=None, min_length=20)


@router.get("", response_model=ListQuestionsResponse)
async def list_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    user_id: UUID | None = Query(default=None, alias="userId"),
    auth_token: str | None = Cookie(default=None),
) -> ListQuestionsResponse:
    """List questions.

    Query parameters are forgiving: a bad page means page 1, a bad limit
    means the default page size, an unknown sort means newest first.

    Example:
        GET /qa/questions?page=2&limit=10&sort=most_voted&search=graph

        Response:
        {
            "success": true,
            "data": [...],
            "pagination": {
                "current_page": 2,
                "per_page": 10,
                "total": 25,
                "total_pages": 3
            }
        }
    """
    try:
        return await list_questions_use_case.execute(
            ListQuestionsRequest(
                page=page,
                limit=limit,
                search=search,
                sort=sort,
                author_id=str(user_id) if user_id else None,
                viewer_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "List questions")


@router.get("/my-questions", response_model=ListQuestionsResponse)
async def list_my_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    user_id: UUID | None = Query(default=None, alias="userId"),
    auth_token: str | None = Cookie(default=None),
) -> ListQuestionsResponse:
    """List the caller's questions, or another user's when userId is given."""
    try:
        return await list_questions_use_case.execute(
            ListQuestionsRequest(
                page=page,
                limit=limit,
                search=search,
                sort=sort,
                author_id=str(user_id) if user_id else None,
                mine=True,
                viewer_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "List my questions")


@router.get("/{question_id}", response_model=GetQuestionResponse)
async def get_question(
    question_id: UUID,
    get_question_use_case: FromDishka[GetQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetQuestionResponse:
    """Get a question with its answers.

    Answers are ordered by net votes, highest first. When signed in, every
    item carries the caller's user_vote_status.
    """
    try:
        return await get_question_use_case.execute(
            GetQuestionRequest(
                question_id=str(question_id),
                viewer_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Get question")


@router.post(
    "", response_model=CreateQuestionResponse, status_code=status.HTTP_201_CREATED
)
async def create_question(
    request: CreateQuestionAPIRequest,
    create_question_use_case: FromDishka[CreateQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateQuestionResponse:
    """Ask a question.

    Requires authentication.
    """
    try:
        return await create_question_use_case.execute(
            CreateQuestionRequest(
                title=request.title,
                content=request.content,
                author_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Create question")
    except pydantic.ValidationError as e:
        raise validation_error(e, "Create question")
    except Exception as e:
        raise unexpected_error(e, "create question")


@router.put("/{question_id}", response_model=UpdateQuestionResponse)
async def update_question(
    question_id: UUID,
    request: UpdateQuestionAPIRequest,
    update_question_use_case: FromDishka[UpdateQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateQuestionResponse:
    """Edit a question's title and/or content. Only the author may edit.

    Requires authentication.
    """
    try:
        return await update_question_use_case.execute(
            UpdateQuestionRequest(
                question_id=str(question_id),
                title=request.title,
                content=request.content,
                user_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Update question")
    except pydantic.ValidationError as e:
        raise validation_error(e, "Update question")


@router.delete("/{question_id}", response_model=DeleteQuestionResponse)
async def delete_question(
    question_id: UUID,
    delete_question_use_case: FromDishka[DeleteQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteQuestionResponse:
    """Delete a question and its answers.

    Only the author may delete. The reputation the question and its answers
    earned is taken back from their authors.

    Requires authentication.
    """
    try:
        return await delete_question_use_case.execute(
            DeleteQuestionRequest(
                question_id=str(question_id),
                user_id=caller_id(jwt_service, auth_token),
            )
        )
    except DomainError as e:
        raise http_error(e, "Delete question")
