"""Answer use cases."""

from .accept_answer import (
    AcceptAnswerRequest,
    AcceptAnswerResponse,
    AcceptAnswerUseCase,
)
from .create_answer import (
    CreateAnswerRequest,
    CreateAnswerResponse,
    CreateAnswerUseCase,
)
from .delete_answer import (
    DeleteAnswerRequest,
    DeleteAnswerResponse,
    DeleteAnswerUseCase,
)
from .get_answer import GetAnswerRequest, GetAnswerResponse, GetAnswerUseCase
from .get_question_answers import (
    GetQuestionAnswersRequest,
    GetQuestionAnswersResponse,
    GetQuestionAnswersUseCase,
)
from .list_answers import ListAnswersRequest, ListAnswersResponse, ListAnswersUseCase
from .update_answer import (
    UpdateAnswerRequest,
    UpdateAnswerResponse,
    UpdateAnswerUseCase,
)

__all__ = [
    "AcceptAnswerRequest",
    "AcceptAnswerResponse",
    "AcceptAnswerUseCase",
    "CreateAnswerRequest",
    "CreateAnswerResponse",
    "CreateAnswerUseCase",
    "DeleteAnswerRequest",
    "DeleteAnswerResponse",
    "DeleteAnswerUseCase",
    "GetAnswerRequest",
    "GetAnswerResponse",
    "GetAnswerUseCase",
    "GetQuestionAnswersRequest",
    "GetQuestionAnswersResponse",
    "GetQuestionAnswersUseCase",
    "ListAnswersRequest",
    "ListAnswersResponse",
    "ListAnswersUseCase",
    "UpdateAnswerRequest",
    "UpdateAnswerResponse",
    "UpdateAnswerUseCase",
]
