"""Application layer DI providers."""

from dishka import Scope, provide

from qa.application.usecase.answer import (
    AcceptAnswerUseCase,
    CreateAnswerUseCase,
    DeleteAnswerUseCase,
    GetAnswerUseCase,
    GetQuestionAnswersUseCase,
    ListAnswersUseCase,
    UpdateAnswerUseCase,
)
from qa.application.usecase.question import (
    CreateQuestionUseCase,
    DeleteQuestionUseCase,
    GetQuestionUseCase,
    ListQuestionsUseCase,
    UpdateQuestionUseCase,
)
from qa.application.usecase.user import (
    GetUserStatsUseCase,
    ListAdminUsersUseCase,
    ListCommunityUsersUseCase,
    SetUserActiveUseCase,
)
from qa.application.usecase.vote import CastVoteUseCase, GetVoteStatusUseCase
from qa.config import VotingSettings
from qa.domain.service import (
    AnswerService,
    ListingService,
    QuestionService,
    ReputationService,
    UserService,
    VoteService,
)
from qa.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, vote_service: VoteService, settings: VotingSettings
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service, settings=settings)

    @provide(scope=Scope.REQUEST)
    def get_vote_status_use_case(
        self, vote_service: VoteService
    ) -> GetVoteStatusUseCase:
        """Provide get vote status use case."""
        return GetVoteStatusUseCase(vote_service=vote_service)

    # Question use cases
    @provide(scope=Scope.REQUEST)
    def get_create_question_use_case(
        self, question_service: QuestionService, user_service: UserService
    ) -> CreateQuestionUseCase:
        """Provide create question use case."""
        return CreateQuestionUseCase(
            question_service=question_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_questions_use_case(
        self,
        listing_service: ListingService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> ListQuestionsUseCase:
        """Provide list questions use case."""
        return ListQuestionsUseCase(
            listing_service=listing_service,
            vote_service=vote_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_question_use_case(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> GetQuestionUseCase:
        """Provide get question use case."""
        return GetQuestionUseCase(
            question_service=question_service,
            answer_service=answer_service,
            vote_service=vote_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_question_use_case(
        self, question_service: QuestionService, user_service: UserService
    ) -> UpdateQuestionUseCase:
        """Provide update question use case."""
        return UpdateQuestionUseCase(
            question_service=question_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_question_use_case(
        self, question_service: QuestionService
    ) -> DeleteQuestionUseCase:
        """Provide delete question use case."""
        return DeleteQuestionUseCase(question_service=question_service)

    # Answer use cases
    @provide(scope=Scope.REQUEST)
    def get_create_answer_use_case(
        self, answer_service: AnswerService, user_service: UserService
    ) -> CreateAnswerUseCase:
        """Provide create answer use case."""
        return CreateAnswerUseCase(
            answer_service=answer_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_answers_use_case(
        self,
        listing_service: ListingService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> ListAnswersUseCase:
        """Provide list answers use case."""
        return ListAnswersUseCase(
            listing_service=listing_service,
            vote_service=vote_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_question_answers_use_case(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> GetQuestionAnswersUseCase:
        """Provide get question answers use case."""
        return GetQuestionAnswersUseCase(
            question_service=question_service,
            answer_service=answer_service,
            vote_service=vote_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_answer_use_case(
        self,
        answer_service: AnswerService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> GetAnswerUseCase:
        """Provide get answer use case."""
        return GetAnswerUseCase(
            answer_service=answer_service,
            vote_service=vote_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_answer_use_case(
        self, answer_service: AnswerService, user_service: UserService
    ) -> UpdateAnswerUseCase:
        """Provide update answer use case."""
        return UpdateAnswerUseCase(
            answer_service=answer_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_answer_use_case(
        self, answer_service: AnswerService
    ) -> DeleteAnswerUseCase:
        """Provide delete answer use case."""
        return DeleteAnswerUseCase(answer_service=answer_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_answer_use_case(
        self, answer_service: AnswerService
    ) -> AcceptAnswerUseCase:
        """Provide accept answer use case."""
        return AcceptAnswerUseCase(answer_service=answer_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_list_community_users_use_case(
        self, listing_service: ListingService
    ) -> ListCommunityUsersUseCase:
        """Provide member directory use case."""
        return ListCommunityUsersUseCase(listing_service=listing_service)

    @provide(scope=Scope.REQUEST)
    def get_list_admin_users_use_case(
        self, listing_service: ListingService, user_service: UserService
    ) -> ListAdminUsersUseCase:
        """Provide admin user listing use case."""
        return ListAdminUsersUseCase(
            listing_service=listing_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_user_stats_use_case(
        self, user_service: UserService, reputation_service: ReputationService
    ) -> GetUserStatsUseCase:
        """Provide get user stats use case."""
        return GetUserStatsUseCase(
            user_service=user_service, reputation_service=reputation_service
        )

    @provide(scope=Scope.REQUEST)
    def get_set_user_active_use_case(
        self, user_service: UserService
    ) -> SetUserActiveUseCase:
        """Provide deactivate/restore user use case."""
        return SetUserActiveUseCase(user_service=user_service)
