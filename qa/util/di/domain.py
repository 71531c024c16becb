"""Domain layer DI providers."""

from dishka import Scope, provide

from qa.config import (
    AuthSettings,
    PaginationSettings,
    ReputationSettings,
    VotingSettings,
)
from qa.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    UnitOfWork,
    UserRepository,
    VoteRepository,
)
from qa.domain.service import (
    AnswerService,
    CounterService,
    JWTService,
    ListingService,
    QuestionService,
    ReputationService,
    UserService,
    VoteService,
)
from qa.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_counter_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
    ) -> CounterService:
        """Provide counter domain service."""
        return CounterService(
            question_repository=question_repository,
            answer_repository=answer_repository,
        )

    @provide
    def get_reputation_service(
        self,
        user_repository: UserRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        vote_repository: VoteRepository,
        settings: ReputationSettings,
    ) -> ReputationService:
        """Provide reputation domain service."""
        return ReputationService(
            user_repository=user_repository,
            question_repository=question_repository,
            answer_repository=answer_repository,
            vote_repository=vote_repository,
            settings=settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        counter_service: CounterService,
        reputation_service: ReputationService,
        unit_of_work: UnitOfWork,
        settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            question_repository=question_repository,
            answer_repository=answer_repository,
            counter_service=counter_service,
            reputation_service=reputation_service,
            unit_of_work=unit_of_work,
            settings=settings,
        )

    @provide
    def get_question_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_repository: UserRepository,
        reputation_service: ReputationService,
        unit_of_work: UnitOfWork,
    ) -> QuestionService:
        """Provide question domain service."""
        return QuestionService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            user_repository=user_repository,
            reputation_service=reputation_service,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_answer_service(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
        user_repository: UserRepository,
        reputation_service: ReputationService,
        unit_of_work: UnitOfWork,
    ) -> AnswerService:
        """Provide answer domain service."""
        return AnswerService(
            answer_repository=answer_repository,
            question_repository=question_repository,
            user_repository=user_repository,
            reputation_service=reputation_service,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_listing_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_repository: UserRepository,
        settings: PaginationSettings,
    ) -> ListingService:
        """Provide listing domain service."""
        return ListingService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            user_repository=user_repository,
            settings=settings,
        )
