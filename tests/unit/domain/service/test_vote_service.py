"""Unit tests for VoteService."""

import asyncio
from uuid import uuid4

import pytest
from dishka import Provider, Scope, provide

from qa.config import VotingSettings
from qa.domain.error import (
    ForbiddenSelfVoteError,
    InvalidVoteTypeError,
    NotFoundError,
    UnauthorizedError,
)
from qa.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    UserRepository,
    VoteRepository,
)
from qa.domain.service import ReputationService, VoteService
from qa.domain.value import TargetType, UserId, VoteType
from tests.conftest import add_answer, add_question, add_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class NoSelfVoteProvider(Provider):
    """Voting policy that rejects votes on one's own content."""

    @provide(scope=Scope.APP)
    def get_voting_settings(self) -> VotingSettings:
        return VotingSettings(allow_self_vote=False)


strict_env = create_env_fixture(overrides=[NoSelfVoteProvider()])


class TestApplyVote:
    """Tests for the vote state machine against stored targets."""

    @pytest.mark.asyncio
    async def test_scenario_from_existing_counts(self, unit_env):
        """(5,2) -> upvote (6,2) -> upvote (5,2) -> downvote (5,3)."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        author = await add_user(unit_env, "Author")
        voter = await add_user(unit_env, "Voter")
        question = await add_question(
            unit_env, author, upvote_count=5, downvote_count=2
        )

        expected = [
            (VoteType.UPVOTE, (6, 2), VoteType.UPVOTE),
            (VoteType.UPVOTE, (5, 2), None),
            (VoteType.DOWNVOTE, (5, 3), VoteType.DOWNVOTE),
        ]
        for requested, counts, status in expected:
            # Act
            transition = await vote_service.apply_vote(
                voter.id, TargetType.QUESTION, question.id, requested
            )

            # Assert
            stored = await question_repo.find_by_id(question.id)
            assert (stored.upvote_count, stored.downvote_count) == counts
            assert transition.current == status
            assert (
                await vote_service.get_vote_status(
                    voter.id, TargetType.QUESTION, question.id
                )
                == status
            )

    @pytest.mark.asyncio
    async def test_switch_updates_ledger_row_in_place(self, unit_env):
        """Switching keeps one ledger row and flips its type."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await add_user(unit_env, "Author")
        voter = await add_user(unit_env, "Voter")
        question = await add_question(unit_env, author)
        answer = await add_answer(unit_env, question, author)

        await vote_service.apply_vote(voter.id, TargetType.ANSWER, answer.id, "upvote")
        first = await vote_repo.find_by_voter_and_target(
            voter.id, TargetType.ANSWER, answer.id
        )
        await vote_service.apply_vote(
            voter.id, TargetType.ANSWER, answer.id, "downvote"
        )
        second = await vote_repo.find_by_voter_and_target(
            voter.id, TargetType.ANSWER, answer.id
        )

        assert first.id == second.id
        assert second.vote_type == VoteType.DOWNVOTE

    @pytest.mark.asyncio
    async def test_retraction_deletes_ledger_row(self, unit_env):
        """Repeating a vote removes it from the ledger."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        author = await add_user(unit_env, "Author")
        voter = await add_user(unit_env, "Voter")
        question = await add_question(unit_env, author)

        await vote_service.apply_vote(voter.id, TargetType.QUESTION, question.id, "downvote")
        await vote_service.apply_vote(voter.id, TargetType.QUESTION, question.id, "downvote")

        assert (
            await vote_repo.find_by_voter_and_target(
                voter.id, TargetType.QUESTION, question.id
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_anonymous_vote_is_unauthorized(self, unit_env):
        """A vote without a voter is rejected before touching storage."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(UnauthorizedError):
            await vote_service.apply_vote(
                None, TargetType.QUESTION, uuid4(), VoteType.UPVOTE
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("vote_type", ["up", "UPVOTE", "", "sideways"])
    async def test_unknown_vote_type_is_rejected(self, unit_env, vote_type):
        """Only "upvote" and "downvote" are accepted."""
        vote_service = await unit_env.get(VoteService)
        author = await add_user(unit_env, "Author")
        question = await add_question(unit_env, author)

        with pytest.raises(InvalidVoteTypeError):
            await vote_service.apply_vote(
                UserId(uuid4()), TargetType.QUESTION, question.id, vote_type
            )

    @pytest.mark.asyncio
    async def test_missing_target_is_not_found(self, unit_env):
        """Voting on a target that doesn't exist raises NotFoundError."""
        vote_service = await unit_env.get(VoteService)
        voter = await add_user(unit_env, "Voter")

        with pytest.raises(NotFoundError):
            await vote_service.apply_vote(
                voter.id, TargetType.ANSWER, uuid4(), VoteType.UPVOTE
            )

    @pytest.mark.asyncio
    async def test_deleted_target_is_not_found(self, unit_env):
        """Soft-deleted content cannot be voted on."""
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        author = await add_user(unit_env, "Author")
        voter = await add_user(unit_env, "Voter")
        question = await add_question(unit_env, author)
        await question_repo.soft_delete(question.id)

        with pytest.raises(NotFoundError):
            await vote_service.apply_vote(
                voter.id, TargetType.QUESTION, question.id, VoteType.UPVOTE
            )


class TestSelfVotePolicy:
    """Tests for the configurable self-vote policy."""

    @pytest.mark.asyncio
    async def test_self_vote_allowed_by_default(self, unit_env):
        """Authors may vote on their own answers unless configured otherwise."""
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        author = await add_user(unit_env, "Author")
        question = await add_question(unit_env, author)
        answer = await add_answer(unit_env, question, author)

        await vote_service.apply_vote(
            author.id, TargetType.ANSWER, answer.id, VoteType.UPVOTE
        )

        assert (await user_repo.find_by_id(author.id)).reputation == 10

    @pytest.mark.asyncio
    async def test_self_vote_rejected_when_disabled(self, strict_env):
        """With allow_self_vote off, voting on one's own content is forbidden."""
        vote_service = await strict_env.get(VoteService)
        answer_repo = await strict_env.get(AnswerRepository)
        author = await add_user(strict_env, "Author")
        question = await add_question(strict_env, author)
        answer = await add_answer(strict_env, question, author)

        with pytest.raises(ForbiddenSelfVoteError):
            await vote_service.apply_vote(
                author.id, TargetType.ANSWER, answer.id, VoteType.UPVOTE
            )

        stored = await answer_repo.find_by_id(answer.id)
        assert stored.upvote_count == 0


class TestAtomicity:
    """Tests that a vote is all-or-nothing."""

    @pytest.mark.asyncio
    async def test_failure_after_ledger_write_rolls_everything_back(
        self, unit_env, monkeypatch
    ):
        """If the reputation step fails, ledger and counters are unchanged."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await add_user(unit_env, "Author")
        voter = await add_user(unit_env, "Voter")
        question = await add_question(unit_env, author)
        answer = await add_answer(unit_env, question, author)

        async def fail(*args, **kwargs):
            raise RuntimeError("storage went away")

        monkeypatch.setattr(vote_service.reputation_service, "apply_transition", fail)

        # Act
        with pytest.raises(RuntimeError):
            await vote_service.apply_vote(
                voter.id, TargetType.ANSWER, answer.id, VoteType.UPVOTE
            )

        # Assert
        assert (
            await vote_repo.find_by_voter_and_target(
                voter.id, TargetType.ANSWER, answer.id
            )
            is None
        )
        stored = await answer_repo.find_by_id(answer.id)
        assert (stored.upvote_count, stored.downvote_count) == (0, 0)
        assert (await user_repo.find_by_id(author.id)).reputation == 0

    @pytest.mark.asyncio
    async def test_failed_switch_restores_previous_vote(self, unit_env, monkeypatch):
        """A failed switch leaves the earlier vote and its counters in place."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        user_repo = await unit_env.get(UserRepository)
        author = await add_user(unit_env, "Author")
        voter = await add_user(unit_env, "Voter")
        question = await add_question(unit_env, author)
        answer = await add_answer(unit_env, question, author)
        await vote_service.apply_vote(
            voter.id, TargetType.ANSWER, answer.id, VoteType.UPVOTE
        )

        async def fail(*args, **kwargs):
            raise RuntimeError("storage went away")

        monkeypatch.setattr(vote_service.reputation_service, "apply_transition", fail)

        with pytest.raises(RuntimeError):
            await vote_service.apply_vote(
                voter.id, TargetType.ANSWER, answer.id, VoteType.DOWNVOTE
            )

        vote = await vote_repo.find_by_voter_and_target(
            voter.id, TargetType.ANSWER, answer.id
        )
        assert vote.vote_type == VoteType.UPVOTE
        stored = await answer_repo.find_by_id(answer.id)
        assert (stored.upvote_count, stored.downvote_count) == (1, 0)
        assert (await user_repo.find_by_id(author.id)).reputation == 10


class TestConcurrentVotes:
    """Tests that concurrent votes serialize per target."""

    @pytest.mark.asyncio
    async def test_votes_by_different_voters_lose_no_updates(self, unit_env):
        """Twenty simultaneous upvotes all land."""
        vote_service = await unit_env.get(VoteService)
        answer_repo = await unit_env.get(AnswerRepository)
        reputation_service = await unit_env.get(ReputationService)
        author = await add_user(unit_env, "Author")
        question = await add_question(unit_env, author)
        answer = await add_answer(unit_env, question, author)
        voters = [await add_user(unit_env, f"Voter {i}") for i in range(20)]

        await asyncio.gather(
            *(
                vote_service.apply_vote(
                    voter.id, TargetType.ANSWER, answer.id, VoteType.UPVOTE
                )
                for voter in voters
            )
        )

        stored = await answer_repo.find_by_id(answer.id)
        assert stored.upvote_count == 20
        assert await reputation_service.get_cached(author.id) == 200
        assert await reputation_service.verify(author.id)

    @pytest.mark.asyncio
    async def test_double_click_serializes(self, unit_env):
        """Two simultaneous identical votes by one voter cancel out."""
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        author = await add_user(unit_env, "Author")
        voter = await add_user(unit_env, "Voter")
        question = await add_question(unit_env, author)

        transitions = await asyncio.gather(
            vote_service.apply_vote(
                voter.id, TargetType.QUESTION, question.id, VoteType.UPVOTE
            ),
            vote_service.apply_vote(
                voter.id, TargetType.QUESTION, question.id, VoteType.UPVOTE
            ),
        )

        assert sorted(t.message for t in transitions) == ["Vote recorded", "Vote removed"]
        stored = await question_repo.find_by_id(question.id)
        assert stored.upvote_count == 0
        assert (
            await vote_service.get_vote_status(
                voter.id, TargetType.QUESTION, question.id
            )
            is None
        )


class TestVoteStatuses:
    """Tests for batch vote status lookups."""

    @pytest.mark.asyncio
    async def test_batch_lookup(self, unit_env):
        """Only targets the voter voted on appear in the mapping."""
        vote_service = await unit_env.get(VoteService)
        author = await add_user(unit_env, "Author")
        voter = await add_user(unit_env, "Voter")
        questions = [await add_question(unit_env, author) for _ in range(3)]
        await vote_service.apply_vote(
            voter.id, TargetType.QUESTION, questions[0].id, VoteType.UPVOTE
        )
        await vote_service.apply_vote(
            voter.id, TargetType.QUESTION, questions[2].id, VoteType.DOWNVOTE
        )

        statuses = await vote_service.get_vote_statuses(
            voter.id, TargetType.QUESTION, [q.id for q in questions]
        )

        assert statuses == {
            questions[0].id: VoteType.UPVOTE,
            questions[2].id: VoteType.DOWNVOTE,
        }

    @pytest.mark.asyncio
    async def test_anonymous_viewer_has_no_statuses(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.get_vote_statuses(
            None, TargetType.ANSWER, [uuid4()]
        ) == {}
