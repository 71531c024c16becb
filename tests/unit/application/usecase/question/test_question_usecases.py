"""Unit tests for the question use cases."""

import pytest

from qa.application.usecase.question import (
    CreateQuestionRequest,
    CreateQuestionUseCase,
    GetQuestionRequest,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsUseCase,
    UpdateQuestionRequest,
    UpdateQuestionUseCase,
)
from qa.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from qa.domain.error import NotAuthorizedError, NotFoundError, UnauthorizedError
from qa.domain.value import TargetType, VoteType
from tests.conftest import add_answer, add_question, add_user, minutes
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListQuestionsUseCase:
    """Tests for the question listing envelope."""

    @pytest.mark.asyncio
    async def test_empty_listing_envelope(self, unit_env):
        use_case = await unit_env.get(ListQuestionsUseCase)

        response = await use_case.execute(ListQuestionsRequest())

        assert response.model_dump() == {
            "success": True,
            "data": [],
            "pagination": {
                "current_page": 1,
                "per_page": 10,
                "total": 0,
                "total_pages": 1,
            },
        }

    @pytest.mark.asyncio
    async def test_bad_query_values_degrade_to_defaults(self, unit_env):
        use_case = await unit_env.get(ListQuestionsUseCase)
        author = await add_user(unit_env)
        for i in range(3):
            await add_question(unit_env, author, created_at=minutes(i))

        response = await use_case.execute(
            ListQuestionsRequest(page="abc", limit="-4", sort="sideways")
        )

        assert response.pagination.current_page == 1
        assert response.pagination.per_page == 10
        assert response.pagination.total == 3
        # Unknown sort falls back to newest first
        assert [item.created_at for item in response.data] == [
            minutes(2),
            minutes(1),
            minutes(0),
        ]

    @pytest.mark.asyncio
    async def test_items_carry_author_and_caller_vote(self, unit_env):
        listing = await unit_env.get(ListQuestionsUseCase)
        cast = await unit_env.get(CastVoteUseCase)
        author = await add_user(unit_env, "Author")
        viewer = await add_user(unit_env, "Viewer")
        voted = await add_question(unit_env, author, created_at=minutes(1))
        await add_question(unit_env, author, created_at=minutes(0))

        await cast.execute(
            CastVoteRequest(
                target_type=TargetType.QUESTION,
                target_id=str(voted.id),
                vote_type="downvote",
                voter_id=str(viewer.id),
            )
        )
        response = await listing.execute(
            ListQuestionsRequest(viewer_id=str(viewer.id))
        )

        first, second = response.data
        assert first.id == str(voted.id)
        assert first.user_vote_status == VoteType.DOWNVOTE
        assert first.downvote_count == 1
        assert first.net_votes == -1
        assert first.author.name == "Author"
        assert second.user_vote_status is None

    @pytest.mark.asyncio
    async def test_my_questions_requires_caller(self, unit_env):
        use_case = await unit_env.get(ListQuestionsUseCase)

        with pytest.raises(UnauthorizedError):
            await use_case.execute(ListQuestionsRequest(mine=True))

    @pytest.mark.asyncio
    async def test_my_questions_lists_only_callers(self, unit_env):
        use_case = await unit_env.get(ListQuestionsUseCase)
        me = await add_user(unit_env, "Me")
        other = await add_user(unit_env, "Other")
        mine = await add_question(unit_env, me)
        await add_question(unit_env, other)

        response = await use_case.execute(
            ListQuestionsRequest(mine=True, viewer_id=str(me.id))
        )

        assert [item.id for item in response.data] == [str(mine.id)]


class TestGetQuestionUseCase:
    """Tests for the question detail view."""

    @pytest.mark.asyncio
    async def test_answers_ordered_by_net_votes(self, unit_env):
        use_case = await unit_env.get(GetQuestionUseCase)
        author = await add_user(unit_env)
        question = await add_question(unit_env, author)
        low = await add_answer(
            unit_env, question, author, upvote_count=1, downvote_count=3
        )
        high = await add_answer(unit_env, question, author, upvote_count=4)

        response = await use_case.execute(
            GetQuestionRequest(question_id=str(question.id))
        )

        assert [a.id for a in response.data.answers] == [str(high.id), str(low.id)]

    @pytest.mark.asyncio
    async def test_missing_question(self, unit_env):
        use_case = await unit_env.get(GetQuestionUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetQuestionRequest(question_id="00000000-0000-0000-0000-000000000000")
            )


class TestCreateQuestionUseCase:
    """Tests for asking a question."""

    @pytest.mark.asyncio
    async def test_requires_author(self, unit_env):
        use_case = await unit_env.get(CreateQuestionUseCase)

        with pytest.raises(UnauthorizedError):
            await use_case.execute(
                CreateQuestionRequest(
                    title="Why is the sky blue?",
                    content="Rayleigh scattering, but what does it mean?",
                )
            )

    @pytest.mark.asyncio
    async def test_new_question_starts_at_zero(self, unit_env):
        use_case = await unit_env.get(CreateQuestionUseCase)
        author = await add_user(unit_env)

        response = await use_case.execute(
            CreateQuestionRequest(
                title="Why is the sky blue?",
                content="Rayleigh scattering, but what does it mean?",
                author_id=str(author.id),
            )
        )

        assert response.data.upvote_count == 0
        assert response.data.downvote_count == 0
        assert response.data.answer_count == 0
        assert response.data.author.id == str(author.id)


class TestUpdateQuestionUseCase:
    """Tests for editing questions."""

    @pytest.mark.asyncio
    async def test_requires_caller(self, unit_env):
        use_case = await unit_env.get(UpdateQuestionUseCase)
        author = await add_user(unit_env, "Author")
        question = await add_question(unit_env, author)

        with pytest.raises(UnauthorizedError):
            await use_case.execute(
                UpdateQuestionRequest(question_id=str(question.id), title="Any title")
            )

    @pytest.mark.asyncio
    async def test_only_author_edits(self, unit_env):
        use_case = await unit_env.get(UpdateQuestionUseCase)
        author = await add_user(unit_env, "Author")
        other = await add_user(unit_env, "Other")
        question = await add_question(unit_env, author, answer_count=2)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                UpdateQuestionRequest(
                    question_id=str(question.id),
                    title="How do I balance a binary tree?",
                    user_id=str(other.id),
                )
            )

        response = await use_case.execute(
            UpdateQuestionRequest(
                question_id=str(question.id),
                title="How do I balance a binary tree?",
                user_id=str(author.id),
            )
        )
        assert response.data.title == "How do I balance a binary tree?"
        assert response.data.content == question.content
        assert response.data.answer_count == 2
