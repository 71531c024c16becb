"""Unit tests for ListingService, sorting and pagination."""

import math

import pytest

from qa.domain.repository import (
    AnswerSortOrder,
    QuestionSortOrder,
    UserSortOrder,
)
from qa.domain.service import ListingService, parse_role, parse_sort
from qa.domain.value import SearchTerm, UserRole
from tests.conftest import add_answer, add_question, add_user, minutes
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestPageRequest:
    """Tests for degrading untrusted page and limit values."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "page,limit,expected",
        [
            (None, None, (1, 10)),
            ("2", "5", (2, 5)),
            ("0", "0", (1, 10)),
            ("-3", "-1", (1, 10)),
            ("abc", "xyz", (1, 10)),
            ("1.5", "2.5", (1, 10)),
            ("3", "500", (3, 50)),
            (" 4 ", " 20 ", (4, 20)),
        ],
    )
    async def test_degradation(self, unit_env, page, limit, expected):
        listing_service = await unit_env.get(ListingService)

        request = listing_service.page_request(page, limit)

        assert (request.page, request.limit) == expected

    @pytest.mark.asyncio
    async def test_admin_default_limit(self, unit_env):
        listing_service = await unit_env.get(ListingService)

        assert listing_service.page_request(None, None, admin=True).limit == 7
        assert listing_service.page_request(None, "abc", admin=True).limit == 7


class TestParsers:
    """Tests for sort and role parsing."""

    def test_missing_sort_uses_listing_default(self):
        assert (
            parse_sort(UserSortOrder, None, UserSortOrder.REPUTATION)
            == UserSortOrder.REPUTATION
        )
        assert (
            parse_sort(UserSortOrder, "  ", UserSortOrder.REPUTATION)
            == UserSortOrder.REPUTATION
        )

    def test_unknown_sort_falls_back_to_newest(self):
        assert (
            parse_sort(QuestionSortOrder, "hottest", QuestionSortOrder.MOST_VOTED)
            == QuestionSortOrder.NEWEST
        )

    def test_sort_is_case_insensitive(self):
        assert (
            parse_sort(AnswerSortOrder, "Most_Voted", AnswerSortOrder.NEWEST)
            == AnswerSortOrder.MOST_VOTED
        )

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, None),
            ("all", None),
            ("superuser", None),
            ("admin", UserRole.ADMIN),
            ("USER", UserRole.USER),
        ],
    )
    def test_parse_role(self, value, expected):
        assert parse_role(value) == expected


class TestListQuestions:
    """Tests for question listings."""

    @pytest.mark.asyncio
    async def test_empty_listing_has_one_empty_page(self, unit_env):
        listing_service = await unit_env.get(ListingService)

        page = await listing_service.list_questions(
            listing_service.page_request("1", "10")
        )

        assert page.items == []
        assert page.current_page == 1
        assert page.total_items == 0
        assert page.total_pages == 1

    @pytest.mark.asyncio
    async def test_most_voted_last_page(self, unit_env):
        """25 questions, limit 10: page 3 holds the 5 lowest-net in order."""
        # Arrange
        listing_service = await unit_env.get(ListingService)
        author = await add_user(unit_env, "Author")
        questions = [
            await add_question(
                unit_env,
                author,
                title=f"Question number {i:02d} about graphs",
                upvote_count=i,
                downvote_count=0,
            )
            for i in range(25)
        ]

        # Act
        page = await listing_service.list_questions(
            listing_service.page_request("3", "10"),
            sort=QuestionSortOrder.MOST_VOTED,
        )

        # Assert
        assert page.total_pages == 3
        assert page.total_items == 25
        assert [q.net_votes for q in page.items] == [4, 3, 2, 1, 0]
        assert [q.id for q in page.items] == [q.id for q in reversed(questions[:5])]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [1, 3, 7, 10, 13])
    async def test_walking_pages_yields_each_item_once(self, unit_env, limit):
        """Ties on net votes are broken by id, so pages never overlap."""
        listing_service = await unit_env.get(ListingService)
        author = await add_user(unit_env, "Author")
        questions = [
            await add_question(
                unit_env,
                author,
                title=f"Tied question number {i:02d}",
                upvote_count=i % 3,
            )
            for i in range(13)
        ]

        seen = []
        first = await listing_service.list_questions(
            listing_service.page_request(1, limit), sort=QuestionSortOrder.MOST_VOTED
        )
        assert first.total_pages == max(1, math.ceil(13 / limit))
        for number in range(1, first.total_pages + 1):
            page = await listing_service.list_questions(
                listing_service.page_request(number, limit),
                sort=QuestionSortOrder.MOST_VOTED,
            )
            seen.extend(q.id for q in page.items)

        assert sorted(seen) == sorted(q.id for q in questions)
        assert len(seen) == len(set(seen))

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, unit_env):
        listing_service = await unit_env.get(ListingService)
        author = await add_user(unit_env, "Author")
        await add_question(unit_env, author)

        page = await listing_service.list_questions(
            listing_service.page_request("9", "10")
        )

        assert page.items == []
        assert page.current_page == 9
        assert page.total_pages == 1

    @pytest.mark.asyncio
    async def test_search_filters_before_pagination(self, unit_env):
        """Search is a case-insensitive title substring; total counts matches only."""
        listing_service = await unit_env.get(ListingService)
        author = await add_user(unit_env, "Author")
        for i in range(4):
            await add_question(unit_env, author, title=f"Python packaging issue {i}")
        await add_question(unit_env, author, title="Rust borrow checker help")

        page = await listing_service.list_questions(
            listing_service.page_request("1", "3"),
            search=SearchTerm.from_optional("PYTHON"),
        )

        assert page.total_items == 4
        assert page.total_pages == 2
        assert all("Python" in q.title for q in page.items)

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, unit_env):
        listing_service = await unit_env.get(ListingService)
        author = await add_user(unit_env, "Author")
        await add_question(unit_env, author, title="Is 100% coverage worth it?")
        await add_question(unit_env, author, title="Is full coverage worth it?")

        page = await listing_service.list_questions(
            listing_service.page_request(None, None),
            search=SearchTerm.from_optional("100%"),
        )

        assert page.total_items == 1

    @pytest.mark.asyncio
    async def test_newest_and_oldest(self, unit_env):
        listing_service = await unit_env.get(ListingService)
        author = await add_user(unit_env, "Author")
        old = await add_question(unit_env, author, created_at=minutes(0))
        new = await add_question(unit_env, author, created_at=minutes(5))

        newest = await listing_service.list_questions(
            listing_service.page_request(None, None), sort=QuestionSortOrder.NEWEST
        )
        oldest = await listing_service.list_questions(
            listing_service.page_request(None, None), sort=QuestionSortOrder.OLDEST
        )

        assert [q.id for q in newest.items] == [new.id, old.id]
        assert [q.id for q in oldest.items] == [old.id, new.id]

    @pytest.mark.asyncio
    async def test_author_filter(self, unit_env):
        listing_service = await unit_env.get(ListingService)
        alice = await add_user(unit_env, "Alice")
        bob = await add_user(unit_env, "Bob")
        mine = await add_question(unit_env, alice)
        await add_question(unit_env, bob)

        page = await listing_service.list_questions(
            listing_service.page_request(None, None), author_id=alice.id
        )

        assert [q.id for q in page.items] == [mine.id]
        assert page.total_items == 1


class TestListAnswers:
    """Tests for answer listings."""

    @pytest.mark.asyncio
    async def test_content_search_and_author_filter(self, unit_env):
        listing_service = await unit_env.get(ListingService)
        alice = await add_user(unit_env, "Alice")
        bob = await add_user(unit_env, "Bob")
        question = await add_question(unit_env, alice)
        match = await add_answer(unit_env, question, alice, content="Try asyncio.gather")
        await add_answer(unit_env, question, alice, content="Use threads")
        await add_answer(unit_env, question, bob, content="asyncio is fine")

        page = await listing_service.list_answers(
            listing_service.page_request(None, None),
            search=SearchTerm.from_optional("ASYNCIO"),
            author_id=alice.id,
        )

        assert [a.id for a in page.items] == [match.id]


class TestListUsers:
    """Tests for the member directory and admin listing."""

    @pytest.mark.asyncio
    async def test_directory_hides_inactive_users(self, unit_env):
        listing_service = await unit_env.get(ListingService)
        active = await add_user(unit_env, "Active")
        await add_user(unit_env, "Dormant", active=False)

        page = await listing_service.list_users(
            listing_service.page_request(None, None)
        )

        assert [u.id for u in page.items] == [active.id]

    @pytest.mark.asyncio
    async def test_directory_sorts_by_reputation(self, unit_env):
        listing_service = await unit_env.get(ListingService)
        low = await add_user(unit_env, "Low", reputation=5)
        high = await add_user(unit_env, "High", reputation=50)
        negative = await add_user(unit_env, "Negative", reputation=-4)

        page = await listing_service.list_users(
            listing_service.page_request(None, None), sort=UserSortOrder.REPUTATION
        )

        assert [u.id for u in page.items] == [high.id, low.id, negative.id]

    @pytest.mark.asyncio
    async def test_directory_searches_name_only(self, unit_env):
        listing_service = await unit_env.get(ListingService)
        await add_user(unit_env, "Carol", email="carol@example.com")
        dave = await add_user(unit_env, "Dave", email="dave+carol@example.com")

        by_name = await listing_service.list_users(
            listing_service.page_request(None, None),
            search=SearchTerm.from_optional("carol"),
        )
        by_email = await listing_service.list_users(
            listing_service.page_request(None, None),
            search=SearchTerm.from_optional("carol"),
            search_email=True,
        )

        assert by_name.total_items == 1
        assert dave.id in [u.id for u in by_email.items]
        assert by_email.total_items == 2

    @pytest.mark.asyncio
    async def test_admin_filters(self, unit_env):
        listing_service = await unit_env.get(ListingService)
        await add_user(unit_env, "Admin", role=UserRole.ADMIN)
        await add_user(unit_env, "Member")
        disabled = await add_user(unit_env, "Disabled", active=False)

        admins = await listing_service.list_users(
            listing_service.page_request(None, None, admin=True),
            active=None,
            role=UserRole.ADMIN,
        )
        inactive = await listing_service.list_users(
            listing_service.page_request(None, None, admin=True),
            active=False,
        )
        everyone = await listing_service.list_users(
            listing_service.page_request(None, None, admin=True),
            active=None,
        )

        assert admins.total_items == 1
        assert [u.id for u in inactive.items] == [disabled.id]
        assert everyone.total_items == 3
