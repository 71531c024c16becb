"""End-to-end tests for questions and answers over HTTP."""

from qa.domain.repository import UserRepository
from tests.conftest import add_answer, add_question, add_user, minutes
from tests.harness import create_client_fixture

api = create_client_fixture()

TITLE = "What is a monad, really?"
CONTENT = "Every explanation I read uses burritos and I am lost."


class TestQuestionsApi:
    """Question endpoints."""

    def test_create_and_read(self, api):
        author = api.seed(add_user, "Author")

        created = api.client.post(
            "/qa/questions",
            json={"title": TITLE, "content": CONTENT},
            headers=api.auth(author),
        )

        assert created.status_code == 201
        question_id = created.json()["data"]["id"]
        detail = api.client.get(f"/qa/questions/{question_id}").json()
        assert detail["data"]["title"] == TITLE
        assert detail["data"]["answers"] == []
        users = api.get(UserRepository)
        stored = api.client.portal.call(users.find_by_id, author.id)
        assert stored.question_count == 1

    def test_create_requires_auth(self, api):
        response = api.client.post(
            "/qa/questions", json={"title": TITLE, "content": CONTENT}
        )

        assert response.status_code == 401

    def test_short_title_is_422(self, api):
        author = api.seed(add_user, "Author")

        response = api.client.post(
            "/qa/questions",
            json={"title": "Monads?", "content": CONTENT},
            headers=api.auth(author),
        )

        assert response.status_code == 422

    def test_listing_envelope_and_pagination(self, api):
        author = api.seed(add_user, "Author")
        for i in range(12):
            api.seed(add_question, author, created_at=minutes(i))

        response = api.client.get("/qa/questions", params={"page": "2"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["data"]) == 2
        assert body["pagination"] == {
            "current_page": 2,
            "per_page": 10,
            "total": 12,
            "total_pages": 2,
        }

    def test_bad_query_values_degrade(self, api):
        response = api.client.get(
            "/qa/questions", params={"page": "zero", "limit": "-3", "sort": "??"}
        )

        assert response.status_code == 200
        assert response.json()["pagination"]["current_page"] == 1
        assert response.json()["pagination"]["per_page"] == 10

    def test_most_voted_and_search(self, api):
        author = api.seed(add_user, "Author")
        api.seed(add_question, author, title="Graph coloring with few colors", upvote_count=1)
        api.seed(add_question, author, title="Shortest GRAPH paths at scale", upvote_count=7)
        api.seed(add_question, author, title="Parsing dates in many locales")

        response = api.client.get(
            "/qa/questions", params={"search": "graph", "sort": "most_voted"}
        )

        titles = [item["title"] for item in response.json()["data"]]
        assert titles == [
            "Shortest GRAPH paths at scale",
            "Graph coloring with few colors",
        ]

    def test_my_questions(self, api):
        me = api.seed(add_user, "Me")
        other = api.seed(add_user, "Other")
        mine = api.seed(add_question, me)
        api.seed(add_question, other)

        assert api.client.get("/qa/questions/my-questions").status_code == 401
        response = api.client.get("/qa/questions/my-questions", headers=api.auth(me))
        assert [item["id"] for item in response.json()["data"]] == [str(mine.id)]

    def test_delete_by_non_author_is_403(self, api):
        author = api.seed(add_user, "Author")
        other = api.seed(add_user, "Other")
        question = api.seed(add_question, author)

        response = api.client.delete(
            f"/qa/questions/{question.id}", headers=api.auth(other)
        )

        assert response.status_code == 403

    def test_deleted_question_is_404(self, api):
        author = api.seed(add_user, "Author")
        question = api.seed(add_question, author)

        deleted = api.client.delete(
            f"/qa/questions/{question.id}", headers=api.auth(author)
        )

        assert deleted.status_code == 200
        assert api.client.get(f"/qa/questions/{question.id}").status_code == 404


    def test_edit_by_author(self, api):
        author = api.seed(add_user, "Author")
        other = api.seed(add_user, "Other")
        question = api.seed(add_question, author, upvote_count=3)
        new_title = "What is a monad, in plain words?"

        forbidden = api.client.put(
            f"/qa/questions/{question.id}",
            json={"title": new_title},
            headers=api.auth(other),
        )
        edited = api.client.put(
            f"/qa/questions/{question.id}",
            json={"title": new_title},
            headers=api.auth(author),
        )

        assert forbidden.status_code == 403
        assert edited.status_code == 200
        body = edited.json()
        assert body["message"] == "Question updated"
        assert body["data"]["title"] == new_title
        assert body["data"]["content"] == question.content
        assert body["data"]["upvote_count"] == 3
        detail = api.client.get(f"/qa/questions/{question.id}").json()
        assert detail["data"]["title"] == new_title

    def test_edit_validation_and_missing(self, api):
        author = api.seed(add_user, "Author")
        question = api.seed(add_question, author)

        too_short = api.client.put(
            f"/qa/questions/{question.id}",
            json={"content": "Too short"},
            headers=api.auth(author),
        )
        missing = api.client.put(
            "/qa/questions/00000000-0000-0000-0000-000000000000",
            json={"title": "A perfectly fine title"},
            headers=api.auth(author),
        )
        anonymous = api.client.put(
            f"/qa/questions/{question.id}", json={"title": "A perfectly fine title"}
        )

        assert too_short.status_code == 422
        assert missing.status_code == 404
        assert anonymous.status_code == 401


class TestAnswersApi:
    """Answer endpoints."""

    def test_answer_accept_and_list(self, api):
        asker = api.seed(add_user, "Asker")
        helper = api.seed(add_user, "Helper")
        question = api.seed(add_question, asker)

        created = api.client.post(
            f"/qa/answers/question/{question.id}",
            json={"content": "Think of it as a context for chaining computations."},
            headers=api.auth(helper),
        )
        assert created.status_code == 201
        answer_id = created.json()["data"]["id"]

        accepted = api.client.post(
            f"/qa/answers/{answer_id}/accept", headers=api.auth(asker)
        )
        assert accepted.status_code == 200
        assert accepted.json()["is_accepted"] is True

        answers = api.client.get(f"/qa/answers/question/{question.id}").json()["data"]
        assert [a["is_accepted"] for a in answers] == [True]
        stats = api.client.get(f"/users/{helper.id}/stats").json()
        assert stats["reputation"] == 15
        assert stats["answer_count"] == 1
        assert stats["consistent"] is True

    def test_accept_by_non_asker_is_403(self, api):
        asker = api.seed(add_user, "Asker")
        helper = api.seed(add_user, "Helper")
        question = api.seed(add_question, asker)
        answer = api.seed(add_answer, question, helper)

        response = api.client.post(
            f"/qa/answers/{answer.id}/accept", headers=api.auth(helper)
        )

        assert response.status_code == 403

    def test_answer_on_missing_question_is_404(self, api):
        helper = api.seed(add_user, "Helper")

        response = api.client.post(
            "/qa/answers/question/00000000-0000-0000-0000-000000000000",
            json={"content": "Orphaned answer"},
            headers=api.auth(helper),
        )

        assert response.status_code == 404

    def test_my_answers(self, api):
        me = api.seed(add_user, "Me")
        question = api.seed(add_question, me)
        api.seed(add_answer, question, me)

        assert api.client.get("/qa/answers/my-answers").status_code == 401
        response = api.client.get("/qa/answers/my-answers", headers=api.auth(me))
        assert response.json()["pagination"]["total"] == 1

    def test_get_single_answer_with_vote_status(self, api):
        asker = api.seed(add_user, "Asker")
        helper = api.seed(add_user, "Helper")
        question = api.seed(add_question, asker)
        answer = api.seed(add_answer, question, helper)
        api.client.post(
            f"/qa/answers/{answer.id}/vote",
            json={"voteType": "upvote"},
            headers=api.auth(asker),
        )

        anonymous = api.client.get(f"/qa/answers/{answer.id}").json()
        signed_in = api.client.get(
            f"/qa/answers/{answer.id}", headers=api.auth(asker)
        ).json()

        assert anonymous["success"] is True
        assert anonymous["data"]["id"] == str(answer.id)
        assert anonymous["data"]["upvote_count"] == 1
        assert anonymous["data"]["user_vote_status"] is None
        assert signed_in["data"]["user_vote_status"] == "upvote"

    def test_get_deleted_answer_is_404(self, api):
        asker = api.seed(add_user, "Asker")
        helper = api.seed(add_user, "Helper")
        question = api.seed(add_question, asker)
        answer = api.seed(add_answer, question, helper)
        api.client.delete(f"/qa/answers/{answer.id}", headers=api.auth(helper))

        assert api.client.get(f"/qa/answers/{answer.id}").status_code == 404

    def test_edit_answer(self, api):
        asker = api.seed(add_user, "Asker")
        helper = api.seed(add_user, "Helper")
        question = api.seed(add_question, asker)
        answer = api.seed(add_answer, question, helper)

        forbidden = api.client.put(
            f"/qa/answers/{answer.id}",
            json={"content": "Hijacked"},
            headers=api.auth(asker),
        )
        edited = api.client.put(
            f"/qa/answers/{answer.id}",
            json={"content": "A monad is a monoid in the category of endofunctors."},
            headers=api.auth(helper),
        )
        too_short = api.client.put(
            f"/qa/answers/{answer.id}", json={"content": "x"}, headers=api.auth(helper)
        )

        assert forbidden.status_code == 403
        assert edited.status_code == 200
        assert edited.json()["message"] == "Answer updated"
        assert edited.json()["data"]["content"].startswith("A monad is")
        assert too_short.status_code == 422
