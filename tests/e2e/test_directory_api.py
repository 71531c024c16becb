"""End-to-end tests for the member directory, admin listing and health."""

from qa.domain.value import UserRole
from tests.conftest import add_user, minutes
from tests.harness import create_client_fixture

api = create_client_fixture()


class TestCommunityDirectory:
    def test_directory_envelope(self, api):
        api.seed(add_user, "Ada", reputation=40)
        api.seed(add_user, "Grace", reputation=90)
        api.seed(add_user, "Hidden", active=False)

        response = api.client.get("/users/community")

        assert response.status_code == 200
        body = response.json()
        assert [u["name"] for u in body["users"]] == ["Grace", "Ada"]
        assert body["users"][0]["stats"]["reputation"] == 90
        assert body["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalItems": 2,
            "itemsPerPage": 10,
        }

    def test_email_is_not_searchable(self, api):
        api.seed(add_user, "Ada", email="countess@example.com")

        response = api.client.get("/users/community", params={"search": "countess"})

        assert response.json()["users"] == []

    def test_stats_for_unknown_user_is_404(self, api):
        response = api.client.get(
            "/users/00000000-0000-0000-0000-000000000000/stats"
        )

        assert response.status_code == 404


class TestAdminUsers:
    def test_requires_admin(self, api):
        user = api.seed(add_user, "Regular")

        assert api.client.get("/admin/users").status_code == 401
        assert api.client.get("/admin/users", headers=api.auth(user)).status_code == 403

    def test_admin_listing(self, api):
        admin = api.seed(add_user, "Root", role=UserRole.ADMIN, created_at=minutes(0))
        for i in range(8):
            api.seed(add_user, f"Member {i}", created_at=minutes(i + 1))
        api.seed(add_user, "Dormant", email="sleepy@example.com", active=False)

        first = api.client.get("/admin/users", headers=api.auth(admin)).json()
        assert first["pagination"]["itemsPerPage"] == 7
        assert first["pagination"]["totalItems"] == 10

        found = api.client.get(
            "/admin/users",
            params={"search": "sleepy", "active": "false"},
            headers=api.auth(admin),
        ).json()
        assert [u["name"] for u in found["users"]] == ["Dormant"]
        assert found["users"][0]["email"] == "sleepy@example.com"


    def test_deactivate_and_restore(self, api):
        admin = api.seed(add_user, "Root", role=UserRole.ADMIN)
        member = api.seed(add_user, "Member", reputation=12)

        deactivated = api.client.delete(
            f"/admin/users/{member.id}", headers=api.auth(admin)
        )
        assert deactivated.status_code == 200
        assert deactivated.json()["message"] == "User deactivated"
        assert deactivated.json()["user"]["active"] is False
        directory = api.client.get("/users/community").json()
        assert [u["name"] for u in directory["users"]] == ["Root"]
        stats = api.client.get(f"/users/{member.id}/stats").json()
        assert stats["reputation"] == 12

        restored = api.client.put(
            f"/admin/users/{member.id}/restore", headers=api.auth(admin)
        )
        assert restored.status_code == 200
        assert restored.json()["message"] == "User restored"
        directory = api.client.get("/users/community").json()
        assert sorted(u["name"] for u in directory["users"]) == ["Member", "Root"]

    def test_deactivate_requires_admin_and_existing_user(self, api):
        admin = api.seed(add_user, "Root", role=UserRole.ADMIN)
        member = api.seed(add_user, "Member")

        anonymous = api.client.delete(f"/admin/users/{member.id}")
        regular = api.client.delete(
            f"/admin/users/{admin.id}", headers=api.auth(member)
        )
        missing = api.client.put(
            "/admin/users/00000000-0000-0000-0000-000000000000/restore",
            headers=api.auth(admin),
        )

        assert anonymous.status_code == 401
        assert regular.status_code == 403
        assert missing.status_code == 404


class TestHealth:
    def test_health(self, api):
        response = api.client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "0.1.0"
