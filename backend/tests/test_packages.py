from conftest import login
from panel.modules.packages.limits import format_limit, usage_percentage

BASIC = {"name": "Basic", "diskSpace": 1, "bandwidth": 10, "emailAccounts": 5, "databases": 1, "domains": 1}


class TestLimitHelpers:
    def test_unlimited_is_never_a_negative_quantity(self):
        assert format_limit(-1, "GB") == "Unlimited"
        assert format_limit(10, "GB") == "10GB"
        assert usage_percentage(500, -1) == 0

    def test_usage_percentage(self):
        assert usage_percentage(5, 10) == 50
        assert usage_percentage(0, 0) == 0
        assert usage_percentage(3, 2) == 150


class TestPackageApi:
    def test_create_with_unlimited_bandwidth(self, admin_client):
        response = admin_client.post("/api/hosting-packages", json=dict(BASIC, bandwidth=-1))
        assert response.status_code == 201
        assert response.json()["bandwidth"] == -1

    def test_rejects_values_below_unlimited_sentinel(self, admin_client):
        response = admin_client.post("/api/hosting-packages", json=dict(BASIC, bandwidth=-2))
        assert response.status_code == 400

    def test_mutation_is_admin_only(self, user_client):
        assert user_client.get("/api/hosting-packages").status_code == 200
        response = user_client.post("/api/hosting-packages", json=BASIC)
        assert response.status_code == 403
        assert response.json()["code"] == "ForbiddenError"

    def test_delete_guard_names_user_count(self, admin_client):
        package = admin_client.post("/api/hosting-packages", json=BASIC).json()
        user = admin_client.post(
            "/api/users",
            json={"username": "bob", "email": "bob@example.com", "password": "secret123", "packageId": package["id"]},
        ).json()

        response = admin_client.delete(f"/api/hosting-packages/{package['id']}")
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "ConflictError"
        assert body["error"] == (
            "This package is being used by 1 user(s). Please reassign users before deleting."
        )

        admin_client.put(f"/api/users/{user['id']}", json={"packageId": None})
        assert admin_client.delete(f"/api/hosting-packages/{package['id']}").status_code == 200
        assert admin_client.get(f"/api/hosting-packages/{package['id']}").status_code == 404

    def test_update_merges(self, admin_client):
        package = admin_client.post("/api/hosting-packages", json=BASIC).json()
        response = admin_client.put(f"/api/hosting-packages/{package['id']}", json={"domains": 5})
        assert response.json()["domains"] == 5
        assert response.json()["name"] == "Basic"


class TestUsersEndToEnd:
    def test_package_then_user_then_list(self, admin_client):
        package = admin_client.post("/api/hosting-packages", json=BASIC)
        assert package.status_code == 201

        created = admin_client.post(
            "/api/users",
            json={
                "username": "bob",
                "email": "bob@x.com",
                "password": "hashed",
                "packageId": package.json()["id"],
            },
        )
        assert created.status_code == 201

        users = admin_client.get("/api/users").json()
        bob = next(u for u in users if u["username"] == "bob")
        assert bob["diskUsage"] == 0
        assert bob["packageId"] == package.json()["id"]
        assert "password" not in bob

    def test_usage_report_marks_unlimited(self, admin_client):
        package = admin_client.post("/api/hosting-packages", json=dict(BASIC, emailAccounts=-1)).json()
        user = admin_client.post(
            "/api/users",
            json={"username": "bob", "email": "bob@example.com", "password": "secret123", "packageId": package["id"]},
        ).json()
        admin_client.post("/api/domains", json={"domain": "bob.com", "type": "primary", "userId": user["id"]})

        report = admin_client.get(f"/api/users/{user['id']}/usage").json()
        assert report["emailAccounts"]["unlimited"] is True
        assert report["emailAccounts"]["label"] == "0 / Unlimited"
        assert report["domains"] == {"used": 1, "limit": 1, "unlimited": False, "percentage": 100, "label": "1 / 1"}

    def test_user_routes_are_admin_or_self(self, user_client, other_client, storage):
        alice = storage.get_user_by_username("alice")
        assert user_client.get(f"/api/users/{alice.id}").status_code == 200
        assert other_client.get(f"/api/users/{alice.id}").status_code == 404
        assert user_client.get("/api/users").status_code == 403

    def test_users_count(self, admin_client, user_client):
        assert admin_client.get("/api/users/count").json() == {"count": 2}

    def test_cannot_delete_self(self, admin_client):
        me = admin_client.get("/api/auth/me").json()
        assert admin_client.delete(f"/api/users/{me['id']}").status_code == 400

    def test_admin_created_email_is_case_insensitive(self, admin_client, client):
        created = admin_client.post(
            "/api/users", json={"username": "eve", "email": "Eve@Example.com", "password": "secret123"}
        )
        assert created.json()["email"] == "eve@example.com"

        dup = admin_client.post(
            "/api/users", json={"username": "eve2", "email": "EVE@example.com", "password": "secret123"}
        )
        assert dup.status_code == 400
        assert dup.json()["code"] == "ConflictError"

        assert login(client, "EVE@example.com", "secret123").status_code == 200
