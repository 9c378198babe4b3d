"""
Test suite for user management endpoints.

Tests cover:
- Admin-only creation and listing
- Same-user-or-admin access for get/update/delete
"""

from app.core.security import decode_token

USERS_URL = "/api/v1/users/"


class TestUserCreation:
    """Tests for POST /users"""

    new_user = {
        "username": "u-new",
        "firstName": "First-new",
        "lastName": "Last-new",
        "password": "password-new",
        "email": "new@email.com",
        "isAdmin": True,
    }

    def test_create_admin_user(self, client, seed_data, admin_headers):
        response = client.post(USERS_URL, json=self.new_user, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["user"] == {
            "username": "u-new",
            "firstName": "First-new",
            "lastName": "Last-new",
            "email": "new@email.com",
            "isAdmin": True,
        }
        payload = decode_token(data["token"])
        assert payload["sub"] == "u-new"
        assert payload["is_admin"] is True

    def test_create_non_admin_caller(self, client, seed_data, u1_headers):
        response = client.post(USERS_URL, json=self.new_user, headers=u1_headers)
        assert response.status_code == 401

    def test_create_invalid_email(self, client, seed_data, admin_headers):
        response = client.post(USERS_URL, json={**self.new_user, "email": "not-an-email"}, headers=admin_headers)
        assert response.status_code == 400


class TestUserListing:
    """Tests for GET /users"""

    def test_list_as_admin(self, client, seed_data, admin_headers):
        response = client.get(USERS_URL, headers=admin_headers)

        assert response.status_code == 200
        assert [u["username"] for u in response.json()["users"]] == ["u1", "u2", "u4"]

    def test_list_non_admin(self, client, seed_data, u1_headers):
        response = client.get(USERS_URL, headers=u1_headers)
        assert response.status_code == 401


class TestUserAccess:
    """Tests for GET/PATCH/DELETE /users/{username}"""

    def test_get_self(self, client, seed_data, u1_headers):
        response = client.get(f"{USERS_URL}u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {
            "user": {
                "username": "u1",
                "firstName": "U1F",
                "lastName": "U1L",
                "email": "user1@user.com",
                "isAdmin": False,
            }
        }

    def test_get_other_user_forbidden(self, client, seed_data, u1_headers):
        response = client.get(f"{USERS_URL}u2", headers=u1_headers)
        assert response.status_code == 401

    def test_get_other_user_as_admin(self, client, seed_data, admin_headers):
        response = client.get(f"{USERS_URL}u2", headers=admin_headers)
        assert response.json()["user"]["username"] == "u2"

    def test_get_missing_as_admin(self, client, seed_data, admin_headers):
        response = client.get(f"{USERS_URL}nope", headers=admin_headers)
        assert response.status_code == 404

    def test_update_self(self, client, seed_data, u1_headers):
        response = client.patch(f"{USERS_URL}u1", json={"firstName": "New"}, headers=u1_headers)

        assert response.status_code == 200
        assert response.json()["user"]["firstName"] == "New"

    def test_update_cannot_grant_admin(self, client, seed_data, u1_headers):
        response = client.patch(f"{USERS_URL}u1", json={"isAdmin": True}, headers=u1_headers)
        assert response.status_code == 400

    def test_update_null_fields_rejected(self, client, seed_data, u1_headers):
        for body in ({"password": None}, {"firstName": None}, {"lastName": None}, {"email": None}):
            response = client.patch(f"{USERS_URL}u1", json=body, headers=u1_headers)
            assert response.status_code == 400

        assert client.get(f"{USERS_URL}u1", headers=u1_headers).json()["user"]["firstName"] == "U1F"

    def test_update_password_then_login(self, client, seed_data, u1_headers):
        response = client.patch(f"{USERS_URL}u1", json={"password": "brand-new"}, headers=u1_headers)
        assert response.status_code == 200

        login = client.post("/api/v1/auth/token", json={"username": "u1", "password": "brand-new"})
        assert login.status_code == 200

    def test_delete_self(self, client, seed_data, u1_headers):
        response = client.delete(f"{USERS_URL}u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "u1"}

    def test_delete_anon(self, client, seed_data):
        response = client.delete(f"{USERS_URL}u1")
        assert response.status_code == 401
