"""
Test suite for the user data-access layer.
"""

import pytest

from app.core.database import run_query
from app.core.errors import InvalidRequestError, NotFoundError, UnauthorizedError
from app.crud import user as user_crud


class TestAuthenticate:
    """Tests for user_crud.authenticate"""

    def test_valid_credentials(self, db_session, seed_data):
        user = user_crud.authenticate(db_session, "u1", "password1")

        assert user["username"] == "u1"
        assert user["firstName"] == "U1F"
        assert not user["isAdmin"]
        assert "password" not in user

    def test_unknown_user(self, db_session, seed_data):
        with pytest.raises(UnauthorizedError):
            user_crud.authenticate(db_session, "nope", "password")

    def test_wrong_password(self, db_session, seed_data):
        with pytest.raises(UnauthorizedError) as exc:
            user_crud.authenticate(db_session, "u1", "wrong")
        assert exc.value.message == "Invalid username/password"


class TestRegister:
    """Tests for user_crud.register"""

    def test_register_hashes_password(self, db_session, seed_data):
        user = user_crud.register(db_session, {
            "username": "new",
            "password": "password",
            "firstName": "Test",
            "lastName": "Tester",
            "email": "test@test.com",
            "isAdmin": False,
        })

        assert user == {
            "username": "new",
            "firstName": "Test",
            "lastName": "Tester",
            "email": "test@test.com",
            "isAdmin": False,
        }
        stored = run_query(db_session, "SELECT password FROM users WHERE username = $1", ["new"])
        assert stored[0]["password"].startswith("$2b$")

    def test_register_admin(self, db_session, seed_data):
        user = user_crud.register(db_session, {
            "username": "boss",
            "password": "password",
            "firstName": "B",
            "lastName": "Oss",
            "email": "boss@test.com",
            "isAdmin": True,
        })
        assert user["isAdmin"]

    def test_register_duplicate(self, db_session, seed_data):
        with pytest.raises(InvalidRequestError) as exc:
            user_crud.register(db_session, {
                "username": "u1",
                "password": "password",
                "firstName": "U",
                "lastName": "One",
                "email": "u1@test.com",
            })
        assert exc.value.message == "Duplicate username: u1"


class TestFindAndGet:
    """Tests for find_all and get"""

    def test_find_all(self, db_session, seed_data):
        users = user_crud.find_all(db_session)
        assert [user["username"] for user in users] == ["u1", "u2", "u4"]

    def test_get(self, db_session, seed_data):
        user = user_crud.get(db_session, "u4")

        assert user["email"] == "user4@user.com"
        assert user["isAdmin"]

    def test_get_missing(self, db_session, seed_data):
        with pytest.raises(NotFoundError) as exc:
            user_crud.get(db_session, "nope")
        assert exc.value.message == "No user: nope"


class TestUpdate:
    """Tests for user_crud.update"""

    def test_update_renames_api_fields(self, db_session, seed_data):
        user = user_crud.update(db_session, "u1", {"firstName": "NewF", "email": "new@email.com"})

        assert user["firstName"] == "NewF"
        assert user["lastName"] == "U1L"
        assert user["email"] == "new@email.com"

    def test_update_password(self, db_session, seed_data):
        user_crud.update(db_session, "u1", {"password": "new-password"})

        assert user_crud.authenticate(db_session, "u1", "new-password")["username"] == "u1"
        with pytest.raises(UnauthorizedError):
            user_crud.authenticate(db_session, "u1", "password1")

    def test_update_missing(self, db_session, seed_data):
        with pytest.raises(NotFoundError):
            user_crud.update(db_session, "nope", {"firstName": "x"})

    def test_update_without_data(self, db_session, seed_data):
        with pytest.raises(InvalidRequestError):
            user_crud.update(db_session, "u1", {})


class TestRemove:
    """Tests for user_crud.remove"""

    def test_remove(self, db_session, seed_data):
        user_crud.remove(db_session, "u2")

        with pytest.raises(NotFoundError):
            user_crud.get(db_session, "u2")

    def test_remove_missing(self, db_session, seed_data):
        with pytest.raises(NotFoundError):
            user_crud.remove(db_session, "nope")
