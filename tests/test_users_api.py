"""
API tests for the account endpoints.

Run with: pytest tests/test_users_api.py -v
"""

import pytest


def _signup(client, username="alice", password="p1"):
    return client.post("/signup", json={"username": username, "password": password})


class TestSignup:
    def test_returns_safe_projection(self, client):
        response = _signup(client)

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"username", "dateJoined"}
        assert data["username"] == "alice"

    def test_duplicate_username(self, client):
        _signup(client)

        response = _signup(client, password="other")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save user"}

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"username": "alice"},
            {"password": "p1"},
            {"username": 7, "password": "p1"},
            {"username": "alice", "password": None},
        ],
    )
    def test_invalid_body(self, client, user_repository, payload):
        response = client.post("/signup", json=payload)

        assert response.status_code == 400
        assert response.text == "Invalid user body"
        assert user_repository.calls == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"username": "", "password": "p1"},
            {"username": "alice", "password": ""},
        ],
    )
    def test_empty_field_is_a_failed_save(self, client, user_repository, payload):
        """Test that empty strings pass the body check and fail as a save error."""
        response = client.post("/signup", json=payload)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to save user"}
        assert len(user_repository) == 0


class TestLogin:
    def test_success(self, client):
        _signup(client)

        response = client.post("/login", json={"username": "alice", "password": "p1"})

        assert response.status_code == 200
        assert response.json()["username"] == "alice"
        assert "password" not in response.json()

    def test_wrong_password(self, client):
        """Test the alice/p1 signup then login with a wrong password."""
        _signup(client, "alice", "p1")

        response = client.post("/login", json={"username": "alice", "password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid username or password"}

    def test_unknown_user_gets_the_same_error(self, client):
        response = client.post("/login", json={"username": "ghost", "password": "p1"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid username or password"}

    def test_invalid_body(self, client):
        response = client.post("/login", json={"username": "alice"})

        assert response.status_code == 400
        assert response.text == "Invalid user body"

    def test_empty_password_is_a_wrong_password(self, client):
        _signup(client, "alice", "p1")

        response = client.post("/login", json={"username": "alice", "password": ""})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid username or password"}


class TestGetUser:
    def test_found(self, client):
        joined = _signup(client).json()["dateJoined"]

        response = client.get("/getUser/alice")

        assert response.status_code == 200
        assert response.json() == {"username": "alice", "dateJoined": joined}

    def test_not_found(self, client):
        response = client.get("/getUser/nobody")

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}

    def test_backend_failure(self, client, user_repository):
        user_repository.fail = True

        response = client.get("/getUser/alice")

        assert response.status_code == 404
        assert response.json() == {"error": "Error fetching user"}


class TestDeleteUser:
    def test_deletes_and_returns_projection(self, client):
        _signup(client)

        response = client.delete("/deleteUser/alice")

        assert response.status_code == 200
        assert response.json()["username"] == "alice"
        assert client.get("/getUser/alice").status_code == 404

    def test_unknown_user(self, client):
        response = client.delete("/deleteUser/nobody")

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}


class TestResetPassword:
    def test_new_password_works(self, client):
        _signup(client, "alice", "p1")

        response = client.patch("/resetPassword", json={"username": "alice", "password": "p2"})

        assert response.status_code == 200
        assert response.json()["username"] == "alice"
        assert client.post("/login", json={"username": "alice", "password": "p2"}).status_code == 200
        assert client.post("/login", json={"username": "alice", "password": "p1"}).status_code == 401

    def test_unknown_user(self, client, user_repository):
        response = client.patch("/resetPassword", json={"username": "ghost", "password": "p2"})

        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}
        assert len(user_repository) == 0

    def test_invalid_body(self, client, user_repository):
        response = client.patch("/resetPassword", json={"username": "alice", "password": 5})

        assert response.status_code == 400
        assert response.text == "Invalid user body"
        assert user_repository.calls == []

    def test_empty_new_password_is_a_failed_reset(self, client):
        """Test that an empty password reaches the service and leaves the old one in place."""
        _signup(client, "alice", "p1")

        response = client.patch("/resetPassword", json={"username": "alice", "password": ""})

        assert response.status_code == 404
        assert response.json() == {"error": "Failed to reset password"}
        assert client.post("/login", json={"username": "alice", "password": "p1"}).status_code == 200
