"""
Unit tests for authentication endpoints.

Tests:
- POST /auth/token
- POST /auth/register
"""

from jobly.core.security import decode_token


class TestToken:
    """Test POST /auth/token"""

    def test_works(self, client, seed):
        response = client.post("/auth/token", json={"username": "u1", "password": "password1"})

        assert response.status_code == 200
        payload = decode_token(response.json()["token"])
        assert payload["username"] == "u1"
        assert payload["isAdmin"] is False

    def test_unauth_with_non_existent_user(self, client, seed):
        response = client.post("/auth/token", json={"username": "no-such-user", "password": "password1"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid username/password"

    def test_unauth_with_wrong_password(self, client, seed):
        response = client.post("/auth/token", json={"username": "u1", "password": "nope"})

        assert response.status_code == 401

    def test_bad_request_with_missing_data(self, client, seed):
        response = client.post("/auth/token", json={"username": "u1"})

        assert response.status_code == 400

    def test_bad_request_with_invalid_data(self, client, seed):
        response = client.post("/auth/token", json={"username": 42, "password": "above-is-a-number"})

        assert response.status_code == 400


class TestRegister:
    """Test POST /auth/register"""

    def test_works_for_anon(self, client, seed):
        response = client.post("/auth/register", json={
            "username": "new",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "new@email.com",
        })

        assert response.status_code == 201
        payload = decode_token(response.json()["token"])
        assert payload["username"] == "new"
        assert payload["isAdmin"] is False

    def test_new_user_can_log_in(self, client, seed):
        client.post("/auth/register", json={
            "username": "new",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "new@email.com",
        })

        response = client.post("/auth/token", json={"username": "new", "password": "password"})
        assert response.status_code == 200

    def test_cannot_register_as_admin(self, client, seed):
        response = client.post("/auth/register", json={
            "username": "new",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "new@email.com",
            "isAdmin": True,
        })

        assert response.status_code == 400

    def test_bad_request_with_missing_fields(self, client, seed):
        response = client.post("/auth/register", json={"username": "new"})

        assert response.status_code == 400
        assert isinstance(response.json()["error"]["message"], list)

    def test_bad_request_with_invalid_email(self, client, seed):
        response = client.post("/auth/register", json={
            "username": "new",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "not-an-email",
        })

        assert response.status_code == 400

    def test_bad_request_with_duplicate_username(self, client, seed):
        response = client.post("/auth/register", json={
            "username": "u1",
            "firstName": "first",
            "lastName": "last",
            "password": "password",
            "email": "new@email.com",
        })

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Duplicate username: u1"
