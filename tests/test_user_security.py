import pytest
from fastapi import HTTPException

from finsight.security.user_security import create_access_token, verify_token


class TestTokens:
    def test_token_round_trip(self, db_session, user):
        token = create_access_token(user)

        assert verify_token(token=token, db=db_session) == "tester"

    def test_garbage_token_is_rejected(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            verify_token(token="not-a-jwt", db=db_session)

        assert exc_info.value.status_code == 401

    def test_token_for_removed_user_is_rejected(self, db_session, user):
        token = create_access_token(user)
        db_session.delete(user)
        db_session.commit()

        with pytest.raises(HTTPException) as exc_info:
            verify_token(token=token, db=db_session)

        assert exc_info.value.status_code == 401


class TestUserEndpoints:
    """Registration, login and profile routes."""

    def test_register_and_login(self, client):
        response = client.post(
            "/user/create",
            json={
                "fullName": "Rafi Ahmed",
                "username": "rafi",
                "email": "rafi@example.com",
                "password": "correct-horse",
            },
        )
        assert response.status_code == 201

        login = client.post("/user/login", data={"username": "rafi", "password": "correct-horse"})
        assert login.status_code == 200
        assert login.json()["token_type"] == "bearer"

        rejected = client.post("/user/login", data={"username": "rafi", "password": "wrong-horse"})
        assert rejected.status_code == 401

    def test_duplicate_username_is_rejected(self, client):
        response = client.post(
            "/user/create",
            json={"fullName": "Other", "username": "tester", "email": "other@example.com", "password": "12345678"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Username already registered"

    def test_duplicate_email_is_rejected(self, client):
        response = client.post(
            "/user/create",
            json={"fullName": "Other", "username": "other", "email": "tester@example.com", "password": "12345678"},
        )

        assert response.status_code == 400

    def test_malformed_email_is_rejected(self, client):
        response = client.post(
            "/user/create",
            json={"fullName": "Other", "username": "other", "email": "not-an-email", "password": "12345678"},
        )

        assert response.status_code == 422

    def test_profile(self, client):
        profile = client.get("/user/me").json()

        assert profile["username"] == "tester"
        assert profile["fullName"] == "Test User"
        assert "hashedPassword" not in profile

    def test_update_profile(self, client):
        response = client.patch("/user/me", json={"fullName": "Renamed", "email": "new@example.com"})

        assert response.status_code == 200
        assert response.json()["fullName"] == "Renamed"
        assert response.json()["email"] == "new@example.com"
