"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from src.config import Settings
from src.main import create_app
from tests.helpers import CREATE_POST, CREATE_USER, LOGIN, AuthHeaders, gql


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite database and upload dir."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        upload_dir=tmp_path / "images",
        environment="test",
    )


@pytest.fixture
def client(settings):
    """Create a test client bound to a fresh application and database."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Factory that signs up and logs in a user, returning auth headers."""

    def _register(
        email: str = "test@example.com", password: str = "testpass123", name: str = "Test User"
    ) -> AuthHeaders:
        body = gql(
            client,
            CREATE_USER,
            {"userInput": {"email": email, "name": name, "password": password}},
        )
        assert "errors" not in body, body
        body = gql(client, LOGIN, {"email": email, "password": password})
        assert "errors" not in body, body
        data = body["data"]["login"]
        return AuthHeaders(
            {"Authorization": f"Bearer {data['token']}"}, user_id=data["userId"], email=email
        )

    return _register


@pytest.fixture
def auth_headers(register):
    """Create a user and return auth headers with user info."""
    return register()


@pytest.fixture
def create_post(client):
    """Factory that creates a post as the given user."""

    def _create_post(
        headers, title: str = "Hello World", content: str = "Hello World", image_url=None
    ) -> dict:
        body = gql(
            client,
            CREATE_POST,
            {"postInput": {"title": title, "content": content, "imageUrl": image_url}},
            headers,
        )
        assert "errors" not in body, body
        return body["data"]["createPost"]

    return _create_post
