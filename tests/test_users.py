"""Tests for the user profile and status operations."""

from tests.helpers import GET_USER, UPDATE_STATUS, first_error, gql


def test_get_current_user(client, auth_headers, create_post):
    """Test getting current user info with posts."""
    post = create_post(auth_headers)
    body = gql(client, GET_USER, headers=auth_headers)
    user = body["data"]["user"]
    assert user["_id"] == auth_headers.user_id
    assert user["email"] == auth_headers.email
    assert user["name"] == "Test User"
    assert user["status"] == "I am new!"
    assert user["posts"] == [{"_id": post["_id"], "title": post["title"]}]


def test_get_user_requires_auth(client):
    body = gql(client, GET_USER)
    error = first_error(body)
    assert error["message"] == "Not authenticated!"
    assert error["extensions"]["status"] == 401


def test_get_user_for_deleted_account(client, auth_headers):
    """A valid token for a user that no longer exists is a not-found."""
    from src.models.user import User

    with client.app.state.database.session() as db:
        db.delete(db.get(User, int(auth_headers.user_id)))
        db.commit()

    body = gql(client, GET_USER, headers=auth_headers)
    error = first_error(body)
    assert error["message"] == "User not found."
    assert error["extensions"]["status"] == 404


def test_update_status(client, auth_headers):
    body = gql(client, UPDATE_STATUS, {"status": "Writing a new post"}, auth_headers)
    assert body["data"]["updateStatus"] == {
        "_id": auth_headers.user_id,
        "status": "Writing a new post",
    }

    body = gql(client, GET_USER, headers=auth_headers)
    assert body["data"]["user"]["status"] == "Writing a new post"


def test_update_status_requires_auth(client):
    body = gql(client, UPDATE_STATUS, {"status": "Nope"})
    assert first_error(body)["extensions"]["status"] == 401


def test_status_is_per_user(client, register, auth_headers):
    other = register(email="other@example.com")
    gql(client, UPDATE_STATUS, {"status": "Busy"}, other)

    body = gql(client, GET_USER, headers=auth_headers)
    assert body["data"]["user"]["status"] == "I am new!"
