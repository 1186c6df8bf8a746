"""Unit tests for the Authenticator."""

from datetime import timedelta

import pytest
from jose import jwt

from taskmanager.errors import AuthError, ConflictError, ValidationError
from taskmanager.services.session import Authenticator, get_password_hash, verify_password
from taskmanager.repositories import InMemoryRepository

from conftest import TEST_SECRET


def test_password_hashing():
    """Test that hashes verify only the original password."""
    hashed = get_password_hash("pw123456")

    assert hashed != "pw123456"
    assert verify_password("pw123456", hashed)
    assert not verify_password("wrong", hashed)


def test_register_returns_token_and_user(authenticator):
    """Test that registration stores a hash and issues a token."""
    result = authenticator.register("alice", "a@x.com", "pw123456")

    assert result.user.username == "alice"
    assert result.user.hashed_password != "pw123456"
    identity = authenticator.verify(result.token)
    assert identity.user_id == result.user.id
    assert identity.username == "alice"


@pytest.mark.parametrize(
    "username,email,password",
    [("", "a@x.com", "pw"), ("alice", None, "pw"), ("alice", "a@x.com", ""), ("  ", "a@x.com", "pw")],
)
def test_register_requires_all_fields(authenticator, username, email, password):
    """Test that missing fields are a validation error."""
    with pytest.raises(ValidationError):
        authenticator.register(username, email, password)


def test_register_duplicate_email_or_username(authenticator):
    """Test that neither email nor username may be reused."""
    authenticator.register("alice", "a@x.com", "pw123456")

    with pytest.raises(ConflictError):
        authenticator.register("alice2", "a@x.com", "pw123456")
    with pytest.raises(ConflictError):
        authenticator.register("alice", "other@x.com", "pw123456")


def test_login_success(authenticator):
    """Test logging in with the right password."""
    registered = authenticator.register("alice", "a@x.com", "pw123456")

    result = authenticator.login("a@x.com", "pw123456")
    assert result.user.id == registered.user.id
    assert authenticator.verify(result.token).user_id == registered.user.id


def test_login_failures_look_the_same(authenticator):
    """Test that wrong password and unknown email give the same error."""
    authenticator.register("alice", "a@x.com", "pw123456")

    with pytest.raises(AuthError) as wrong_password:
        authenticator.login("a@x.com", "nope")
    with pytest.raises(AuthError) as unknown_email:
        authenticator.login("nobody@x.com", "pw123456")

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.status_code == unknown_email.value.status_code == 401


def test_login_requires_fields(authenticator):
    with pytest.raises(ValidationError):
        authenticator.login("", "pw")


def test_verify_rejects_tampered_token(authenticator):
    """Test that a token signed with another key is refused."""
    user = authenticator.register("alice", "a@x.com", "pw123456").user
    forged = Authenticator(InMemoryRepository(), secret_key="other").create_access_token(user)

    with pytest.raises(AuthError) as exc:
        authenticator.verify(forged)
    assert exc.value.status_code == 403

    with pytest.raises(AuthError):
        authenticator.verify("not-a-token")


def test_verify_rejects_expired_token(authenticator):
    """Test that an expired token is refused."""
    user = authenticator.register("alice", "a@x.com", "pw123456").user
    expired = authenticator.create_access_token(user, expires_delta=timedelta(seconds=-10))

    with pytest.raises(AuthError):
        authenticator.verify(expired)


def test_token_claims(authenticator):
    """Test the token carries the user id, username and a 24h expiry."""
    user = authenticator.register("alice", "a@x.com", "pw123456").user
    token = authenticator.create_access_token(user)

    claims = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
    assert claims["sub"] == user.id
    assert claims["username"] == "alice"
    assert 23 * 3600 < claims["exp"] - user.created_at.timestamp() <= 24 * 3600 + 60
