"""Unit tests for the error taxonomy."""

from taskmanager.errors import (
    AuthError,
    ConflictError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)


def test_default_status_codes():
    assert ValidationError("bad").status_code == 400
    assert AuthError("nope").status_code == 401
    assert NotFoundError("gone").status_code == 404
    assert ConflictError("dup").status_code == 400
    assert UnexpectedError().status_code == 500


def test_status_code_override():
    """An explicit status replaces the class default, None keeps it."""
    assert AuthError("Invalid or expired token", 403).status_code == 403
    assert AuthError("Access token required", None).status_code == 401


def test_unexpected_error_message_is_generic():
    error = UnexpectedError()
    assert error.message == "Something went wrong!"
    assert str(error) == "Something went wrong!"
