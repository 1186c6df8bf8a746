"""Helpers shared by the record models."""

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Return a fresh record identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
