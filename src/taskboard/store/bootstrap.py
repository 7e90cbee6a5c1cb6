from __future__ import annotations

from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .errors import StoreError
from .interfaces import UserRepository
from .models import Base, User

DEFAULT_USER_EMAIL = "default@example.com"
DEFAULT_USER_PASSWORD_HASH = "default"


def ensure_schema(engine: Engine) -> None:
    """Create the ``users`` and ``tasks`` tables if they are missing."""
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise StoreError(str(exc)) from exc


def ensure_default_user(users: UserRepository) -> User:
    """Return an existing user, creating the placeholder one on first call."""
    user = users.first()
    if user is not None:
        return user
    user = users.insert(User(email=DEFAULT_USER_EMAIL, password_hash=DEFAULT_USER_PASSWORD_HASH))
    logger.info("Created default user {}", user.id)
    return user
