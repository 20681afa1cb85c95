"""
StarterKit Backend — User Service
===================================

What:  Produces the sample user list and builds newly "created" users.
How:   Pure functions of their input plus the clock; nothing is stored.
Who:   Called by the users route handlers.

Identifier scheme:
    A created user's `id` is the current time in milliseconds since the epoch.
    Two users created within the same millisecond get the same id. Since no
    user is ever stored or looked up by id, collisions have no effect.
"""

import logging
import time
from typing import Callable, List

from starterkit.exceptions import ValidationError
from starterkit.schemas.api import User, iso_timestamp

logger = logging.getLogger(__name__)

SAMPLE_USERS = (
    {"id": 1, "name": "John Doe", "email": "john@example.com"},
    {"id": 2, "name": "Jane Smith", "email": "jane@example.com"},
)


def _millis() -> int:
    return int(time.time() * 1000)


class UserService:
    """Stateless user operations."""

    def __init__(self, clock: Callable[[], int] = _millis):
        self._clock = clock

    def list_users(self) -> List[User]:
        return [User(**user) for user in SAMPLE_USERS]

    def create_user(self, name, email) -> User:
        """
        Build a new user from request fields.

        Raises:
            ValidationError: when `name` or `email` is missing, empty or not a string.
        """
        if not (name and isinstance(name, str)) or not (email and isinstance(email, str)):
            raise ValidationError(
                message="Name and email are required",
                context={"has_name": bool(name), "has_email": bool(email)},
            )

        user = User(id=self._clock(), name=name, email=email, created_at=iso_timestamp())
        logger.info("Created user id=%d", user.id)
        return user


# Singleton instance
user_service = UserService()
