"""Users logic module: identity lookup and bootstrap accounts."""

from logic.users.service import UserService

__all__ = ["UserService"]
