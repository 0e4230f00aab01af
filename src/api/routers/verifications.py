"""Verification dependencies for API endpoints.

This module provides reusable verification dependencies that can be injected
into endpoint functions using FastAPI's Depends() pattern.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_user_service
from domain.entities import User
from domain.errors import AuthenticationError
from logic.users import UserService

bearer_scheme = HTTPBearer(auto_error=False, description="User API token")


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Authenticate the caller and return it.

    Usage:
        @router.get("/sessions")
        async def list_sessions(
            current_user: Annotated[User, Depends(get_current_user)],
        ):
            # caller is guaranteed to be authenticated here
            ...

    Args:
        credentials: Parsed ``Authorization: Bearer`` header, if any
        user_service: Injected user service

    Returns:
        User: The authenticated user

    Raises:
        AuthenticationError: 401 if the header is missing or the token unknown
    """
    if credentials is None:
        raise AuthenticationError()
    return await user_service.authenticate(credentials.credentials)
