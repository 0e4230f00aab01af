"""Dependency injection placeholders for FastAPI.

These functions are overridden by AppBuilder at runtime.
Services use these via Depends() for automatic dependency injection.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from config import Settings
from logic.sessions import SessionFacade, SessionService
from logic.users import UserService
from repositories.session_repository import SessionRepository
from repositories.user_repository import UserRepository


# Placeholder dependencies - will be overridden by AppBuilder
def get_db() -> async_sessionmaker[AsyncSession]:
    """Database session maker dependency.

    This is a placeholder that will be overridden by AppBuilder.
    Use with FastAPI Depends():
        db: async_sessionmaker[AsyncSession] = Depends(get_db)

    Returns:
        async_sessionmaker: Session maker instance

    Raises:
        NotImplementedError: If called before AppBuilder initialization
    """
    raise NotImplementedError("Database session maker not initialized. Use AppBuilder.")


def get_settings() -> Settings:
    """Application settings dependency.

    This is a placeholder that will be overridden by AppBuilder.
    Use with FastAPI Depends():
        settings: Settings = Depends(get_settings)

    Returns:
        Settings: Application settings

    Raises:
        NotImplementedError: If called before AppBuilder initialization
    """
    raise NotImplementedError("Settings not initialized. Use AppBuilder.")


def get_session_repository() -> SessionRepository:
    """Session repository dependency.

    Returns:
        SessionRepository: Session repository instance
    """
    return SessionRepository()


def get_user_repository() -> UserRepository:
    """User repository dependency.

    Returns:
        UserRepository: User repository instance
    """
    return UserRepository()


def get_user_service(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_db)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserService:
    """User service dependency.

    Args:
        session_maker: Database session maker (injected)
        user_repo: User repository (injected)

    Returns:
        UserService: User service instance
    """
    return UserService(session_maker=session_maker, user_repo=user_repo)


def get_session_facade(
    session_maker: Annotated[async_sessionmaker[AsyncSession], Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    session_repo: Annotated[SessionRepository, Depends(get_session_repository)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
) -> SessionFacade:
    """Session facade dependency.

    Use with FastAPI Depends():
        facade: SessionFacade = Depends(get_session_facade)

    Tests may override this with any object implementing SessionFacade.

    Args:
        session_maker: Database session maker (injected)
        settings: Application settings (injected)
        session_repo: Session repository (injected)
        user_repo: User repository (injected)

    Returns:
        SessionFacade: Database-backed session service
    """
    return SessionService(
        session_maker=session_maker,
        session_repo=session_repo,
        user_repo=user_repo,
        page_size=settings.page_size,
    )
