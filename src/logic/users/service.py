"""User service for resolving identities from bearer tokens."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.entities import User, UserRole
from domain.errors import AuthenticationError
from repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Service for authenticating callers and seeding the bootstrap admin."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        user_repo: UserRepository,
    ) -> None:
        self.session_maker = session_maker
        self.user_repo = user_repo

    async def authenticate(self, api_token: str | None) -> User:
        """Resolve a bearer token to a user.

        Args:
            api_token: Token taken from the Authorization header

        Returns:
            User: The authenticated user

        Raises:
            AuthenticationError: Token missing or unknown
        """
        if not api_token:
            raise AuthenticationError()

        async with self.session_maker() as db_session:
            user = await self.user_repo.get_by_token(db_session, api_token)

        if user is None:
            logger.warning("Rejected request with unknown API token")
            raise AuthenticationError()
        return user

    async def ensure_admin(self, name: str, email: str, api_token: str) -> User:
        """Make sure an admin holding ``api_token`` exists.

        A user already holding the token is promoted to ADMIN. Otherwise a user
        with the admin email gets the new token (token rotation). Otherwise a
        new admin is created.
        """
        async with self.session_maker() as db_session:
            existing = await self.user_repo.get_by_token(db_session, api_token)
            if existing is not None and existing.is_admin:
                return existing

            if existing is not None:
                logger.warning(
                    f"Bootstrap token belongs to user {existing.id} ({existing.email}); "
                    "promoting to ADMIN"
                )
                admin = await self.user_repo.update_credentials(
                    db_session, existing.id, api_token=api_token, role=UserRole.ADMIN
                )
            else:
                by_email = await self.user_repo.get_by_email(db_session, email)
                if by_email is not None:
                    logger.info(f"Rotating bootstrap admin token for {email}")
                    admin = await self.user_repo.update_credentials(
                        db_session, by_email.id, api_token=api_token, role=UserRole.ADMIN
                    )
                else:
                    admin = await self.user_repo.create(
                        db_session,
                        name=name,
                        email=email,
                        api_token=api_token,
                        role=UserRole.ADMIN,
                    )
                    logger.info(f"Bootstrap admin created: {email}")
            await db_session.commit()

        return admin
