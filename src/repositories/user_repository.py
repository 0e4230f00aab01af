"""User repository for database operations on users."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities import User, UserRole
from infrastructure.models import UserModel

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user lookups and bootstrap creation.

    All methods accept an AsyncSession to support transactions.
    """

    async def create(
        self,
        session: AsyncSession,
        name: str,
        email: str,
        api_token: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a new user.

        Args:
            session: SQLAlchemy async session (can be part of a transaction)
            name: Display name
            email: Unique email address
            api_token: Unique bearer token
            role: User role

        Returns:
            User: Created user
        """
        db_user = UserModel(name=name, email=email, api_token=api_token, role=role.value)
        session.add(db_user)
        await session.flush()

        logger.info(f"Created user {db_user.id} ({email}) with role {role.value}")
        return User.from_model(db_user)

    async def get_by_id(self, session: AsyncSession, user_id: int) -> User | None:
        """Get a user by ID.

        Args:
            session: SQLAlchemy async session
            user_id: User identifier

        Returns:
            User | None: User if found, None otherwise
        """
        db_user = await session.get(UserModel, user_id)
        if db_user is None:
            logger.warning(f"User not found: {user_id}")
            return None
        return User.from_model(db_user)

    async def get_by_token(self, session: AsyncSession, api_token: str) -> User | None:
        """Resolve a bearer token to its user."""
        stmt = select(UserModel).where(UserModel.api_token == api_token)
        result = await session.execute(stmt)
        db_user = result.scalar_one_or_none()
        return User.from_model(db_user) if db_user is not None else None

    async def get_by_email(self, session: AsyncSession, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await session.execute(stmt)
        db_user = result.scalar_one_or_none()
        return User.from_model(db_user) if db_user is not None else None

    async def update_credentials(
        self, session: AsyncSession, user_id: int, api_token: str, role: UserRole
    ) -> User:
        """Replace a user's token and role.

        Args:
            session: SQLAlchemy async session
            user_id: User identifier (must exist)
            api_token: New bearer token
            role: New role

        Returns:
            User: Updated user
        """
        db_user = await session.get(UserModel, user_id)
        if db_user is None:
            raise LookupError(f"User {user_id} does not exist")
        db_user.api_token = api_token
        db_user.role = role.value
        await session.flush()

        logger.info(f"Updated credentials of user {user_id} (role {role.value})")
        return User.from_model(db_user)
