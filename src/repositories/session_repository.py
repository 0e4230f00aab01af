"""Session repository for database operations on voting sessions."""

import logging
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities import VotingSession
from domain.schemas import SortDirection, SortSession
from infrastructure.models import VotingSessionModel

logger = logging.getLogger(__name__)


class SessionRepository:
    """Repository for voting session operations using SQLAlchemy ORM.

    All methods accept an AsyncSession to support transactions.
    """

    async def create(
        self,
        session: AsyncSession,
        title: str,
        organizer_id: int,
        description: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> VotingSession:
        """Create a new voting session.

        Args:
            session: SQLAlchemy async session (can be part of a transaction)
            title: Session title
            organizer_id: Identifier of the organizing user
            description: Optional description
            start_date: Optional opening time
            end_date: Optional closing time

        Returns:
            VotingSession: Created session
        """
        db_session = VotingSessionModel(
            title=title,
            description=description,
            start_date=start_date,
            end_date=end_date,
            organizer_id=organizer_id,
        )
        session.add(db_session)
        await session.flush()  # Flush to get id/created_at/updated_at values
        await session.refresh(db_session)

        logger.info(f"Created voting session {db_session.id} with title: {title}")
        return VotingSession.from_model(db_session)

    async def get_by_id(
        self, session: AsyncSession, session_id: int
    ) -> VotingSession | None:
        """Get a voting session by ID.

        Args:
            session: SQLAlchemy async session
            session_id: Session identifier

        Returns:
            VotingSession | None: Session if found, None otherwise
        """
        stmt = select(VotingSessionModel).where(VotingSessionModel.id == session_id)
        result = await session.execute(stmt)
        db_session = result.scalar_one_or_none()

        if db_session is None:
            logger.warning(f"Session not found: {session_id}")
            return None

        return VotingSession.from_model(db_session)

    async def list_page(
        self,
        session: AsyncSession,
        sort: SortSession = SortSession.id,
        direction: SortDirection = SortDirection.ASC,
        limit: int = 10,
        offset: int = 0,
    ) -> list[VotingSession]:
        """List voting sessions in the requested order.

        Args:
            session: SQLAlchemy async session
            sort: Column to order by
            direction: Ascending or descending
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip

        Returns:
            list[VotingSession]: List of sessions
        """
        column = getattr(VotingSessionModel, sort.value)
        order = column.desc() if direction == SortDirection.DESC else column.asc()

        stmt = select(VotingSessionModel).order_by(order)
        if sort != SortSession.id:
            # Stable paging when several rows share the sort value
            stmt = stmt.order_by(VotingSessionModel.id.asc())
        stmt = stmt.limit(limit).offset(offset)

        result = await session.execute(stmt)
        sessions = [VotingSession.from_model(row) for row in result.scalars().all()]

        logger.info(
            f"Listed {len(sessions)} sessions (sort={sort.value}, "
            f"direction={direction.value}, offset={offset})"
        )
        return sessions

    async def count(self, session: AsyncSession) -> int:
        """Count total number of voting sessions.

        Args:
            session: SQLAlchemy async session

        Returns:
            int: Total session count
        """
        stmt = select(func.count()).select_from(VotingSessionModel)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def update(
        self,
        session: AsyncSession,
        session_id: int,
        title: str,
        description: str | None,
        start_date: datetime | None,
        end_date: datetime | None,
    ) -> VotingSession | None:
        """Replace the editable fields of a voting session.

        Args:
            session: SQLAlchemy async session
            session_id: Session identifier
            title: New title
            description: New description
            start_date: New opening time
            end_date: New closing time

        Returns:
            VotingSession | None: Updated session if found, None otherwise
        """
        db_session = await session.get(VotingSessionModel, session_id)
        if db_session is None:
            logger.warning(f"Session not found for update: {session_id}")
            return None

        db_session.title = title
        db_session.description = description
        db_session.start_date = start_date
        db_session.end_date = end_date
        await session.flush()
        await session.refresh(db_session)

        logger.info(f"Updated session {session_id} with title: {title}")
        return VotingSession.from_model(db_session)

    async def delete(self, session: AsyncSession, session_id: int) -> bool:
        """Delete a voting session.

        Args:
            session: SQLAlchemy async session
            session_id: Session identifier

        Returns:
            bool: True if deleted, False if not found
        """
        stmt = delete(VotingSessionModel).where(VotingSessionModel.id == session_id)
        result = await session.execute(stmt)

        deleted = bool(result.rowcount)  # type: ignore[attr-defined]
        if deleted:
            logger.info(f"Deleted session: {session_id}")
        else:
            logger.warning(f"Session not found for deletion: {session_id}")

        return deleted
