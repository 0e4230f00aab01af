"""Session service for business logic related to voting sessions."""

import logging
import math
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.entities import User, VotingSession
from domain.errors import AuthorizationError, NotFoundError, ValidationError
from domain.schemas import (
    PagedResponse,
    SessionRequest,
    SessionResponse,
    SessionUpdateRequest,
    SortDirection,
    SortSession,
)
from repositories.session_repository import SessionRepository
from repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

SESSION_NOT_FOUND = "Session not found"
ORGANIZER_NOT_FOUND = "Organizer not found"


def to_response(session: VotingSession) -> SessionResponse:
    """Project a domain session onto its API representation."""
    return SessionResponse(
        id=session.id,
        title=session.title,
        description=session.description,
        start_date=session.start_date,
        end_date=session.end_date,
        organizer_id=session.organizer_id,
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


def check_schedule(start_date: datetime | None, end_date: datetime | None) -> None:
    """Raise ValidationError when a session would close before it opens."""
    if start_date is not None and end_date is not None and end_date < start_date:
        raise ValidationError(["end_date: Session end date can't be before start date"])


class SessionService:
    """Service for managing voting sessions with transactional operations.

    Session maker is injected via DI, service manages its own database sessions.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        session_repo: SessionRepository,
        user_repo: UserRepository,
        page_size: int = 10,
    ) -> None:
        """Initialize session service.

        Args:
            session_maker: Async session maker for database connections
            session_repo: Session repository instance
            user_repo: User repository instance
            page_size: Number of sessions returned per page
        """
        self.session_maker = session_maker
        self.session_repo = session_repo
        self.user_repo = user_repo
        self.page_size = page_size

    async def create(self, request: SessionRequest, actor: User) -> None:
        """Create a new voting session.

        Args:
            request: Validated creation payload
            actor: Authenticated caller

        Raises:
            ValidationError: Schedule is inconsistent
            NotFoundError: Organizer does not exist
            AuthorizationError: Caller may not organize on behalf of someone else
        """
        check_schedule(request.start_date, request.end_date)

        async with self.session_maker() as db_session:
            organizer = await self.user_repo.get_by_id(db_session, request.organizer_id)
            if organizer is None:
                raise NotFoundError(ORGANIZER_NOT_FOUND)
            if not actor.is_admin and actor.id != organizer.id:
                logger.warning(
                    f"User {actor.id} tried to create a session for organizer {organizer.id}"
                )
                raise AuthorizationError()

            created = await self.session_repo.create(
                db_session,
                title=request.title,
                organizer_id=organizer.id,
                description=request.description,
                start_date=request.start_date,
                end_date=request.end_date,
            )
            await db_session.commit()

        logger.info(f"Session {created.id} created by user {actor.id}")

    async def get_all(
        self,
        page: int = 1,
        sort: SortSession = SortSession.id,
        direction: SortDirection = SortDirection.ASC,
    ) -> PagedResponse[SessionResponse]:
        """List voting sessions one page at a time.

        Args:
            page: 1-based page number
            sort: Column to order by
            direction: Ascending or descending

        Returns:
            PagedResponse[SessionResponse]: The page and its metadata
        """
        offset = (page - 1) * self.page_size

        async with self.session_maker() as db_session:
            total = await self.session_repo.count(db_session)
            # Past the last page: nothing to fetch, and the offset may not fit in SQL
            if offset >= total:
                sessions = []
            else:
                sessions = await self.session_repo.list_page(
                    db_session, sort, direction, limit=self.page_size, offset=offset
                )

        return PagedResponse[SessionResponse](
            items=[to_response(session) for session in sessions],
            page=page,
            page_size=self.page_size,
            total_items=total,
            total_pages=math.ceil(total / self.page_size),
        )

    async def get_by_id(self, session_id: int) -> SessionResponse:
        """Get a voting session by ID.

        Raises:
            NotFoundError: No session with that ID
        """
        async with self.session_maker() as db_session:
            session = await self.session_repo.get_by_id(db_session, session_id)

        if session is None:
            raise NotFoundError(SESSION_NOT_FOUND)
        return to_response(session)

    async def update(
        self, session_id: int, request: SessionUpdateRequest, actor: User
    ) -> SessionResponse:
        """Replace the editable fields of a voting session.

        Args:
            session_id: Session identifier
            request: Validated update payload
            actor: Authenticated caller

        Returns:
            SessionResponse: The updated session

        Raises:
            ValidationError: Schedule is inconsistent
            NotFoundError: No session with that ID
            AuthorizationError: Caller is neither organizer nor admin
        """
        async with self.session_maker() as db_session:
            existing = await self._get_managed(db_session, session_id, actor)
            check_schedule(request.start_date, request.end_date)

            updated = await self.session_repo.update(
                db_session,
                existing.id,
                title=request.title,
                description=request.description,
                start_date=request.start_date,
                end_date=request.end_date,
            )
            if updated is None:
                raise NotFoundError(SESSION_NOT_FOUND)
            await db_session.commit()

        return to_response(updated)

    async def delete(self, session_id: int, actor: User) -> None:
        """Delete a voting session.

        Raises:
            NotFoundError: No session with that ID
            AuthorizationError: Caller is neither organizer nor admin
        """
        async with self.session_maker() as db_session:
            await self._get_managed(db_session, session_id, actor)
            deleted = await self.session_repo.delete(db_session, session_id)
            if not deleted:
                raise NotFoundError(SESSION_NOT_FOUND)
            await db_session.commit()

        logger.info(f"Session {session_id} deleted by user {actor.id}")

    async def _get_managed(
        self, db_session: AsyncSession, session_id: int, actor: User
    ) -> VotingSession:
        """Load a session the actor is allowed to change."""
        session = await self.session_repo.get_by_id(db_session, session_id)
        if session is None:
            raise NotFoundError(SESSION_NOT_FOUND)
        if not actor.can_manage(session):
            logger.warning(
                f"User {actor.id} denied access to session {session_id} "
                f"(organizer {session.organizer_id})"
            )
            raise AuthorizationError()
        return session
