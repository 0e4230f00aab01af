"""Capability the HTTP layer relies on to manage voting sessions."""

from typing import Protocol

from domain.entities import User
from domain.schemas import (
    PagedResponse,
    SessionRequest,
    SessionResponse,
    SessionUpdateRequest,
    SortDirection,
    SortSession,
)


class SessionFacade(Protocol):
    """Business operations on voting sessions.

    Implementations signal failures by raising the errors in ``domain.errors``;
    the HTTP layer turns them into responses.
    """

    async def create(self, request: SessionRequest, actor: User) -> None:
        """Create a session. Raises ValidationError, NotFoundError, AuthorizationError."""

    async def get_all(
        self, page: int, sort: SortSession, direction: SortDirection
    ) -> PagedResponse[SessionResponse]:
        """Return one page of sessions in the requested order."""

    async def get_by_id(self, session_id: int) -> SessionResponse:
        """Return a single session. Raises NotFoundError."""

    async def update(
        self, session_id: int, request: SessionUpdateRequest, actor: User
    ) -> SessionResponse:
        """Replace a session's editable fields.

        Raises ValidationError, NotFoundError, AuthorizationError.
        """

    async def delete(self, session_id: int, actor: User) -> None:
        """Remove a session. Raises NotFoundError, AuthorizationError."""
