"""Voting session management API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from api.dependencies import get_session_facade
from api.routers.utils import handle_router_error
from api.routers.verifications import get_current_user
from domain.entities import User
from domain.errors import AppError
from domain.schemas import (
    MAX_ID,
    ErrorResponse,
    PagedResponse,
    SessionRequest,
    SessionResponse,
    SessionUpdateRequest,
    SortDirection,
    SortSession,
)
from logic.sessions import SessionFacade

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

SessionId = Annotated[int, Path(ge=1, le=MAX_ID, description="Session identifier")]

_UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Unauthorized access"}}
_FORBIDDEN = {403: {"model": ErrorResponse, "description": "Access denied"}}
_INVALID = {400: {"model": ErrorResponse, "description": "Invalid data"}}
_SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Internal server error"}}


def _not_found(description: str) -> dict:
    return {404: {"model": ErrorResponse, "description": description}}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    summary="Create a new session",
    description="Create a new voting session organized by an existing user",
    responses={
        **_INVALID,
        **_UNAUTHORIZED,
        **_FORBIDDEN,
        **_not_found("Organizer not found"),
        **_SERVER_ERROR,
    },
)
async def create_session(
    request: SessionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    facade: Annotated[SessionFacade, Depends(get_session_facade)],
) -> Response:
    """Create a new voting session."""
    try:
        await facade.create(request, current_user)
    except AppError:
        raise
    except Exception as e:
        raise handle_router_error("creating session", "new", e)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get(
    "",
    response_model=PagedResponse[SessionResponse],
    summary="Get all sessions",
    description="Retrieve one page of sessions ordered by the requested field",
    responses={**_INVALID, **_UNAUTHORIZED, **_SERVER_ERROR},
)
async def list_sessions(
    current_user: Annotated[User, Depends(get_current_user)],
    facade: Annotated[SessionFacade, Depends(get_session_facade)],
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    sort: Annotated[SortSession, Query(description="Field to sort by")] = SortSession.id,
    direction: Annotated[
        SortDirection, Query(description="Sort direction")
    ] = SortDirection.ASC,
) -> PagedResponse[SessionResponse]:
    """List voting sessions with pagination and sorting."""
    try:
        return await facade.get_all(page, sort, direction)
    except AppError:
        raise
    except Exception as e:
        raise handle_router_error("listing sessions", f"page {page}", e)


@router.get(
    "/{session_id}",
    response_model=SessionResponse,
    summary="Get a session by id",
    description="Retrieve details of a specific voting session by ID",
    responses={**_UNAUTHORIZED, **_not_found("Session not found"), **_SERVER_ERROR},
)
async def get_session(
    session_id: SessionId,
    current_user: Annotated[User, Depends(get_current_user)],
    facade: Annotated[SessionFacade, Depends(get_session_facade)],
) -> SessionResponse:
    """Get a specific voting session by ID."""
    try:
        return await facade.get_by_id(session_id)
    except AppError:
        raise
    except Exception as e:
        raise handle_router_error("getting session", session_id, e)


@router.put(
    "/{session_id}",
    response_model=SessionResponse,
    summary="Update a session",
    description="Replace the editable fields of a voting session",
    responses={
        **_INVALID,
        **_UNAUTHORIZED,
        **_FORBIDDEN,
        **_not_found("Session not found"),
        **_SERVER_ERROR,
    },
)
async def update_session(
    session_id: SessionId,
    request: SessionUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    facade: Annotated[SessionFacade, Depends(get_session_facade)],
) -> SessionResponse:
    """Update a voting session."""
    try:
        return await facade.update(session_id, request, current_user)
    except AppError:
        raise
    except Exception as e:
        raise handle_router_error("updating session", session_id, e)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a session",
    description="Delete a voting session",
    responses={
        **_UNAUTHORIZED,
        **_FORBIDDEN,
        **_not_found("Session not found"),
        **_SERVER_ERROR,
    },
)
async def delete_session(
    session_id: SessionId,
    current_user: Annotated[User, Depends(get_current_user)],
    facade: Annotated[SessionFacade, Depends(get_session_facade)],
) -> Response:
    """Delete a voting session."""
    try:
        await facade.delete(session_id, current_user)
    except AppError:
        raise
    except Exception as e:
        raise handle_router_error("deleting session", session_id, e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
