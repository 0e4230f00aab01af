"""Sessions logic module.

This module contains the business logic for voting sessions: the facade the
HTTP layer depends on and its database-backed implementation.
"""

from logic.sessions.facade import SessionFacade
from logic.sessions.service import SessionService

__all__ = ["SessionFacade", "SessionService"]
