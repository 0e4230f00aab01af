"""Utility functions for API routers."""

import logging

from domain.errors import UnexpectedError

logger = logging.getLogger(__name__)


def handle_router_error(
    operation: str, identifier: str | int, error: Exception
) -> UnexpectedError:
    """Handle unexpected router errors with consistent logging.

    Args:
        operation: Description of the operation (e.g., "creating session")
        identifier: Resource identifier (e.g., session id)
        error: The exception that occurred

    Returns:
        UnexpectedError: Error rendered as a 500 response
    """
    logger.error(f"Error {operation} {identifier}: {error}", exc_info=True)
    return UnexpectedError()
