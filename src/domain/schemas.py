"""API request and response schemas."""

from datetime import UTC, datetime
from enum import Enum
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field, field_validator

T = TypeVar("T")

# Largest value a 64-bit signed INTEGER column can hold
MAX_ID = 2**63 - 1


class SortSession(str, Enum):
    """Session fields a listing can be ordered by."""

    id = "id"
    title = "title"
    start_date = "start_date"
    end_date = "end_date"
    created_at = "created_at"


class SortDirection(str, Enum):
    """Ordering direction for listings."""

    ASC = "ASC"
    DESC = "DESC"


def _normalize_timestamp(value: datetime | None) -> datetime | None:
    """Store every timestamp as naive UTC so comparisons never mix offsets."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


# Request Schemas
class SessionUpdateRequest(BaseModel):
    """Request to replace the editable fields of a voting session."""

    title: str = Field(
        ..., min_length=1, max_length=255, description="Title of the session"
    )
    description: str | None = Field(
        None, max_length=5000, description="Optional free-text description"
    )
    start_date: datetime | None = Field(None, description="When voting opens")
    end_date: datetime | None = Field(None, description="When voting closes")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Session title can't be blank")
        return value

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, value: datetime | None) -> datetime | None:
        return _normalize_timestamp(value)


class SessionRequest(SessionUpdateRequest):
    """Request to create a new voting session."""

    organizer_id: int = Field(
        ..., gt=0, le=MAX_ID, description="Identifier of the user organizing the session"
    )


# Response Schemas
class SessionResponse(BaseModel):
    """Response containing session information."""

    id: int
    title: str
    description: str | None
    start_date: datetime | None
    end_date: datetime | None
    organizer_id: int
    created_at: datetime
    updated_at: datetime


class PagedResponse(BaseModel, Generic[T]):
    """A single page of an ordered collection plus its position in the whole."""

    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str = "0.1.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ErrorResponse(BaseModel):
    """Error response."""

    message: str
    errors: list[str] | None = None
