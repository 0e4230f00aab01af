"""Domain entities representing core business objects."""

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from infrastructure.models import UserModel, VotingSessionModel


class UserRole(str, Enum):
    """Roles a user can hold."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(BaseModel):
    """Represents an authenticated user of the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_manage(self, session: "VotingSession") -> bool:
        """Whether this user may change or remove the given session."""
        return self.is_admin or session.organizer_id == self.id

    @classmethod
    def from_model(cls, model: "UserModel") -> "User":
        """Create entity from database model."""
        return cls(
            id=model.id,
            name=model.name,
            email=model.email,
            role=UserRole(model.role),
        )


class VotingSession(BaseModel):
    """Represents a voting session."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    organizer_id: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_model(cls, model: "VotingSessionModel") -> "VotingSession":
        """Create entity from database model."""
        return cls(
            id=model.id,
            title=model.title,
            description=model.description,
            start_date=model.start_date,
            end_date=model.end_date,
            organizer_id=model.organizer_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
