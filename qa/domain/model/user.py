"""User aggregate root.

Users ask and answer questions and accumulate reputation from the votes
their answers receive.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from qa.domain.model.common import DomainModel
from qa.domain.value import UserId, UserRole


class User(DomainModel):
    """User aggregate root.

    reputation, question_count and answer_count are derived statistics.
    They are cached on the user for sorting and are never written by users.
    """

    id: UserId
    name: str = Field(min_length=1, max_length=255)
    email: str
    role: UserRole = UserRole.USER
    active: bool = True
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    reputation: int = 0  # May go negative
    question_count: int = Field(default=0, ge=0)
    answer_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserStats(DomainModel):
    """Derived per-user statistics."""

    user_id: UserId
    question_count: int = Field(default=0, ge=0)
    answer_count: int = Field(default=0, ge=0)
    reputation: int = 0
