"""Domain value objects for the Q&A community.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, computed_field, field_validator

from qa.domain.error import InvalidVoteTypeError
from qa.domain.value.common import RootValueObject, ValueObject


class VoteType(str, Enum):
    """Type of vote a user can cast on a question or answer."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @classmethod
    def parse(cls, value: "VoteType | str | None") -> "VoteType":
        """Parse an untrusted vote type.

        Raises:
            InvalidVoteTypeError: If value is not upvote or downvote
        """
        if isinstance(value, VoteType):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidVoteTypeError(str(value)) from None


class TargetType(str, Enum):
    """Type of entity that can be voted on."""

    QUESTION = "question"
    ANSWER = "answer"


class UserRole(str, Enum):
    """Role of a user account."""

    USER = "user"
    ADMIN = "admin"


class VoteCounts(ValueObject):
    """Denormalized vote counters of a target."""

    upvote_count: int = Field(default=0, ge=0)
    downvote_count: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def net_votes(self) -> int:
        """Upvotes minus downvotes."""
        return self.upvote_count - self.downvote_count


class CountDelta(ValueObject):
    """Change to apply to a target's counters.

    Each component is -1, 0 or +1 for a single vote transition.
    """

    upvote: int = Field(default=0, ge=-1, le=1)
    downvote: int = Field(default=0, ge=-1, le=1)

    @property
    def is_zero(self) -> bool:
        return self.upvote == 0 and self.downvote == 0


class VoteTransition(ValueObject):
    """Result of applying a requested vote to an existing vote state."""

    previous: Optional[VoteType] = None
    requested: VoteType
    current: Optional[VoteType] = None
    delta: CountDelta

    @property
    def is_retraction(self) -> bool:
        return self.previous is not None and self.current is None

    @property
    def is_switch(self) -> bool:
        return self.previous is not None and self.current is not None

    @property
    def message(self) -> str:
        """User-facing description of what happened."""
        if self.is_retraction:
            return "Vote removed"
        if self.is_switch:
            return "Vote changed"
        return "Vote recorded"


class SearchTerm(RootValueObject[str]):
    """Case-insensitive substring search term.

    Surrounding whitespace is stripped; must not be empty after stripping.
    """

    @field_validator("root")
    @classmethod
    def validate_search_term(cls, v: str) -> str:
        """Strip the term and reject empty searches."""
        v = v.strip()
        if not v:
            raise ValueError("Search term must not be empty")
        if len(v) > 255:
            raise ValueError("Search term must be at most 255 characters")
        return v

    @classmethod
    def from_optional(cls, value: Optional[str]) -> Optional["SearchTerm"]:
        """Build a search term, treating blank input as no search."""
        if value is None or not value.strip():
            return None
        return cls(value.strip()[:255])

    def matches(self, *texts: Optional[str]) -> bool:
        """Check whether any of the texts contains the term, ignoring case."""
        needle = self.root.casefold()
        return any(needle in text.casefold() for text in texts if text)

    @property
    def like_pattern(self) -> str:
        """SQL ILIKE pattern with wildcards escaped."""
        escaped = (
            self.root.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        )
        return f"%{escaped}%"
