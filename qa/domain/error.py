"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class UnauthorizedError(DomainError):
    """Raised when an operation requires an authenticated user and there is none."""

    def __init__(self, action: str = "perform this action"):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to change content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidVoteTypeError(DomainError):
    """Raised when a vote type is neither upvote nor downvote."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid vote type: {value!r} (expected upvote or downvote)")


class ForbiddenSelfVoteError(DomainError):
    """Raised when self-voting is disabled and a user votes on their own content."""

    def __init__(self, target_type: str, target_id: str):
        self.target_type = target_type
        self.target_id = target_id
        super().__init__(f"Cannot vote on your own {target_type} {target_id}")


class ConflictingWriteError(DomainError):
    """Raised when a concurrent write collided with this one.

    The unit of work was rolled back; the operation may be retried once.
    """

    def __init__(self, message: str = "Concurrent write conflict"):
        super().__init__(message)
