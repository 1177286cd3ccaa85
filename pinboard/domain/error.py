"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Reported to the caller and never retried.
    """

    pass


class InvalidVoteValueError(ValidationError):
    """Raised when a vote value is anything other than +1 or -1."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Vote value must be 1 or -1, got {value!r}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class EntityNotFoundError(NotFoundError):
    """Raised when a write targets an entity that does not exist.

    Prevents orphaned votes and notifications.
    """

    pass


class ConflictError(DomainError):
    """Raised on duplicate follows, handles and similar uniqueness clashes."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user acts on a resource they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to access {resource} {resource_id}"
        )


class PersistenceFault(DomainError):
    """Raised when the storage layer fails.

    Surfaced to the caller as a generic failure.
    """

    pass
