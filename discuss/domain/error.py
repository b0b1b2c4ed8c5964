"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidStateError(DomainError):
    """Raised when an operation is not permitted in the resource's current state.

    Editing a deleted comment is the canonical case.
    """

    def __init__(self, resource: str, identifier: str, reason: str):
        self.resource = resource
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Invalid state for {resource} {identifier}: {reason}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )
