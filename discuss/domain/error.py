"""Domain layer errors.

Every failure that leaves the comment service is one of the four kinds
below. Anything else raised by the stores is wrapped as InternalError at
the service boundary.
"""


class DomainError(Exception):
    """Base domain error."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidArgumentError(DomainError):
    """Raised when the caller sent unusable input (blank text, bad paging)."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the caller may not perform the operation.

    Covers inactive communities, private communities the caller is not a
    member of, and edits or deletes of someone else's comment.
    """

    pass


class InternalError(DomainError):
    """Raised for unexpected store failures.

    The message is safe to show to clients; the original exception is
    chained as __cause__ and logged, never returned.
    """

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
