"""Domain error codes for the eventhub module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_FOUND = "NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    LAST_ADMIN = "LAST_ADMIN"
    SELF_MODIFICATION = "SELF_MODIFICATION"
    PAST_EVENT = "PAST_EVENT"
    SELF_ORGANIZER = "SELF_ORGANIZER"
    ALREADY_ENROLLED = "ALREADY_ENROLLED"
    NOT_ENROLLED = "NOT_ENROLLED"
    CAPACITY_FULL = "CAPACITY_FULL"
    STORAGE_ERROR = "STORAGE_ERROR"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message.

    Messages are fixed strings. Request context (ids, field names) is carried
    in attributes on the subclasses, never interpolated into the message.
    """

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when an input is missing or malformed."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message="Invalid or missing value",
        )
        self.field = field


class DuplicateEmailError(DomainError):
    """Raised when registering an email that is already in use."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_EMAIL,
            message="Email already in use",
        )


class InvalidCredentialsError(DomainError):
    """Raised for any failed login, whatever the cause."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid email or password",
        )


class NotFoundError(DomainError):
    """Raised when a referenced user or event does not exist."""

    def __init__(self, entity: str, ref: object = None) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message="Resource not found",
        )
        self.entity = entity
        self.ref = ref


class PermissionDeniedError(DomainError):
    """Raised when the requester may not perform the action."""

    def __init__(self, action: str) -> None:
        super().__init__(
            code=ErrorCode.PERMISSION_DENIED,
            message="Permission denied",
        )
        self.action = action


class LastAdminError(DomainError):
    """Raised when an operation would leave the system without an admin."""

    def __init__(self, user_id: object) -> None:
        super().__init__(
            code=ErrorCode.LAST_ADMIN,
            message="At least one administrator must remain",
        )
        self.user_id = user_id


class SelfModificationError(DomainError):
    """Raised when an admin tries to change their own admin status."""

    def __init__(self, user_id: object) -> None:
        super().__init__(
            code=ErrorCode.SELF_MODIFICATION,
            message="Administrators cannot change their own status",
        )
        self.user_id = user_id


class PastEventError(DomainError):
    """Raised when enrolling in an event that already happened."""

    def __init__(self, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.PAST_EVENT,
            message="Event already took place",
        )
        self.event_id = event_id


class SelfOrganizerError(DomainError):
    """Raised when an organizer tries to enroll in their own event."""

    def __init__(self, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.SELF_ORGANIZER,
            message="Organizers cannot enroll in their own event",
        )
        self.event_id = event_id


class AlreadyEnrolledError(DomainError):
    """Raised when the user is already enrolled in the event."""

    def __init__(self, user_id: object, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_ENROLLED,
            message="Already enrolled in this event",
        )
        self.user_id = user_id
        self.event_id = event_id


class NotEnrolledError(DomainError):
    """Raised when cancelling an enrollment that does not exist."""

    def __init__(self, user_id: object, event_id: object) -> None:
        super().__init__(
            code=ErrorCode.NOT_ENROLLED,
            message="Not enrolled in this event",
        )
        self.user_id = user_id
        self.event_id = event_id


class CapacityFullError(DomainError):
    """Raised when the event has no seats left."""

    def __init__(self, event_id: object, capacity: int) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_FULL,
            message="Event is at full capacity",
        )
        self.event_id = event_id
        self.capacity = capacity


class StorageError(DomainError):
    """Raised when the underlying store fails unexpectedly. Retryable."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORAGE_ERROR,
            message="Storage unavailable",
        )
        self.operation = operation
