class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidInputError(ValidationError):
    """Raised for attendance counts that break 0 <= attended <= total, or a bad threshold."""


class MalformedTimeSlotError(ValidationError):
    """Raised when a time slot string is not "H:MM-H:MM"."""

    def __init__(self, value: object, reason: str = "expected H:MM-H:MM"):
        super().__init__(f"Malformed time slot {value!r}: {reason}")
        self.value = value
