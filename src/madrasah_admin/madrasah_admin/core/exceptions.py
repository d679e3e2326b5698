class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist in the caller's org."""


class InvalidDateError(DomainError):
    """Raised when a date used in a calculation is missing or malformed."""


class EmptyRosterError(ValidationError):
    """Raised when saving attendance for a roster with no students."""


class MailDeliveryError(DomainError):
    """Raised when the mail relay refuses or cannot take a message."""
