class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced person or service does not exist."""


class ConfigurationError(DomainError):
    """Raised when configuration (e.g. lapse thresholds) is malformed."""


class MessagingError(DomainError):
    """Raised by an SMS gateway when a single delivery attempt fails."""
