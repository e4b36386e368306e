class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when the requested employee/record has no data."""


class ExternalServiceError(DomainError):
    """Raised when BPM, FTP, SMTP or the token verifier fails."""
