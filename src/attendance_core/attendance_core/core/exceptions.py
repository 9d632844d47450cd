class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed (bad dates, unknown enum values...)."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, company or request does not exist."""


class DuplicateRecordError(Exception):
    """Raised by repositories when a unique key rejects an insert.

    This is a storage-level signal, not a domain rule; services translate it
    into the matching rejection reason.
    """
