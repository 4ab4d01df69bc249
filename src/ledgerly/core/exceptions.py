"""Application error taxonomy.

Every error raised on purpose by Ledgerly services derives from
LedgerlyError and carries the HTTP status it maps to at the API boundary.
"""


class LedgerlyError(Exception):
    """Base class for all Ledgerly errors."""

    status_code: int = 500
    error: str = "Internal error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationError(LedgerlyError):
    """Raised when a credential is missing, malformed, or rejected."""

    status_code = 401
    error = "Authentication failed"


class AuthorizationError(LedgerlyError):
    """Raised when the caller's role lacks the required access."""

    status_code = 403
    error = "Access denied"


class NotFoundError(LedgerlyError):
    """Raised when a role, user, or entity does not exist."""

    status_code = 404
    error = "Not found"


class ValidationError(LedgerlyError):
    """Raised when a required field is missing or malformed."""

    status_code = 400
    error = "Validation error"


class ConflictError(ValidationError):
    """Raised when creating something that already exists."""

    error = "Already exists"


class PersistenceError(LedgerlyError):
    """Raised when the data store rejects or fails an operation."""

    status_code = 500
    error = "Persistence error"
