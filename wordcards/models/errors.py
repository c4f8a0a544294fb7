"""Error types raised by the backend client."""


class BackendError(Exception):
    """Base exception for all backend failures."""


class AuthError(BackendError):
    """Bad credentials, expired session or a row-level security denial."""


class NotFoundError(BackendError):
    """The targeted row does not exist."""


class NetworkError(BackendError):
    """Backend unreachable or the client is not configured."""


class ValidationError(BackendError):
    """Empty word or meaning. Never sent to the backend."""
