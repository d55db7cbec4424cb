"""KVB errors.

DomainError covers conditions the caller can correct (absent keys, taken
names, missing permissions); InfrastructureError covers a store or
connection that failed. ``code`` is the stable identifier clients match on.
"""


class KVBError(Exception):
    """Base class for all KVB errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (caller-facing conditions - typically 4xx)
# =============================================================================


class DomainError(KVBError):
    """Base class for domain errors."""


class NotFoundError(DomainError):
    """Target key or resource does not exist."""


class ValidationError(DomainError):
    """Caller-correctable request shape (InvalidRequest)."""

    def __init__(self, message: str, code: str | None = None, field: str | None = None) -> None:
        super().__init__(message, code=code or "VALIDATION_ERROR")
        self.field = field


class ForbiddenError(DomainError):
    """The store rejected the command due to insufficient access rights."""


class UnsupportedTypeError(DomainError):
    """No type-info strategy exists for the requested key type.

    Reaching this is a caller contract violation ("none" must be filtered
    upstream), so it is rendered as a server error.
    """


# =============================================================================
# Infrastructure Errors (system-level failures - typically 5xx)
# =============================================================================


class InfrastructureError(KVBError):
    """Base class for infrastructure/system errors."""


class ConnectionUnavailableError(InfrastructureError):
    """No live connection could be obtained for a database."""


class StoreCommandError(InfrastructureError):
    """The data store replied with an error that has no domain meaning."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
