"""KVB error to HTTP response mapping.

The most specific class in an error's MRO decides the status code; error
bodies are always ``{"code", "message"}`` plus ``field`` for validation errors.
"""

from typing import Any

from fastapi import HTTPException

from kvb.domain.shared.error import (
    ConnectionUnavailableError,
    DomainError,
    ForbiddenError,
    InfrastructureError,
    KVBError,
    NotFoundError,
    StoreCommandError,
    UnsupportedTypeError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[KVBError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    ForbiddenError: 403,
    # Reaching a type strategy with "none" or an unmapped type is a server bug
    UnsupportedTypeError: 500,
    DomainError: 400,
    ConnectionUnavailableError: 503,
    StoreCommandError: 500,
    InfrastructureError: 503,
}


def status_for(error: KVBError) -> int:
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


def map_kvb_error(error: KVBError) -> HTTPException:
    body: dict[str, Any] = {"code": error.code, "message": error.message}
    if isinstance(error, ValidationError) and error.field is not None:
        body["field"] = error.field
    return HTTPException(status_code=status_for(error), detail=body)
