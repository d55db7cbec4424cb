"""Unit tests for map_kvb_error."""

import pytest

from kvb.application.api.v1.errors import map_kvb_error
from kvb.domain.shared.error import (
    ConfigurationError,
    ConnectionUnavailableError,
    DomainError,
    ForbiddenError,
    KVBError,
    NotFoundError,
    StoreCommandError,
    UnsupportedTypeError,
    ValidationError,
)


class TestMapKVBError:
    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (NotFoundError("missing"), 404),
            (ValidationError("bad"), 400),
            (ForbiddenError("NOPERM"), 403),
            (UnsupportedTypeError("vectorset"), 500),
            (DomainError("other"), 400),
            (ConnectionUnavailableError("down"), 503),
            (StoreCommandError("failed"), 500),
            (ConfigurationError("broken"), 503),
            (KVBError("unknown"), 500),
        ],
    )
    def test_status(self, error, status):
        assert map_kvb_error(error).status_code == status

    def test_detail_carries_code_and_message(self):
        exc = map_kvb_error(NotFoundError("Key with this name does not exist.", code="KEY_NOT_EXIST"))

        assert exc.detail == {"code": "KEY_NOT_EXIST", "message": "Key with this name does not exist."}

    def test_code_defaults_to_class_name(self):
        assert map_kvb_error(ForbiddenError("no")).detail["code"] == "ForbiddenError"

    def test_validation_field_is_included(self):
        exc = map_kvb_error(ValidationError("Invalid cursor: x", field="cursor"))

        assert exc.detail == {"code": "VALIDATION_ERROR", "message": "Invalid cursor: x", "field": "cursor"}
