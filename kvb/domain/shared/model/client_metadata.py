"""ClientMetadata - identifies the database connection a request belongs to."""

from enum import StrEnum

from kvb.domain.shared.model.value import ValueObject


class AppTool(StrEnum):
    """Tool context a request originates from."""

    COMMON = "Common"
    BROWSER = "Browser"
    CLI = "CLI"
    WORKBENCH = "Workbench"


class ClientMetadata(ValueObject):
    """Per-request connection identity.

    Passed to every operation instead of a stateful session. ``db`` overrides
    the logical database index configured for the connection.
    """

    database_id: str
    context: AppTool = AppTool.BROWSER
    db: int | None = None
