"""Client accessor port - live connection handles per logical database."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any, Protocol

from kvb.domain.shared.model.client_metadata import ClientMetadata
from kvb.domain.shared.port import Port

StoreCommand = Sequence[Any]


class ReplyError(Exception):
    """Error reply from the store, raised by ClientHandle implementations.

    ``message`` keeps the reply's error prefix (e.g. ``NOPERM``) so callers can
    classify it without knowing the client library.
    """

    def __init__(self, message: str, command: str | None = None) -> None:
        self.message = message
        self.command = command
        super().__init__(message)


class NodeHandle(Protocol):
    """One primary node of a database (the whole server when standalone)."""

    host: str
    port: int

    @property
    def node_id(self) -> str:
        return f"{self.host}:{self.port}"

    @abstractmethod
    async def execute(self, *args: Any) -> Any:
        """Send a single command to this node only.

        SCAN replies as ``(cursor, keys)`` on every topology.
        """
        ...


class ClientHandle(Protocol):
    """Connection to a logical database, standalone or cluster-aware."""

    @property
    @abstractmethod
    def is_cluster(self) -> bool: ...

    @property
    @abstractmethod
    def db(self) -> int:
        """Selected logical database index (always 0 for clusters)."""
        ...

    @abstractmethod
    async def execute(self, *args: Any) -> Any:
        """Send a single command; cluster handles route it by key."""
        ...

    @abstractmethod
    async def pipeline(
        self, commands: Sequence[StoreCommand], *, raise_on_error: bool = True
    ) -> list[Any]:
        """Send a batch of commands, replies matched by position.

        With ``raise_on_error=False`` failed commands yield the exception
        object in their slot instead of aborting the batch.
        """
        ...

    @abstractmethod
    async def nodes(self) -> list[NodeHandle]:
        """Primary nodes to fan out over."""
        ...


class ClientAccessor(Port, Protocol):
    @abstractmethod
    async def get_client(self, metadata: ClientMetadata) -> ClientHandle:
        """Get a live handle for ``metadata.database_id``.

        Raises:
            NotFoundError: Database id is not registered.
            ConnectionUnavailableError: No live connection can be established.
        """
        ...
