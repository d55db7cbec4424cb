from enum import StrEnum

from pydantic import BaseModel, SecretStr


class ConnectionType(StrEnum):
    """Topology of a registered database."""

    STANDALONE = "STANDALONE"
    CLUSTER = "CLUSTER"
    SENTINEL = "SENTINEL"
    NOT_CONNECTED = "NOT CONNECTED"


class Database(BaseModel):
    """A registered database connection."""

    id: str
    name: str
    host: str = "localhost"
    port: int = 6379
    connection_type: ConnectionType = ConnectionType.STANDALONE
    username: str | None = None
    password: SecretStr | None = None
    db: int = 0
    tls: bool = False
