import logging
import os
import sys
from pathlib import Path

from pydantic import BaseModel, SecretStr, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource
from typing_extensions import Self

from kvb.domain.database.model import ConnectionType

CONFIG_FILE_ENV = "KVB_CONFIG_FILE"
LOG_FILE_ENV = "KVB_LOG_FILE"

# Libraries that log every request or topology refresh at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "redis")


# =============================================================================
# Database Registry
# =============================================================================


class DatabaseConfig(BaseModel):
    """A database the browser may connect to.

    Registered through the YAML config file or ``KVB_DATABASES`` (JSON list).
    """

    id: str
    name: str = ""  # Display name; defaults to host:port
    host: str = "localhost"
    port: int = 6379
    connection_type: ConnectionType = ConnectionType.STANDALONE
    username: str | None = None
    password: SecretStr | None = None
    db: int = 0  # Logical database index (standalone only)
    tls: bool = False


# =============================================================================
# Application Configuration
# =============================================================================


class Server(BaseModel):
    name: str = "Key-Value Browser"
    version: str = "0.1.0"
    description: str = "Browse and manage keys of key-value databases"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Log file path; unset means stderr."""
        return os.environ.get(LOG_FILE_ENV)


class RedisConfig(BaseModel):
    """Client connection settings shared by every registered database."""

    socket_timeout: float = 10.0
    socket_connect_timeout: float = 5.0
    client_name: str = "kvb"


class ScanConfig(BaseModel):
    count_max: int = 2000  # Upper bound for the SCAN COUNT hint
    threshold: int = 10000  # Stop a getKeys call after this many scanned entries


class HistoryConfig(BaseModel):
    max_items: int = 10  # Entries kept per database and search mode


class RecommendationsConfig(BaseModel):
    enabled: bool = True


class Config(BaseSettings):
    server: Server = Server()
    logging: LoggingConfig = LoggingConfig()
    redis: RedisConfig = RedisConfig()
    scan: ScanConfig = ScanConfig()
    history: HistoryConfig = HistoryConfig()
    recommendations: RecommendationsConfig = RecommendationsConfig()
    databases: list[DatabaseConfig] = []

    model_config = {
        "env_prefix": "KVB_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows KVB_SCAN__THRESHOLD override
    }

    @model_validator(mode="after")
    def check_unique_database_ids(self) -> Self:
        seen: set[str] = set()
        for database in self.databases:
            if database.id in seen:
                raise ValueError(f"Duplicate database id: {database.id}")
            seen.add(database.id)
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Explicit values win over the environment, which wins over the YAML file."""
        sources = [init_settings, env_settings, dotenv_settings]
        config_file = os.environ.get(CONFIG_FILE_ENV)
        if config_file:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=Path(config_file).expanduser()))
        sources.append(file_secret_settings)
        return tuple(sources)


def configure_logging(config: LoggingConfig) -> None:
    """Route every module logger to stderr or ``KVB_LOG_FILE``.

    Replaces handlers installed earlier (uvicorn reload, repeated app
    creation in tests).
    """
    handler: logging.Handler
    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=config.level,
        format=config.format,
        datefmt=config.date_format,
        handlers=[handler],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
