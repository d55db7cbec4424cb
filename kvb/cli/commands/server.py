"""Server commands."""

import os
from pathlib import Path

import cyclopts
import logfire
import uvicorn

from kvb.cli.console import get_console
from kvb.config import CONFIG_FILE_ENV

app = cyclopts.App(name="server", help="Server commands")


@app.command
def start(
    host: str = "127.0.0.1",
    port: int = 5540,
    config: Path | None = None,
    reload: bool = False,
) -> None:
    """Run the REST API in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
        config: YAML config file; sets KVB_CONFIG_FILE for the server.
        reload: Restart on code changes (development).
    """
    console = get_console()

    if config is not None:
        if not config.exists():
            console.error(f"Config file not found: {config}")
            raise SystemExit(1)
        os.environ[CONFIG_FILE_ENV] = str(config.resolve())

    # Logfire must be configured before the app is created
    logfire.configure(service_name="kvb", send_to_logfire="if-token-present")

    console.success(f"Serving on http://{host}:{port}")
    uvicorn.run(
        "kvb.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )
