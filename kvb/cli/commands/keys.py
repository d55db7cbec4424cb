"""Key browsing commands (HTTP client of a running server)."""

import os
import sys

import cyclopts
import httpx

from kvb.cli.console import DETAIL_COLUMNS, get_console
from kvb.domain.keys.model import GetKeysResult
from kvb.domain.keys.scanner.cursor import INITIAL_CURSOR, format_cluster_cursor

app = cyclopts.App(name="keys", help="Browse keys of a registered database")


def get_server_url() -> str:
    return os.environ.get("KVB_SERVER", "http://localhost:5540")


def next_cursor(results: list[GetKeysResult], cluster: bool) -> str | None:
    """Cursor for the following call, or None once the scan is complete."""
    if cluster:
        return format_cluster_cursor(results)
    cursor = results[0].cursor if results else 0
    return str(cursor) if cursor else None


def _is_cluster(client: httpx.Client, database_id: str) -> bool:
    response = client.get("/api/v1/databases")
    response.raise_for_status()
    for database in response.json():
        if database["id"] == database_id:
            return database["connectionType"] == "CLUSTER"
    return False


def _fail(response: httpx.Response) -> None:
    console = get_console()
    try:
        body = response.json()
        console.error(body.get("message", response.text), code=body.get("code"))
    except ValueError:
        console.error(f"HTTP {response.status_code}: {response.text}")
    sys.exit(1)


@app.command
def scan(
    database_id: str,
    /,
    match: str = "*",
    count: int = 100,
    type: str | None = None,
    all: bool = False,
) -> None:
    """List keys matching a pattern.

    Args:
        database_id: Registered database id.
        match: Glob pattern.
        count: Keys to request per call.
        type: Only keys of this type.
        all: Keep scanning until every node is done.
    """
    console = get_console()
    rows: list[dict] = []
    cursor: str | None = INITIAL_CURSOR

    with httpx.Client(base_url=get_server_url()) as client:
        cluster = _is_cluster(client, database_id)
        while cursor is not None:
            response = client.post(
                f"/api/v1/databases/{database_id}/keys",
                json={"cursor": cursor, "count": count, "match": match, "type": type},
            )
            if response.is_error:
                _fail(response)

            results = [GetKeysResult.model_validate(node) for node in response.json()]
            rows.extend(row for node in response.json() for row in node["keys"])
            cursor = next_cursor(results, cluster)
            if not all:
                break

    console.keys(rows, title=f"{database_id}: {match}")
    if cursor is not None:
        console.note(f"More keys available; resume with cursor {cursor!r} or pass --all")


@app.command
def info(database_id: str, key: str, /) -> None:
    """Show type, TTL, size, length and encoding of one key."""
    console = get_console()
    response = httpx.post(
        f"{get_server_url()}/api/v1/databases/{database_id}/keys/get-info",
        json={"keyName": key},
    )
    if response.is_error:
        _fail(response)
    data = response.json()
    console.keys([data], DETAIL_COLUMNS)


@app.command
def delete(database_id: str, /, *keys: str) -> None:
    """Delete keys."""
    console = get_console()
    response = httpx.request(
        "DELETE",
        f"{get_server_url()}/api/v1/databases/{database_id}/keys",
        json={"keyNames": list(keys)},
    )
    if response.is_error:
        _fail(response)
    console.success(f"Deleted {response.json()['affected']} key(s)")
