"""Terminal output for the kvb CLI."""

from typing import Any

from rich.console import Console as RichConsole
from rich.table import Table

KEY_COLUMNS = (("name", "Key"), ("type", "Type"), ("ttl", "TTL"), ("size", "Size"))
DETAIL_COLUMNS = KEY_COLUMNS + (("length", "Length"), ("encoding", "Encoding"))


class Console:
    """Results go to stdout; errors and progress notes go to stderr."""

    def __init__(self, stdout: RichConsole | None = None, stderr: RichConsole | None = None) -> None:
        self.out = stdout or RichConsole()
        self.err = stderr or RichConsole(stderr=True)

    def success(self, message: str) -> None:
        self.out.print(f"[green]✓[/green] {message}")

    def note(self, message: str) -> None:
        self.err.print(f"[dim]{message}[/dim]")

    def error(self, message: str, code: str | None = None) -> None:
        prefix = f"[red]✗ {code}[/red]" if code else "[red]✗[/red]"
        self.err.print(f"{prefix} {message}")

    def keys(
        self,
        entries: list[dict[str, Any]],
        columns: tuple[tuple[str, str], ...] = KEY_COLUMNS,
        title: str | None = None,
    ) -> None:
        """Render key entries as returned by the REST API."""
        table = Table(*(header for _, header in columns), title=title, header_style="bold")
        for entry in entries:
            table.add_row(*(format_value(entry.get(field)) for field, _ in columns))
        self.out.print(table)


def format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, dict) and value.get("type") == "Buffer":
        return bytes(value.get("data", [])).hex(" ")
    return str(value)


_console: Console | None = None


def get_console() -> Console:
    global _console
    if _console is None:
        _console = Console()
    return _console
