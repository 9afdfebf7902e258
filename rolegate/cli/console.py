"""Console output for the CLI.

All command output goes through ``Console`` so that profile states, denial
codes and tables look the same in every command.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from rolegate.domain.profile.model.status import ProfileState

STATE_STYLES: dict[str, str] = {
    ProfileState.NO_PROFILE: "dim",
    ProfileState.INCOMPLETE: "yellow",
    ProfileState.COMPLETE_UNAPPROVED: "cyan",
    ProfileState.COMPLETE_APPROVED: "green",
}

# What an operator can do about a denial
DENIAL_HINTS: dict[str, str] = {
    "UNAUTHENTICATED": "The session token is missing, expired or signed with another secret",
    "PROFILE_NOT_FOUND": "Create a profile first (POST /profile)",
    "PROFILE_INCOMPLETE": "Fill in name, department and role",
    "PROFILE_PENDING_APPROVAL": "An administrator has to approve the profile",
    "INSUFFICIENT_ROLE": "The assigned role does not grant this operation",
}


class Console:
    """Rich-backed output. Errors go to stderr, everything else to stdout."""

    def __init__(self, *, force_terminal: bool | None = None, quiet: bool = False) -> None:
        self._out = RichConsole(force_terminal=force_terminal)
        self._err = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    def success(self, message: str) -> None:
        self._out.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        self._out.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        """Secondary detail, hidden with ``quiet``."""
        if not self._quiet:
            self._out.print(f"[dim]{message}[/dim]")

    def error(self, message: str, *, hint: str | None = None) -> None:
        self._err.print(f"[red]✗[/red] {message}")
        if hint:
            self._err.print(f"  [dim]{hint}[/dim]")

    def denial(self, status: int, code: str, message: str) -> None:
        """Report an API error, with a hint for the known denial codes."""
        self.error(f"{status} {code}: {message}", hint=DENIAL_HINTS.get(code))

    def state(self, state: str) -> str:
        """Markup for a profile state."""
        style = STATE_STYLES.get(state, "bold")
        return f"[{style}]{state}[/{style}]"

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._out.print(*args, **kwargs)

    def table(self, rows: list[dict[str, Any]], columns: list[tuple[str, str]], *, title: str | None = None) -> None:
        """Render ``rows`` with (key, header) ``columns``. A ``state`` column is colored."""
        table = Table(title=title, header_style="bold")
        for _, header in columns:
            table.add_column(header)
        for row in rows:
            cells = []
            for key, _ in columns:
                value = str(row.get(key, ""))
                cells.append(self.state(value) if key == "state" else value)
            table.add_row(*cells)
        self._out.print(table)

    def panel(self, content: str, *, title: str | None = None) -> None:
        self._out.print(Panel(content, title=title, border_style="dim"))

    def status(self, message: str):
        """Spinner context manager for slow operations."""
        return self._out.status(message)


_default: Console | None = None


def get_console() -> Console:
    global _default
    if _default is None:
        _default = Console()
    return _default
