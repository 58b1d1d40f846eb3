"""
Rich UI utilities for console output.

Provides consistent feedback across the CLI: styled status messages,
spinners, headers and tables.

Usage:
    from gpodnet.utils.ui import console, ui

    ui.success("Subscriptions uploaded")
    ui.error("Request failed", details="HTTP 401")

    with ui.spinner("Fetching toplist..."):
        podcasts = client.podcast_toplist(10)

    table = ui.create_table("Devices", columns=["ID", "Caption"])
    table.add_row("laptop", "My Laptop")
    console.print(table)
"""

from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from rich.box import DOUBLE, ROUNDED, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# =============================================================================
# Custom Theme
# =============================================================================

PODCAST_THEME = Theme(
    {
        # Status colors
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "debug": "dim",
        "muted": "dim white",
        # UI elements
        "header": "bold magenta",
        "subheader": "bold blue",
        "accent": "bold cyan",
        "link": "underline blue",
        # Data types
        "title": "bold white",
        "url": "cyan",
        "count": "yellow",
        "device": "magenta",
        "cursor": "green",
        # Status indicators
        "status.connected": "green",
        "status.disconnected": "red",
    }
)

# =============================================================================
# Global Console
# =============================================================================

console = Console(theme=PODCAST_THEME, highlight=True, emoji=True)

# =============================================================================
# Icons & Symbols
# =============================================================================


class Icons:
    """Unicode icons for consistent visual feedback."""

    # Status
    SUCCESS = "✓"
    ERROR = "✗"
    WARNING = "⚠"
    INFO = "ℹ"

    # Actions
    ARROW_RIGHT = "→"
    BULLET = "•"
    PLUS = "+"
    MINUS = "-"

    # Media
    PODCAST = "🎙️"
    EPISODE = "🎧"
    STAR = "★"

    # System
    SERVER = "🖥️"
    DEVICE = "📱"
    TAG = "🏷️"
    GEAR = "⚙️"
    USER = "👤"

    # Sync
    SEARCH = "🔍"
    UPLOAD = "⬆️"
    SYNC = "🔄"


# =============================================================================
# UI Helper Class
# =============================================================================


class UIHelper:
    """Central UI helper for consistent visual output."""

    def __init__(self, console: Console):
        self.console = console
        self.icons = Icons

    # -------------------------------------------------------------------------
    # Status Messages
    # -------------------------------------------------------------------------

    def _status(self, style: str, prefix: str, message: str, details: str | None) -> None:
        text = Text()
        text.append(f"{prefix} ", style=style)
        text.append_text(Text.from_markup(message))
        if details:
            text.append(f"\n   {details}", style="muted")
        self.console.print(text)

    def success(self, message: str, details: str | None = None, prefix: str = Icons.SUCCESS) -> None:
        """Print a success message."""
        self._status("success", prefix, message, details)

    def error(self, message: str, details: str | None = None, prefix: str = Icons.ERROR) -> None:
        """Print an error message."""
        self._status("error", prefix, f"[error]{message}[/error]", details)

    def warning(self, message: str, details: str | None = None, prefix: str = Icons.WARNING) -> None:
        """Print a warning message."""
        self._status("warning", prefix, message, details)

    def info(self, message: str, details: str | None = None, prefix: str = Icons.INFO) -> None:
        """Print an info message."""
        self._status("info", prefix, message, details)

    def muted(self, message: str) -> None:
        """Print a muted/dim message."""
        self.console.print(f"[muted]{message}[/muted]")

    # -------------------------------------------------------------------------
    # Headers & Sections
    # -------------------------------------------------------------------------

    def header(self, title: str, subtitle: str | None = None, icon: str | None = None) -> None:
        """Print a styled header banner."""
        icon_str = f"{icon} " if icon else ""
        content = Text()
        content.append(f"{icon_str}{title}", style="header")
        if subtitle:
            content.append(f"\n{subtitle}", style="muted")

        self.console.print()
        self.console.print(Panel(content, box=DOUBLE, border_style="header", padding=(1, 2)))
        self.console.print()

    def section(self, title: str, icon: str | None = None) -> None:
        """Print a section header with rule."""
        icon_str = f"{icon} " if icon else ""
        self.console.print()
        self.console.print(Rule(f"{icon_str}{title}", style="subheader", align="left"))
        self.console.print()

    # -------------------------------------------------------------------------
    # Spinners
    # -------------------------------------------------------------------------

    @contextmanager
    def spinner(self, message: str, spinner_name: str = "dots") -> Generator[Status]:
        """Context manager for spinner with status updates."""
        with self.console.status(f"[info]{message}[/info]", spinner=spinner_name) as status:
            yield status

    # -------------------------------------------------------------------------
    # Tables
    # -------------------------------------------------------------------------

    def create_table(
        self,
        title: str | None = None,
        columns: list[str] | None = None,
        show_lines: bool = False,
        box_style: Any = ROUNDED,
    ) -> Table:
        """Create a styled table."""
        table = Table(
            title=title,
            show_lines=show_lines,
            box=box_style,
            header_style="bold cyan",
            border_style="dim",
            row_styles=["", "dim"],
        )
        for col in columns or []:
            table.add_column(col)
        return table

    def key_value_table(self, data: dict[str, Any], title: str | None = None) -> Table:
        """Create a two-column key-value table."""
        table = Table(title=title, show_header=False, box=SIMPLE, padding=(0, 1))
        table.add_column("Key", style="bold cyan", no_wrap=True)
        table.add_column("Value", style="white")

        for key, value in data.items():
            table.add_row(key, str(value) if value is not None else "[dim]N/A[/dim]")

        return table

    # -------------------------------------------------------------------------
    # Specialized Displays
    # -------------------------------------------------------------------------

    def connection_status(self, connected: bool, name: str) -> Text:
        """Display connection status."""
        text = Text()
        if connected:
            text.append(f"{Icons.SUCCESS} ", style="status.connected")
            text.append(name, style="bold")
            text.append(" connected", style="status.connected")
        else:
            text.append(f"{Icons.ERROR} ", style="status.disconnected")
            text.append(name, style="bold")
            text.append(" disconnected", style="status.disconnected")
        return text

    def timestamp(self, dt: datetime | None) -> Text:
        """Display a formatted timestamp, or a dash when absent."""
        if dt is None:
            return Text("-", style="muted")
        return Text(dt.strftime("%Y-%m-%d %H:%M:%S"), style="muted")


# =============================================================================
# Singleton UI Instance
# =============================================================================

ui = UIHelper(console)

__all__ = [
    "console",
    "ui",
    "Icons",
    "UIHelper",
    "PODCAST_THEME",
]
