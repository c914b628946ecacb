"""
Status reporting system for spinner-style progress updates.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn


class Spinner:
    """Transient spinner shown while a blocking call runs."""

    def __init__(self, console: Console, message: str, spinner: str = "arc", style: str = "cyan"):
        self.console = console
        self.message = message
        self.spinner = spinner
        self.style = style
        self._active = console.is_terminal
        self._progress: Optional[Progress] = None

    def __enter__(self):
        if not self._active:
            return self

        self._progress = Progress(
            SpinnerColumn(spinner_name=self.spinner, style=self.style),
            TextColumn("{task.fields[msg]}", style=f"bold {self.style}"),
            console=self.console,
            transient=True,  # Clears itself once the outcome is reported
            refresh_per_second=12,
        )
        self._progress.__enter__()
        self._progress.add_task("status", msg=escape(self.message))
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._progress:
            self._progress.__exit__(exc_type, exc, tb)
            self._progress = None


class StatusReporter:
    """Handles status lines for the ask, chat and terminal flows."""

    SYMBOLS = {
        "info": ("ℹ", "cyan"),
        "success": ("✔", "green"),
        "warning": ("⚠", "yellow"),
        "error": ("✖", "red"),
    }

    def __init__(self, console: Optional[Console] = None):
        """Initialize status reporter."""
        self.console = console or Console()

    def spinner(self, message: str) -> Spinner:
        return Spinner(self.console, message)

    def update(self, message: str, level: str = "info", detail: str = "") -> None:
        """
        Report a status update.

        Args:
            message: Headline, styled with the level color
            level: One of info, success, warning, error
            detail: Plain text appended after the headline (commands, paths, output)
        """
        symbol, color = self.SYMBOLS.get(level, ("•", "white"))
        line = f"[{color}]{symbol}[/{color}] [{color}]{escape(message)}[/{color}]"
        if detail:
            line = f"{line} {escape(detail)}"
        self.console.print(line, highlight=False)

    def info(self, message: str, detail: str = "") -> None:
        self.update(message, "info", detail)

    def success(self, message: str, detail: str = "") -> None:
        self.update(message, "success", detail)

    def warning(self, message: str, detail: str = "") -> None:
        self.update(message, "warning", detail)

    def error(self, message: str, detail: str = "") -> None:
        self.update(message, "error", detail)
