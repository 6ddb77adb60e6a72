import logging
import os
import time

import colorlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table


console = Console(force_terminal=True, legacy_windows=False)


class Logger:
    """Console logger with spinner-style start/succeed/fail steps.

    Debug lines are only printed when the level is DEBUG.
    """

    def __init__(self, level: str | None = None):
        self.status = None
        self.start_time = None
        self.level = logging.INFO
        self._setup_standard_logging()
        self.set_level(level or os.environ.get("LOG_LEVEL", "INFO"))

    def _setup_standard_logging(self):
        """Setup colorlog for standard Python logging integration"""
        if not logging.getLogger().handlers:
            handler = colorlog.StreamHandler()
            handler.setFormatter(
                colorlog.ColoredFormatter(
                    "%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s: %(message)s",
                )
            )
            logging.basicConfig(level=logging.INFO, handlers=[handler])

    def set_level(self, level: str | int):
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
        self.level = level if isinstance(level, int) else logging.INFO
        logging.getLogger().setLevel(self.level)

    def _format_message(self, text, elapsed=None, status=None):
        elapsed_str = f"{elapsed:>8}" if elapsed else ""
        if status == "success":
            text = f"[bold green]{text}[/]"
            elapsed_str = f"[bold green]{elapsed_str}[/]" if elapsed_str else ""
        elif status == "fail":
            text = f"[bold red]{text}[/]"
            elapsed_str = f"[bold red]{elapsed_str}[/]" if elapsed_str else ""
        else:
            text = f"[bold blue]{text}[/]"
            elapsed_str = f"[blue]{elapsed_str}[/]" if elapsed_str else ""
        return text, elapsed_str

    def _get_emoji(self, status: str | None = None) -> str:
        if status == "success":
            return "[bold green]✔[/]"
        elif status == "fail":
            return "[bold red]✖[/]"
        elif status == "loading":
            return "[bold yellow]⠋[/]"
        else:
            return "[bold blue]ℹ[/]"

    def _rich_log(self, text, elapsed=None, status=None):
        text, elapsed_str = self._format_message(text, elapsed, status)
        table = Table.grid(expand=True)
        table.add_column(justify="left", width=32, ratio=2, no_wrap=False)
        table.add_column(justify="right", width=12, ratio=1, no_wrap=True, highlight=True)
        table.add_row(text, elapsed_str)
        console.print(table)

    def _elapsed(self) -> str | None:
        if self.start_time is None:
            return None
        elapsed = f"{time.monotonic() - self.start_time:.2f}s"
        self.start_time = None
        return elapsed

    def _stop_status(self):
        if self.status:
            self.status.__exit__(None, None, None)
            self.status = None

    def start(self, text):
        self._stop_status()
        self.start_time = time.monotonic()
        self.status = console.status(text)
        self.status.__enter__()

    def succeed(self, text):
        elapsed = self._elapsed()
        self._stop_status()
        self._rich_log(f"{self._get_emoji('success')} {escape(str(text))}", elapsed, "success")

    def fail(self, text):
        elapsed = self._elapsed()
        self._stop_status()
        self._rich_log(f"{self._get_emoji('fail')} {escape(str(text))}", elapsed, "fail")

    def info(self, text):
        if self.level <= logging.INFO:
            self._rich_log(f"{self._get_emoji('info')} {escape(str(text))}")

    def warning(self, text):
        if self.level <= logging.WARNING:
            self._rich_log(f"[bold yellow]⚠[/] {escape(str(text))}")

    def debug(self, text):
        if self.level <= logging.DEBUG:
            self._rich_log(f"[dim]🐛 {escape(str(text))}[/]")

    def error(self, text):
        """Alias for fail() method to maintain compatibility"""
        self.fail(text)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.status:
            self.status.__exit__(exc_type, exc_val, exc_tb)
            self.status = None


# Create a single logger instance that can be imported throughout the codebase
logger = Logger()
