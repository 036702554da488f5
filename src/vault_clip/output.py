"""User-facing CLI output."""

# ruff: noqa: T201 — this module is the output layer; print() is its sole mechanism for producing CLI output.

import logging
import sys
from typing import NoReturn

import typer

logger = logging.getLogger(__name__)


class Output:
    """Handles all CLI output.

    Quiet mode discards everything meant for stdout, including the countdown and the final
    "Clipboard cleared!" line. Errors on stderr are always printed.
    """

    def __init__(self, *, quiet: bool) -> None:
        """Initialize output handler.

        Args:
            quiet: If True, suppress all stdout output.

        """
        self._quiet = quiet
        self._status_line = ""  # last in-place status line, erased before the next write

    def _print(self, message: str, *, end: str = "\n") -> None:
        """Print to stdout unless quiet, flushing immediately."""
        if not self._quiet:
            print(message, end=end, flush=True)

    def _erase_status_line(self) -> None:
        """Overwrite the previous status line with spaces and return the cursor to column 0."""
        self._print("\r" + " " * len(self._status_line) + "\r", end="")
        self._status_line = ""

    def print_error_and_exit(self, code: str, message: str, exit_code: int = 1) -> NoReturn:
        """Print an error to stderr and exit.

        Raises:
            typer.Exit: Always, with exit_code.

        """
        logger.info("Command failed: %s", code)
        print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=exit_code)

    def print_attribute_not_found(self, name: str) -> None:
        """Print missing attribute notice (stdout, not stderr)."""
        self._print(f'Attribute "{name}" not found.')

    def print_attribute_copied(self, key: str) -> None:
        """Print attribute copied to clipboard confirmation."""
        self._print(f'Entry\'s "{key}" attribute copied to the clipboard!')

    def print_countdown(self, seconds: int) -> None:
        """Replace the status line with the remaining countdown."""
        self._erase_status_line()
        unit = "second" if seconds == 1 else "seconds"
        self._status_line = f"Clearing the clipboard in {seconds} {unit}..."
        self._print(self._status_line, end="")

    def print_clipboard_cleared(self) -> None:
        """Erase the countdown and print clipboard cleared confirmation."""
        self._erase_status_line()
        self._print("Clipboard cleared!")
