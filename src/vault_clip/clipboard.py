"""Clipboard utility — write text via the system clipboard program."""

import logging
import platform
import subprocess  # nosec B404
from typing import Protocol

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1


class Clipboard(Protocol):
    """Anything that can replace the clipboard contents."""

    def write(self, text: str) -> int:
        """Replace clipboard contents with text. Return a process exit code (0 = success)."""
        ...


def _copy_cmd() -> list[str]:
    """Return the platform-specific clipboard copy command."""
    match platform.system():
        case "Darwin":
            return ["pbcopy"]
        case "Windows":
            return ["clip"]
        case _:
            return ["xclip", "-i", "-selection", "clipboard"]


class SystemClipboard:
    """Clipboard backed by an external program reading the text from stdin."""

    def __init__(self, command: list[str] | None = None) -> None:
        """Initialize with an optional command override.

        Args:
            command: Program and arguments to run; None selects pbcopy, clip, or xclip by platform.

        """
        self._command = command

    @property
    def command(self) -> list[str]:
        """Command used for writes."""
        return self._command or _copy_cmd()

    def write(self, text: str) -> int:
        """Pipe text into the clipboard program and return its exit code.

        An empty string clears the clipboard. A program that cannot be started counts as exit code 1;
        one killed by a signal counts as 128 + the signal number.
        """
        command = self.command
        try:
            # S603: args come from platform defaults or the user's own config file
            result = subprocess.run(command, input=text.encode(), check=False)  # noqa: S603  # nosec B603
        except OSError as e:
            logger.warning("Unable to start clipboard program %s: %s", command[0], e)
            return EXIT_FAILURE
        exit_code = result.returncode
        if exit_code < 0:
            # Killed by signal N: report 128 + N
            exit_code = 128 - exit_code
        if exit_code != 0:
            logger.warning("Clipboard program %s exited with code %d", command[0], exit_code)
        return exit_code
