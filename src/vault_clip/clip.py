"""Copy an entry attribute or TOTP code to the clipboard, with optional timed clearing.

Flow: validate options → look up entry → resolve attribute/TOTP → write clipboard → countdown → clear.
Any failure stops the flow before the next side effect.
"""

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from vault_clip.clipboard import Clipboard
from vault_clip.database import Database, Entry, find_attributes
from vault_clip.output import Output

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTE = "password"
TOTP_ATTRIBUTE = "totp"

# Timeout: optionally signed ASCII digits, within a signed 32-bit int
_TIMEOUT_RE = re.compile(r"[+-]?[0-9]+")
MAX_TIMEOUT = 2**31 - 1


class ClipError(Exception):
    """Terminal failure of a clip invocation."""

    def __init__(self, code: str, message: str, exit_code: int = 1) -> None:
        """Initialize with a machine-readable code, a human-readable message, and a process exit code.

        Args:
            code: Machine-readable error code (e.g. "attribute_ambiguous").
            message: Human-readable error description.
            exit_code: Exit status the CLI should terminate with.

        """
        super().__init__(message)
        self.code = code
        self.exit_code = exit_code


@dataclass(frozen=True, slots=True)
class ClipRequest:
    """Raw options of one clip invocation."""

    entry_path: str
    timeout: str | None = None
    attribute: str | None = None  # None = not given on the command line
    totp: bool = False

    @property
    def requested_attribute(self) -> str:
        """Attribute name to resolve, falling back to the default."""
        return self.attribute if self.attribute is not None else DEFAULT_ATTRIBUTE


@dataclass(frozen=True, slots=True)
class AttributeSelection:
    """Requested attribute name and what it resolved to."""

    requested: str
    key: str
    value: str = field(repr=False)


def parse_timeout(raw: str | None) -> int:
    """Parse the timeout argument into seconds. Absent or empty means 0 (no clearing).

    Raises:
        ClipError: Not an integer greater than zero (code: ``invalid_timeout``).

    """
    if not raw:
        return 0
    text = raw.strip()
    seconds = int(text) if _TIMEOUT_RE.fullmatch(text) else 0
    if seconds <= 0 or seconds > MAX_TIMEOUT:
        raise ClipError("invalid_timeout", f"Invalid timeout value {raw}.")
    return seconds


def validate_options(request: ClipRequest) -> int:
    """Validate the raw option set and return the timeout in seconds.

    Raises:
        ClipError: Bad timeout (code: ``invalid_timeout``) or --attribute combined with --totp
            (code: ``conflicting_options``).

    """
    timeout_seconds = parse_timeout(request.timeout)
    if request.attribute is not None and request.totp:
        raise ClipError("conflicting_options", "Please specify one of --attribute or --totp, not both.")
    return timeout_seconds


def separated_list(items: list[str]) -> str:
    """Join items as an English list: ``a``, ``a and b``, ``a, b, and c``."""
    if len(items) <= 1:
        return "".join(items)
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def resolve_attribute(entry: Entry, requested: str, *, totp: bool, entry_path: str) -> AttributeSelection:
    """Resolve the requested attribute (or the TOTP pseudo-attribute) on an entry.

    Raises:
        ClipError: No TOTP configured (code: ``no_totp``), several keys match
            (code: ``attribute_ambiguous``), or nothing matches (code: ``attribute_not_found``).

    """
    if totp or requested == TOTP_ATTRIBUTE:
        if not entry.has_totp():
            raise ClipError("no_totp", f"Entry with path {entry_path} has no TOTP set up.")
        return AttributeSelection(requested=requested, key=TOTP_ATTRIBUTE, value=entry.totp())

    keys = find_attributes(entry.attributes, requested)
    if len(keys) > 1:
        raise ClipError("attribute_ambiguous", f"attribute {requested} is ambiguous, it matches {separated_list(keys)}.")
    if not keys:
        raise ClipError("attribute_not_found", f'Attribute "{requested}" not found.')
    return AttributeSelection(requested=requested, key=keys[0], value=entry.attributes[keys[0]])


class ClipboardLifecycle:
    """Writes a secret to the clipboard and, given a timeout, clears it after a countdown."""

    def __init__(self, clipboard: Clipboard, out: Output, sleep: Callable[[float], None] | None = None) -> None:
        """Initialize the lifecycle manager.

        Args:
            clipboard: Clipboard to write to.
            out: Output handler for confirmations and the countdown line.
            sleep: Blocking sleep function; defaults to time.sleep.

        """
        self._clipboard = clipboard
        self._out = out
        self._sleep = sleep if sleep is not None else time.sleep

    def run(self, selection: AttributeSelection, timeout_seconds: int) -> None:
        """Copy the selected value, then count down and clear if timeout_seconds > 0.

        The countdown blocks and cannot be cancelled; killing the process leaves the secret on the clipboard.

        Raises:
            ClipError: Clipboard program failed (code: ``clipboard_write_failed``, exit code passed through).

        """
        exit_code = self._clipboard.write(selection.value)
        if exit_code != 0:
            raise ClipError("clipboard_write_failed", "Unable to write to the clipboard.", exit_code=exit_code)
        logger.info("Copied attribute %s to clipboard", selection.key)
        self._out.print_attribute_copied(selection.key)

        if not timeout_seconds:
            return

        remaining = timeout_seconds
        while remaining > 0:
            self._out.print_countdown(remaining)
            self._sleep(1)
            remaining -= 1

        # Exit code of the clearing write is not checked.
        self._clipboard.write("")
        logger.info("Clipboard cleared after %d seconds", timeout_seconds)
        self._out.print_clipboard_cleared()


def clip_entry(
    database: Database,
    request: ClipRequest,
    *,
    clipboard: Clipboard,
    out: Output,
    sleep: Callable[[float], None] | None = None,
) -> AttributeSelection:
    """Run one clip invocation end to end and return what was copied.

    Raises:
        ClipError: Any validation, lookup, resolution, or clipboard failure.
        DatabaseError: Database file missing or invalid, or a malformed TOTP configuration.

    """
    timeout_seconds = validate_options(request)

    entry = database.find_entry_by_path(request.entry_path)
    if entry is None:
        raise ClipError("entry_not_found", f"Entry {request.entry_path} not found.")

    selection = resolve_attribute(entry, request.requested_attribute, totp=request.totp, entry_path=request.entry_path)
    ClipboardLifecycle(clipboard, out, sleep).run(selection, timeout_seconds)
    return selection
