"""Read-only entry database: groups, entries, attribute matching, TOTP."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pyotp
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Attribute keys that carry TOTP configuration
OTP_ATTRIBUTE = "otp"
TOTP_SEED_ATTRIBUTE = "TOTP Seed"
TOTP_SETTINGS_ATTRIBUTE = "TOTP Settings"

DEFAULT_TOTP_PERIOD = 30
DEFAULT_TOTP_DIGITS = 6


class DatabaseError(Exception):
    """Application-level error raised while reading the database."""

    def __init__(self, code: str, message: str) -> None:
        """Initialize with a machine-readable code and a human-readable message.

        Args:
            code: Machine-readable error code (e.g. "corrupted").
            message: Human-readable error description.

        """
        super().__init__(message)
        self.code = code


def find_attributes(attributes: dict[str, str], name: str) -> list[str]:
    """Return attribute keys matching name.

    An exact key wins outright. Otherwise every key equal to name ignoring case is returned,
    in the mapping's own order.
    """
    if name in attributes:
        return [name]
    folded = name.casefold()
    return [key for key in attributes if key.casefold() == folded]


class Entry(BaseModel):
    """A single credential record."""

    model_config = ConfigDict(frozen=True)

    attributes: dict[str, str] = Field(default_factory=dict, description="Attribute key to value, keys unique")

    @property
    def title(self) -> str:
        """Entry title, stored as the Title attribute."""
        return self.attributes.get("Title", "")

    def has_totp(self) -> bool:
        """Check if the entry carries TOTP configuration."""
        return bool(self.attributes.get(OTP_ATTRIBUTE) or self.attributes.get(TOTP_SEED_ATTRIBUTE))

    def totp(self) -> str:
        """Generate the current TOTP code.

        Raises:
            DatabaseError: No TOTP configured or malformed configuration (code: ``invalid_totp``).

        """
        return self._totp_generator().now()

    def _totp_generator(self) -> pyotp.TOTP:
        """Build a pyotp generator from the otp URI or the seed/settings attribute pair."""
        uri = self.attributes.get(OTP_ATTRIBUTE)
        try:
            if uri:
                generator = pyotp.parse_uri(uri)
                if not isinstance(generator, pyotp.TOTP):
                    raise DatabaseError("invalid_totp", f"Entry {self.title} has a non-TOTP otp URI.")
                return generator
            seed = self.attributes.get(TOTP_SEED_ATTRIBUTE)
            if not seed:
                raise DatabaseError("invalid_totp", f"Entry {self.title} has no TOTP set up.")
            period, digits = _parse_totp_settings(self.attributes.get(TOTP_SETTINGS_ATTRIBUTE, ""))
            generator = pyotp.TOTP(seed.replace(" ", "").upper(), digits=digits, interval=period)
            generator.byte_secret()  # validates base32 before the code is generated
            return generator
        except (ValueError, TypeError) as e:
            raise DatabaseError("invalid_totp", f"Entry {self.title} has an invalid TOTP configuration: {e}") from None


def _parse_totp_settings(settings: str) -> tuple[int, int]:
    """Parse a ``period;digits`` settings string. Empty parts fall back to defaults."""
    parts = [part.strip() for part in settings.split(";")] if settings else []
    period = int(parts[0]) if len(parts) > 0 and parts[0] else DEFAULT_TOTP_PERIOD
    digits = int(parts[1]) if len(parts) > 1 and parts[1] else DEFAULT_TOTP_DIGITS
    if period <= 0 or digits <= 0:
        raise ValueError(f"period and digits must be positive, got '{settings}'")
    return period, digits


class Group(BaseModel):
    """A named folder of entries and child groups."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    entries: list[Entry] = Field(default_factory=list)
    groups: list[Group] = Field(default_factory=list)

    def find_entry_by_path(self, entry_path: str) -> Entry | None:
        """Find an entry by title or by full path below this group.

        A bare title (no ``/``) matches the first entry with that title anywhere in the tree.
        A path containing ``/`` is matched against ``/<group>/.../<title>``; the leading slash is optional.
        """
        if not entry_path:
            return None
        if not entry_path.startswith("/") and "/" in entry_path:
            entry_path = "/" + entry_path
        return self._find_entry_by_path(entry_path, "/")

    def _find_entry_by_path(self, entry_path: str, base_path: str) -> Entry | None:
        """Depth-first search: own entries before child groups."""
        for entry in self.entries:
            if entry_path == base_path + entry.title or (not entry_path.startswith("/") and entry_path == entry.title):
                return entry
        for group in self.groups:
            found = group._find_entry_by_path(entry_path, f"{base_path}{group.name}/")
            if found is not None:
                return found
        return None


class Database:
    """Read-only access to the JSON entry database, loaded on first use."""

    def __init__(self, path: Path) -> None:
        """Initialize the database handle.

        Args:
            path: Path to the JSON document holding the root group.

        """
        self._path = path
        self._root: Group | None = None

    @property
    def root_group(self) -> Group:
        """Root group, loading the database file if needed.

        Raises:
            DatabaseError: Missing file (code: ``not_found``) or invalid content (code: ``corrupted``).

        """
        if self._root is None:
            self._root = self._load()
        return self._root

    def find_entry_by_path(self, entry_path: str) -> Entry | None:
        """Find an entry by title or path, or None if not found."""
        return self.root_group.find_entry_by_path(entry_path)

    def _load(self) -> Group:
        """Read and validate the database file."""
        if not self._path.is_file():
            raise DatabaseError("not_found", f"Database {self._path} not found.")
        try:
            data = json.loads(self._path.read_text())
            root = Group.model_validate(data)
        except (json.JSONDecodeError, ValidationError, UnicodeDecodeError):
            raise DatabaseError("corrupted", f"Database {self._path} is not a valid entry database.") from None
        logger.debug("Loaded database %s", self._path)
        return root
