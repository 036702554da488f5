"""Shared fixtures: on-disk databases, an in-memory clipboard, and a recording sleep."""

import json
from pathlib import Path
from typing import Any

import pytest

from vault_clip.database import Database

TOTP_SECRET = "JBSWY3DPEHPK3PXP"


class FakeClipboard:
    """In-memory clipboard recording every write."""

    def __init__(self, exit_code: int = 0) -> None:
        self.exit_code = exit_code
        self.writes: list[str] = []

    @property
    def content(self) -> str | None:
        """Last written value, or None if never written."""
        return self.writes[-1] if self.writes else None

    def write(self, text: str) -> int:
        self.writes.append(text)
        return self.exit_code


class FakeSleep:
    """Sleep replacement recording requested durations."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def sample_tree() -> dict[str, Any]:
    """Root group with a nested group, a TOTP entry, and case-colliding attributes."""
    return {
        "name": "Root",
        "entries": [
            {"attributes": {"Title": "Email", "UserName": "alice", "Password": "secret123"}},
            {
                "attributes": {
                    "Title": "Bank",
                    "Password": "b4nk",
                    "otp": f"otpauth://totp/Bank:alice?secret={TOTP_SECRET}&issuer=Bank",
                },
            },
        ],
        "groups": [
            {
                "name": "Work",
                "entries": [
                    {"attributes": {"Title": "VPN", "Password": "vpn-pass", "pin": "1111", "PIN": "2222", "Pin": "3333"}},
                    {"attributes": {"Title": "Email", "Password": "work-secret"}},
                ],
                "groups": [
                    {
                        "name": "Servers",
                        "entries": [{"attributes": {"Title": "db01", "Password": "db-pass", "TOTP Seed": TOTP_SECRET}}],
                    },
                ],
            },
        ],
    }


def write_database(path: Path, tree: dict[str, Any]) -> Path:
    """Write a database document to disk and return its path."""
    path.write_text(json.dumps(tree))
    return path


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a database file holding the sample tree."""
    return write_database(tmp_path / "database.json", sample_tree())


@pytest.fixture
def database(db_path: Path) -> Database:
    """Database handle over the sample tree."""
    return Database(db_path)


@pytest.fixture
def clipboard() -> FakeClipboard:
    """In-memory clipboard that accepts every write."""
    return FakeClipboard()


@pytest.fixture
def failing_clipboard() -> FakeClipboard:
    """In-memory clipboard whose program exits with code 3."""
    return FakeClipboard(exit_code=3)


@pytest.fixture
def sleep() -> FakeSleep:
    """Recording sleep."""
    return FakeSleep()
