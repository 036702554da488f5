"""Application context shared across CLI commands."""

from dataclasses import dataclass

import typer

from vault_clip.clipboard import Clipboard
from vault_clip.config import Config
from vault_clip.database import Database
from vault_clip.output import Output


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared application state passed through Typer context."""

    out: Output
    db: Database
    clipboard: Clipboard
    cfg: Config


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result
