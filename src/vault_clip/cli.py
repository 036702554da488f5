"""CLI entry point for vault-clip."""

from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus

from vault_clip.app_context import AppContext
from vault_clip.clipboard import SystemClipboard
from vault_clip.commands.clip import clip
from vault_clip.config import Config
from vault_clip.database import Database
from vault_clip.log import setup_logging
from vault_clip.output import Output

app = TyperPlus(package_name="vault-clip")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Silence all non-error output.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path.")] = None,
    database: Annotated[Path | None, typer.Option("--database", "-d", help="Entry database file.")] = None,
) -> None:
    """Copy entry attributes and TOTP codes to the clipboard."""
    cfg = Config.build(data_dir, database)
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(cfg.log_path, cfg.log_level)
    ctx.obj = AppContext(
        out=Output(quiet=quiet),
        db=Database(cfg.database),
        clipboard=SystemClipboard(cfg.clipboard_command),
        cfg=cfg,
    )


app.command(aliases=["c"])(clip)
