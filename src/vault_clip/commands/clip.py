"""Copy an entry's attribute to the clipboard."""

from typing import Annotated

import typer

from vault_clip.app_context import use_context
from vault_clip.clip import ClipError, ClipRequest, clip_entry
from vault_clip.database import DatabaseError


def clip(
    ctx: typer.Context,
    entry: Annotated[str, typer.Argument(help="Path of the entry to clip.")],
    timeout: Annotated[
        str | None,
        typer.Argument(
            help="Timeout in seconds before clearing the clipboard. Values starting with '-' must follow '--'."
        ),
    ] = None,
    *,
    attribute: Annotated[
        str | None,
        typer.Option(
            "--attribute",
            "-a",
            metavar="ATTR",
            help='Copy the given attribute to the clipboard. Defaults to "password" if not specified.',
        ),
    ] = None,
    totp: Annotated[
        bool, typer.Option("--totp", "-t", help='Copy the current TOTP to the clipboard (equivalent to "-a totp").')
    ] = False,
) -> None:
    """Copy an entry's attribute to the clipboard."""
    app = use_context(ctx)
    request = ClipRequest(entry_path=entry, timeout=timeout, attribute=attribute, totp=totp)
    try:
        clip_entry(app.db, request, clipboard=app.clipboard, out=app.out)
    except ClipError as e:
        if e.code == "attribute_not_found":
            app.out.print_attribute_not_found(request.requested_attribute)
            raise typer.Exit(code=e.exit_code) from None
        if e.code == "clipboard_write_failed":
            raise typer.Exit(code=e.exit_code) from None
        app.out.print_error_and_exit(e.code, str(e), e.exit_code)
    except DatabaseError as e:
        app.out.print_error_and_exit(e.code, str(e))
