from __future__ import annotations

from typing import NoReturn

import typer
from woo_client import ApiError, AuthError, WooClientError
from woo_client.errors_utils import api_error_message

from . import console


def fail(action: str, exc: WooClientError, *, code: int = 1) -> NoReturn:
    if isinstance(exc, AuthError):
        console.err(f"{action}: unauthorized ({exc.status_code}). Check consumer key and secret.")
    elif isinstance(exc, ApiError):
        detail = api_error_message(exc.body)
        console.err(f"{action}: {detail} [status {exc.status_code}]" if detail else f"{action}: {exc}")
    else:
        console.err(f"{action}: {exc}")
    raise typer.Exit(code=code)
