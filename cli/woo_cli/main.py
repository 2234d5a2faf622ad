from __future__ import annotations

import typer

from .commands import api_cmd, products_cmd, settings_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="woo",
        help="WooCommerce REST API CLI",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.add_typer(products_cmd.app, name="products")
    app.add_typer(api_cmd.app, name="api")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
