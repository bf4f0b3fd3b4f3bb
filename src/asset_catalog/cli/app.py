import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from asset_catalog.cli.generate import assets, shaders
from asset_catalog.cli.listing import list_entries
from asset_catalog.cli.watch import watch

app = typer.Typer(
    name="asset-catalog",
    help="Generate typed Rust catalogs of asset and shader files.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("assets")(assets)
app.command("shaders")(shaders)
app.command("list")(list_entries)
app.command("watch")(watch)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    logging.captureWarnings(True)


@app.callback()
def callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every scanned and pruned path.")] = False,
) -> None:
    configure_logging(verbose)


def main() -> None:
    app()
