import asyncio
import contextlib
from pathlib import Path
from typing import Annotated

import typer

from asset_catalog.cli.generate import (
    ExcludeOption,
    OutputOption,
    RootOption,
    StrictTypesOption,
    WrapOption,
    build_config,
    console,
    generate_or_exit,
)
from asset_catalog.config import CatalogKind, GeneratorConfig
from asset_catalog.core.generate import run_generate
from asset_catalog.errors import CatalogError
from asset_catalog.watcher.watchfiles_adapter import WatchfilesWatcher


async def watch_and_regenerate(config: GeneratorConfig, stop: asyncio.Event) -> None:
    async def _regenerate(paths: set[Path]) -> None:
        try:
            result = run_generate(config)
        except CatalogError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            return
        if result.written:
            console.print(f"[green]Regenerated[/green] {config.output} ({result.entry_count} bindings)")

    watcher = WatchfilesWatcher(config.root, _regenerate, exclude=config.exclude)
    await watcher.start()
    try:
        await stop.wait()
    finally:
        await watcher.stop()


def watch(
    kind: Annotated[CatalogKind, typer.Argument(help="Which catalog to keep up to date.")],
    root: RootOption = None,
    output: OutputOption = None,
    wrap: WrapOption = None,
    exclude: ExcludeOption = None,
    strict_types: StrictTypesOption = False,
) -> None:
    """Generate a catalog, then regenerate it whenever the tree changes."""
    config = build_config(kind, root, output, wrap, exclude, strict_types)
    if config.output is None:
        console.print("[red]watch needs a file output, not stdout.[/red]")
        raise typer.Exit(2)
    generate_or_exit(config)
    console.print(f"Watching {config.root} (Ctrl+C to stop)")

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(watch_and_regenerate(config, asyncio.Event()))
