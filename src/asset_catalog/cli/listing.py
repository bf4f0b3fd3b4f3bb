from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from asset_catalog.cli.generate import ExcludeOption, RootOption
from asset_catalog.config import DEFAULT_EXCLUDE, CatalogKind, default_root
from asset_catalog.core.generate import build_asset_catalog, build_shader_catalog
from asset_catalog.errors import CatalogError

console = Console()


def _asset_table(root: Path, exclude: tuple[str, ...]) -> Table:
    table = Table("identifier", "variant", "path")
    for entry in build_asset_catalog(root, exclude).entries:
        table.add_row(entry.identifier, entry.variant, entry.relative_path)
    return table


def _shader_table(root: Path, exclude: tuple[str, ...]) -> Table:
    table = Table("module", "stage", "path", "inputs")
    for shader in build_shader_catalog(root, exclude).shaders:
        inputs = ", ".join(f"{a.location}:{a.name}" for a in shader.attributes) or "-"
        table.add_row(shader.identifier, shader.stage, shader.entry.relative_path, inputs)
    return table


def list_entries(
    kind: Annotated[CatalogKind, typer.Argument(help="Which catalog to inspect.")],
    root: RootOption = None,
    exclude: ExcludeOption = None,
) -> None:
    """Show how each file would be classified, without writing anything."""
    resolved_root = root or default_root(kind)
    resolved_exclude = tuple(exclude) if exclude else DEFAULT_EXCLUDE
    try:
        if kind is CatalogKind.ASSETS:
            table = _asset_table(resolved_root, resolved_exclude)
        else:
            table = _shader_table(resolved_root, resolved_exclude)
    except CatalogError as exc:
        Console(stderr=True).print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc
    console.print(table)
    console.print(f"({table.row_count} {kind.value})")
