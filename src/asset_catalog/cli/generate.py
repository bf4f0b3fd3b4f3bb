from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console

from asset_catalog.config import DEFAULT_EXCLUDE, CatalogKind, GeneratorConfig
from asset_catalog.core.generate import GenerationResult, run_generate
from asset_catalog.errors import CatalogError

console = Console(stderr=True)

RootOption = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Directory to scan.", envvar="ASSET_CATALOG_ROOT", show_default=False),
]
OutputOption = Annotated[
    str | None,
    typer.Option("--output", "-o", help="Generated file, or '-' for stdout.", envvar="ASSET_CATALOG_OUTPUT"),
]
WrapOption = Annotated[
    str | None,
    typer.Option("--wrap", help="Wrap the whole output in 'mod NAME { ... }'."),
]
ExcludeOption = Annotated[
    list[str] | None,
    typer.Option("--exclude", "-x", help="Path relative to the root to prune (repeatable). Default: originals."),
]
StrictTypesOption = Annotated[
    bool,
    typer.Option("--strict-types", help="Fail on vertex inputs with unmapped types instead of skipping them."),
]


def build_config(
    kind: CatalogKind,
    root: Path | None = None,
    output: str | None = None,
    wrap: str | None = None,
    exclude: list[str] | None = None,
    strict_types: bool = False,
) -> GeneratorConfig:
    overrides: dict[str, object] = {
        "wrap_module": wrap,
        "exclude": tuple(exclude) if exclude else DEFAULT_EXCLUDE,
        "strict_types": strict_types,
    }
    if root is not None:
        overrides["root"] = root
    if output == "-":
        overrides["output"] = None
    elif output is not None:
        overrides["output"] = Path(output)
    try:
        return GeneratorConfig.for_kind(kind, **overrides)
    except ValidationError as exc:
        console.print(f"[red]Invalid options:[/red] {exc.errors()[0]['msg']}")
        raise typer.Exit(2) from exc


def generate_or_exit(config: GeneratorConfig) -> GenerationResult:
    try:
        result = run_generate(config)
    except CatalogError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    if config.output is None:
        typer.echo(result.text, nl=False)
    elif result.written:
        console.print(f"[green]Wrote[/green] {config.output} ({result.entry_count} bindings)")
    else:
        console.print(f"[green]Unchanged[/green] {config.output}")
    return result


def assets(
    root: RootOption = None,
    output: OutputOption = None,
    wrap: WrapOption = None,
    exclude: ExcludeOption = None,
) -> None:
    """Generate the Asset enum, accessors and one constant per asset file."""
    generate_or_exit(build_config(CatalogKind.ASSETS, root, output, wrap, exclude))


def shaders(
    root: RootOption = None,
    output: OutputOption = None,
    wrap: WrapOption = None,
    exclude: ExcludeOption = None,
    strict_types: StrictTypesOption = False,
) -> None:
    """Generate one shader module per .vert/.frag file, with vertex input structs."""
    generate_or_exit(build_config(CatalogKind.SHADERS, root, output, wrap, exclude, strict_types))
