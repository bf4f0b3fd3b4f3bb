import logging
from pathlib import Path

from pydantic import BaseModel

from asset_catalog.config import DEFAULT_EXCLUDE, CatalogKind, GeneratorConfig
from asset_catalog.core.classify import check_unique_identifiers, classify_asset, classify_shader, shader_stage
from asset_catalog.core.emit import render_assets, render_shaders, wrap_module
from asset_catalog.core.output import write_if_changed
from asset_catalog.core.ports.reflector import ShaderReflector
from asset_catalog.core.reflect import RegexShaderReflector
from asset_catalog.core.scanner import TreeScanner
from asset_catalog.errors import ScanError
from asset_catalog.models import AssetCatalog, AttributeField, ShaderCatalog, ShaderEntry

logger = logging.getLogger(__name__)


class GenerationResult(BaseModel):
    text: str
    entry_count: int
    written: bool


def build_asset_catalog(root: Path, exclude: tuple[str, ...] = DEFAULT_EXCLUDE) -> AssetCatalog:
    files = TreeScanner(root, exclude).scan()
    entries = [classify_asset(path, root) for path in files]
    check_unique_identifiers(entries)
    return AssetCatalog(root=root, entries=entries)


def build_shader_catalog(
    root: Path,
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE,
    reflector: ShaderReflector | None = None,
) -> ShaderCatalog:
    reflector = reflector or RegexShaderReflector()
    shaders: list[ShaderEntry] = []
    for path in TreeScanner(root, exclude).scan():
        if shader_stage(path) is None:
            logger.debug("Skipping non-shader file %s", path)
            continue
        entry = classify_shader(path, root)
        attributes: list[AttributeField] = []
        if entry.key == "vertex":
            try:
                source = path.read_text(encoding="utf-8")
            except OSError as exc:
                raise ScanError(f"Cannot read shader {path}: {exc}") from exc
            attributes = reflector.reflect(source, origin=entry.relative_path)
        shaders.append(ShaderEntry(entry=entry, stage=entry.key, attributes=attributes))
    check_unique_identifiers([shader.entry for shader in shaders])
    return ShaderCatalog(root=root, shaders=shaders)


def render_catalog(config: GeneratorConfig, reflector: ShaderReflector | None = None) -> tuple[str, int]:
    """Build the catalog described by ``config`` and render it.

    Returns (text, number_of_bindings).
    """
    if config.kind is CatalogKind.ASSETS:
        assets = build_asset_catalog(config.root, config.exclude)
        base = config.output.parent if config.output is not None else Path.cwd()
        text = render_assets(assets, base)
        count = len(assets.entries)
    else:
        shaders = build_shader_catalog(
            config.root,
            config.exclude,
            reflector or RegexShaderReflector(strict=config.strict_types),
        )
        text = render_shaders(shaders)
        count = len(shaders.shaders)

    if config.wrap_module:
        text = wrap_module(text, config.wrap_module)
    return text, count


def run_generate(config: GeneratorConfig, reflector: ShaderReflector | None = None) -> GenerationResult:
    """Run one full generation. Nothing is written unless every step succeeds."""
    text, count = render_catalog(config, reflector)
    written = False
    if config.output is not None:
        written = write_if_changed(config.output, text)
    logger.info("Generated %s catalog with %d binding(s) from %s", config.kind.value, count, config.root)
    return GenerationResult(text=text, entry_count=count, written=written)
