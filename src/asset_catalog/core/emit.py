"""Render catalogs as Rust source text.

Everything is emitted in sorted order so an unchanged tree always produces
byte-identical output.
"""

import os
import unicodedata
from pathlib import Path

from asset_catalog.core.classify import accessor_name, variant_name
from asset_catalog.models import AssetCatalog, AttributeField, ShaderCatalog, ShaderEntry

_INDENT = "    "

_ASSET_HEADER = (
    "#![allow(irrefutable_let_patterns)]",
    "#![allow(non_upper_case_globals)]",
    "#![allow(dead_code)]",
)

_ACCESSOR_TEMPLATE = """\
    pub fn {accessor}(&self) -> &'static [u8] {{
        if let Asset::{variant}(data) = self {{
            data
        }} else {{
            panic!("unwrapped asset as wrong file type");
        }}
    }}
"""

_SHADER_TEMPLATE = """\
pub mod {module} {{
    vulkano_shaders::shader!{{
        ty: "{stage}",
        path: "{path}"
    }}
{vertex}}}
"""


_RUST_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def rust_string(value: str) -> str:
    """Escape ``value`` for a Rust string literal. The result never spans lines."""
    escaped = []
    for ch in value:
        if ch in _RUST_ESCAPES:
            escaped.append(_RUST_ESCAPES[ch])
        elif unicodedata.category(ch) in ("Cc", "Zl", "Zp"):
            escaped.append(f"\\u{{{ord(ch):x}}}")
        else:
            escaped.append(ch)
    return "".join(escaped)


def include_path(path: Path, base: Path) -> str:
    return Path(os.path.relpath(path.resolve(), base.resolve())).as_posix()


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------


def render_asset_enum(keys: list[str]) -> str:
    lines = ["pub enum Asset {"]
    lines.extend(f"{_INDENT}{variant_name(key)}(&'static [u8])," for key in keys)
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_asset_accessors(keys: list[str]) -> str:
    accessors = [_ACCESSOR_TEMPLATE.format(accessor=accessor_name(key), variant=variant_name(key)) for key in keys]
    return "impl Asset {\n" + "\n".join(accessors) + "}\n"


def render_asset_bindings(catalog: AssetCatalog, base: Path) -> str:
    entries = sorted(catalog.entries, key=lambda e: e.relative_path)
    return "".join(
        f"pub const {entry.identifier}: Asset = "
        f'Asset::{entry.variant}(include_bytes!("{rust_string(include_path(entry.path, base))}"));\n'
        for entry in entries
    )


def render_assets(catalog: AssetCatalog, base: Path) -> str:
    """Render the ``Asset`` enum, its accessors and one constant per file.

    Include paths are written relative to ``base``, the directory holding the
    generated file.
    """
    keys = catalog.keys
    sections = [
        "\n".join(_ASSET_HEADER) + "\n",
        render_asset_enum(keys),
        render_asset_accessors(keys),
        render_asset_bindings(catalog, base),
    ]
    return "\n".join(sections)


# ---------------------------------------------------------------------------
# Shaders
# ---------------------------------------------------------------------------


def render_vertex_struct(attributes: list[AttributeField]) -> str:
    if not attributes:
        return ""
    lines = [
        "",
        f"{_INDENT}#[derive(Debug, Clone, Default)]",
        f"{_INDENT}pub struct Vertex {{",
    ]
    lines.extend(f"{_INDENT * 2}pub {field.name}: {field.target_type}," for field in attributes)
    lines.append(f"{_INDENT}}}")
    names = ", ".join(field.name for field in attributes)
    lines.append(f"{_INDENT}vulkano::impl_vertex!(Vertex, {names});")
    return "\n".join(lines) + "\n"


def render_shader_module(shader: ShaderEntry, shader_path: str) -> str:
    return _SHADER_TEMPLATE.format(
        module=shader.identifier,
        stage=shader.stage,
        path=rust_string(shader_path),
        vertex=render_vertex_struct(shader.attributes),
    )


def render_shaders(catalog: ShaderCatalog) -> str:
    """Render one module per shader.

    Shader paths are emitted as discovered (root-joined), which is how the
    shader macro resolves them from the crate root.
    """
    shaders = sorted(catalog.shaders, key=lambda s: s.entry.relative_path)
    return "\n".join(render_shader_module(shader, shader.entry.path.as_posix()) for shader in shaders)


def wrap_module(text: str, name: str) -> str:
    body = "".join(f"{_INDENT}{line}" if line.strip() else line for line in text.splitlines(keepends=True))
    if body and not body.endswith("\n"):
        body += "\n"
    return f"mod {name} {{\n{body}}}\n"
