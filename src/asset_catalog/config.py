from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_EXCLUDE = ("originals",)


class CatalogKind(str, Enum):
    ASSETS = "assets"
    SHADERS = "shaders"


_DEFAULT_ROOTS = {
    CatalogKind.ASSETS: Path("assets"),
    CatalogKind.SHADERS: Path("shaders"),
}

_DEFAULT_OUTPUTS = {
    CatalogKind.ASSETS: Path("src/assets.rs"),
    CatalogKind.SHADERS: Path("src/shaders.rs"),
}


class GeneratorConfig(BaseModel):
    """Parameters of one generation run.

    ``output`` of ``None`` means the catalog goes to stdout.
    """

    model_config = ConfigDict(frozen=True)

    kind: CatalogKind
    root: Path
    output: Path | None
    wrap_module: str | None = None
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE
    strict_types: bool = False

    @field_validator("wrap_module")
    @classmethod
    def _check_wrap_module(cls, value: str | None) -> str | None:
        if value is not None and not value.isidentifier():
            raise ValueError(f"'{value}' is not a valid module name")
        return value

    @classmethod
    def for_kind(cls, kind: CatalogKind, **overrides: Any) -> "GeneratorConfig":
        values: dict[str, Any] = {
            "kind": kind,
            "root": _DEFAULT_ROOTS[kind],
            "output": _DEFAULT_OUTPUTS[kind],
        }
        values.update(overrides)
        return cls(**values)


def default_root(kind: CatalogKind) -> Path:
    return _DEFAULT_ROOTS[kind]
