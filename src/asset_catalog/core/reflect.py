"""Vertex input reflection by line-oriented pattern matching.

Only ``layout(location = N) in TYPE NAME;`` declarations are recognized.
Anything else, including qualified inputs such as ``flat in``, is ignored.
"""

import logging
import re
import warnings

from asset_catalog.errors import UnrecognizedTypeError, UnrecognizedTypeWarning
from asset_catalog.models import AttributeField

logger = logging.getLogger(__name__)

_INPUT_DECLARATION = re.compile(
    r"^\s*layout\s*\(\s*location\s*=\s*(?P<location>\d+)\s*\)"
    r"\s*in\s+(?P<type>[A-Za-z_]\w*)\s+(?P<name>[A-Za-z_]\w*)\s*;"
)

_SCALAR_TYPES = {
    "float": "f32",
    "double": "f64",
    "int": "i32",
    "uint": "u32",
}

_VECTOR_PREFIXES = {
    "vec": "f32",
    "dvec": "f64",
    "ivec": "i32",
    "uvec": "u32",
}


def _build_type_table() -> dict[str, str]:
    table = dict(_SCALAR_TYPES)
    for prefix, element in _VECTOR_PREFIXES.items():
        for arity in (2, 3, 4):
            table[f"{prefix}{arity}"] = f"[{element}; {arity}]"
    return table


TYPE_TABLE = _build_type_table()


def target_type(source_type: str) -> str | None:
    return TYPE_TABLE.get(source_type)


class RegexShaderReflector:
    """Implements the ``ShaderReflector`` protocol.

    Inputs whose type is missing from ``TYPE_TABLE`` are skipped with an
    ``UnrecognizedTypeWarning``, or abort the run when ``strict`` is set.
    """

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def reflect(self, source: str, origin: str = "<shader>") -> list[AttributeField]:
        fields: list[AttributeField] = []
        for lineno, line in enumerate(source.splitlines(), start=1):
            match = _INPUT_DECLARATION.match(line)
            if match is None:
                continue
            source_type = match.group("type")
            name = match.group("name")
            mapped = target_type(source_type)
            if mapped is None:
                message = f"{origin}:{lineno}: unrecognized vertex input type '{source_type}' for '{name}'"
                if self._strict:
                    raise UnrecognizedTypeError(message)
                warnings.warn(message, UnrecognizedTypeWarning, stacklevel=2)
                continue
            fields.append(
                AttributeField(
                    location=int(match.group("location")),
                    source_type=source_type,
                    name=name,
                    target_type=mapped,
                )
            )
        logger.debug("Reflected %d vertex input(s) from %s", len(fields), origin)
        return fields
