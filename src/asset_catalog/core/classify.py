import re
from pathlib import Path

from asset_catalog.errors import ClassificationError
from asset_catalog.models import FileEntry

_SHADER_STAGE_EXTENSIONS = {
    ".vert": "vertex",
    ".frag": "fragment",
}

_NON_IDENTIFIER = re.compile(r"[^0-9A-Za-z_]")

# Strict and reserved Rust keywords, plus "_". self, Self, super and crate
# have no raw-identifier form, so every keyword takes a "_" suffix.
RUST_KEYWORDS = frozenset(
    """
    _ abstract as async await become box break const continue crate do dyn
    else enum extern false final fn for gen if impl in let loop macro match
    mod move mut override priv pub ref return self Self static struct super
    trait true try type typeof unsafe unsized use virtual where while yield
    """.split()
)


def avoid_keyword(name: str) -> str:
    return f"{name}_" if name in RUST_KEYWORDS else name


def _identifier_chars(value: str) -> str:
    result = _NON_IDENTIFIER.sub("_", value)
    if not result or result[0].isdigit():
        result = f"_{result}"
    return result


def sanitize_identifier(value: str) -> str:
    return avoid_keyword(_identifier_chars(value))


def variant_name(key: str) -> str:
    return avoid_keyword(_identifier_chars(key).capitalize())


def accessor_name(key: str) -> str:
    return f"{_identifier_chars(key.lower())}_data"


def relative_to_root(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        raise ClassificationError(f"{path} is not under {root}") from None


def extension_key(path: Path) -> str:
    suffix = path.suffix
    if not suffix or suffix == ".":
        raise ClassificationError(f"File has no extension: {path}")
    return suffix[1:].lower()


def classify_asset(path: Path, root: Path) -> FileEntry:
    relative = relative_to_root(path, root)
    key = extension_key(relative)
    return FileEntry(
        path=path,
        relative_path=relative.as_posix(),
        identifier=sanitize_identifier(relative.with_suffix("").as_posix()),
        key=key,
        variant=variant_name(key),
    )


def shader_stage(path: Path) -> str | None:
    return _SHADER_STAGE_EXTENSIONS.get(path.suffix.lower())


def classify_shader(path: Path, root: Path) -> FileEntry:
    relative = relative_to_root(path, root)
    stage = shader_stage(relative)
    if stage is None:
        raise ClassificationError(f"Unsupported shader extension: {path}")
    extension = relative.suffix[1:].lower()
    return FileEntry(
        path=path,
        relative_path=relative.as_posix(),
        identifier=sanitize_identifier(f"{relative.with_suffix('').as_posix()}_{extension}"),
        key=stage,
        variant=variant_name(stage),
    )


def check_unique_identifiers(entries: list[FileEntry]) -> None:
    seen: dict[str, FileEntry] = {}
    for entry in entries:
        other = seen.get(entry.identifier)
        if other is not None:
            raise ClassificationError(
                f"'{entry.relative_path}' and '{other.relative_path}' both map to identifier '{entry.identifier}'"
            )
        seen[entry.identifier] = entry
