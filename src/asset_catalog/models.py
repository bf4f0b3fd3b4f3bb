from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from asset_catalog.errors import TypeMismatchError


class FileEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    relative_path: str
    identifier: str
    key: str
    variant: str


class AttributeField(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: int = Field(ge=0)
    source_type: str
    name: str
    target_type: str


class ShaderEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry: FileEntry
    stage: str
    attributes: list[AttributeField] = Field(default_factory=list)

    @property
    def identifier(self) -> str:
        return self.entry.identifier


class Asset(BaseModel):
    """Runtime value of one asset binding: its kind and embedded bytes."""

    model_config = ConfigDict(frozen=True)

    kind: str
    data: bytes

    def data_as(self, kind: str) -> bytes:
        """Return the bytes if this asset is of ``kind``.

        Raises ``TypeMismatchError`` otherwise; bindings and accessors are
        generated together, so a mismatch is a programming error.
        """
        if kind.lower() != self.kind:
            raise TypeMismatchError(f"unwrapped asset as wrong file type: expected {kind!r}, got {self.kind!r}")
        return self.data


class AssetCatalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    root: Path
    entries: list[FileEntry]

    @property
    def keys(self) -> list[str]:
        return sorted({entry.key for entry in self.entries})

    def get(self, identifier: str) -> FileEntry:
        for entry in self.entries:
            if entry.identifier == identifier:
                return entry
        raise KeyError(identifier)

    def load(self, identifier: str) -> Asset:
        entry = self.get(identifier)
        return Asset(kind=entry.key, data=entry.path.read_bytes())


class ShaderCatalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    root: Path
    shaders: list[ShaderEntry]
