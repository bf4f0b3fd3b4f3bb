from typing import Protocol

from asset_catalog.models import AttributeField


class ShaderReflector(Protocol):
    def reflect(self, source: str, origin: str = "<shader>") -> list[AttributeField]: ...
