import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path, PurePosixPath

from asset_catalog.config import DEFAULT_EXCLUDE
from asset_catalog.errors import ScanError

logger = logging.getLogger(__name__)


def is_hidden(name: str) -> bool:
    return name.startswith(".")


class TreeScanner:
    """Lazily walk ``root`` yielding regular files in sorted order.

    Excluded paths are relative to the root and pruned as whole subtrees.
    Dot-entries are pruned at any depth. Every ``iter()`` starts a new walk.
    """

    def __init__(self, root: str | Path, exclude: Iterable[str] = DEFAULT_EXCLUDE) -> None:
        self._root = Path(root)
        self._exclude = frozenset(PurePosixPath(p.replace("\\", "/")).as_posix() for p in exclude)

    @property
    def root(self) -> Path:
        return self._root

    def is_excluded(self, relative: PurePosixPath) -> bool:
        """True if ``relative`` or any of its ancestors is pruned."""
        parts = relative.parts
        for i, part in enumerate(parts):
            if is_hidden(part) or PurePosixPath(*parts[: i + 1]).as_posix() in self._exclude:
                return True
        return False

    def __iter__(self) -> Iterator[Path]:
        self._check_root()
        try:
            yield from self._walk(self._root, PurePosixPath())
        except OSError as exc:
            raise ScanError(f"Failed while scanning {self._root}: {exc}") from exc

    def scan(self) -> list[Path]:
        """Return every file under the root, or raise ``ScanError`` with no partial result."""
        files = sorted(self)
        logger.debug("Scanned %d file(s) under %s", len(files), self._root)
        return files

    def _check_root(self) -> None:
        if not self._root.exists():
            raise ScanError(f"Root directory not found: {self._root}")
        if not self._root.is_dir():
            raise ScanError(f"Root is not a directory: {self._root}")

    def _walk(self, directory: Path, relative: PurePosixPath) -> Iterator[Path]:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
        for entry in entries:
            child = relative / entry.name
            if self.is_excluded(child):
                logger.debug("Pruned %s", child)
                continue
            if entry.is_dir(follow_symlinks=False):
                yield from self._walk(directory / entry.name, child)
            elif entry.is_file():
                yield directory / entry.name
