import logging
import os
import stat
import tempfile
from pathlib import Path

from asset_catalog.errors import OutputError

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _target_mode(path: Path) -> int:
    """Mode the replaced file should carry: the existing one, else 0666 less the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_current_umask()


def write_if_changed(path: Path, text: str) -> bool:
    """Atomically replace ``path`` with ``text``.

    Returns ``False`` without touching the file when it already holds
    exactly ``text``. The file mode survives the replacement.
    """
    data = text.encode("utf-8")
    try:
        if path.read_bytes() == data:
            logger.info("%s is up to date", path)
            return False
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise OutputError(f"Cannot read existing output {path}: {exc}") from exc

    temp_path: Path | None = None
    try:
        mode = _target_mode(path)
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as temp_file:
            temp_path = Path(temp_file.name)
            temp_file.write(data)
            temp_file.flush()
        os.chmod(temp_path, mode)
        os.replace(temp_path, path)
    except OSError as exc:
        if temp_path:
            temp_path.unlink(missing_ok=True)
        raise OutputError(f"Cannot write output {path}: {exc}") from exc

    logger.info("Wrote %s (%d bytes)", path, len(data))
    return True
