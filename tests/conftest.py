"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------

VERTEX_SHADER = """\
#version 450

layout(location = 0) in vec2 position;
layout(location = 1) in vec2 velocity;

layout(location = 0) out vec4 color;

void main() {
    gl_Position = vec4(position, 0.0, 1.0);
}
"""

FRAGMENT_SHADER = """\
#version 450

layout(location = 0) in vec4 color;
layout(location = 0) out vec4 f_color;

void main() {
    f_color = color;
}
"""


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def asset_tree(tmp_path: Path) -> Path:
    """An assets directory with a pruned originals/ subtree and dotfiles."""
    return write_tree(
        tmp_path / "assets",
        {
            "credits.txt": "thanks\n",
            "menu1.wav": b"RIFF\x00\x01",
            "vlem0.ogg": b"OggS\x00",
            "vlem1.OGG": b"OggS\x01",
            "sfx/hit.wav": b"RIFF\x02",
            "originals/menu1.flac": b"fLaC",
            ".gitkeep": "",
            ".cache/stale.txt": "stale",
        },
    )


@pytest.fixture
def shader_tree(tmp_path: Path) -> Path:
    return write_tree(
        tmp_path / "shaders",
        {
            "particle.vert": VERTEX_SHADER,
            "particle.frag": FRAGMENT_SHADER,
            "common.glsl": "// shared helpers\n",
        },
    )
