from __future__ import annotations

from pathlib import Path

DEFAULT_IGNORES = {
    "__pycache__",
    "node_modules",
    ".mypy_cache",
    ".ruff_cache",
    ".pytest_cache",
}


def should_ignore_dir(dir_path: Path) -> bool:
    return dir_path.name in DEFAULT_IGNORES or dir_path.name.startswith(".")
