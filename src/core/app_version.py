"""Application version helpers sourced from ``pyproject.toml``."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

DEFAULT_VERSION = "0.0.0"


@lru_cache(maxsize=1)
def get_app_version() -> str:
    """Return the project version declared in the repository's ``pyproject.toml``."""
    pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        content = pyproject_path.read_text(encoding="utf-8")
    except OSError:
        return DEFAULT_VERSION

    match = re.search(r'^\s*version\s*=\s*"([^"]+)"\s*$', content, flags=re.MULTILINE)
    return match.group(1) if match else DEFAULT_VERSION
