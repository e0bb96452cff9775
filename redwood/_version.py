"""Package version, taken from the installed distribution metadata."""
from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def _from_pyproject() -> str:
    # Running from a source checkout without ``pip install -e .``
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    if not pyproject.is_file():
        return "0.0.0"
    m = re.search(r'^version\s*=\s*"([^"]+)"', pyproject.read_text(encoding="utf-8"), re.MULTILINE)
    return m.group(1) if m else "0.0.0"


try:
    __version__: str = version("redwood-wiki")
except PackageNotFoundError:
    __version__ = _from_pyproject()
