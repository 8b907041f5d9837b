"""
Exposes the version of gridlatlon
"""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

# Source checkouts keep the version in the repo-root VERSION file, which setup.py also reads
_VERSION_FILE = Path(__file__).resolve().parents[1] / 'VERSION'


def _read_version_file() -> str | None:
    """Fallback for a source tree that hasn't been pip installed"""
    try:
        return _VERSION_FILE.read_text(encoding='utf-8').strip().lstrip('v')
    except OSError:
        return None


try:
    __version__ = version('gridlatlon')
except PackageNotFoundError:
    __version__ = _read_version_file()

__all__ = ['__version__']
