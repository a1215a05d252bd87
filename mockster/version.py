"""Package version, read once from installed metadata."""

from __future__ import annotations

import importlib.metadata

_DIST_NAME = "mockster"


def installed_version(dist_name: str = _DIST_NAME) -> str:
    """Return the installed distribution version, or a dev marker."""
    try:
        return importlib.metadata.version(dist_name)
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


VERSION: str = installed_version()


def get_version_info() -> dict[str, str]:
    """Version fields reported by ``/health``."""
    return {"version": VERSION}
