from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """Installed version of the sauce-templates distribution ("0.0.0" when not installed)."""
    try:
        return metadata.version("sauce-templates")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["tool_version"]
