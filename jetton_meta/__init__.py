"""Top level package for the jetton_meta project."""
from importlib import metadata


def get_version() -> str:
    """Return the installed package version."""

    try:
        return metadata.version("jetton-meta")
    except metadata.PackageNotFoundError:  # pragma: no cover - during tests
        return "0.0.0"


__all__ = ["get_version"]
