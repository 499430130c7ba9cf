"""
Version information for Order Store.

Single source of truth: pyproject.toml
Runtime access via importlib.metadata with fallback.
"""

# Fallback version if package metadata unavailable (dev mode)
_FALLBACK_VERSION = "0.1.0"


def get_version() -> str:
    """Get the package version from metadata or fallback."""
    try:
        from importlib.metadata import version

        return version("order-store")
    except Exception:
        return _FALLBACK_VERSION


VERSION = get_version()
