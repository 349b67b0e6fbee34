from importlib import metadata

DIST_NAME = "rent-affordability-calculator"

try:
    __version__ = metadata.version(DIST_NAME)
except metadata.PackageNotFoundError:  # pragma: no cover - running from a checkout
    __version__ = "0.1.0"


def client_info(base: str) -> str:
    """Client string sent with remote calls, e.g. ``streamlit rent-affordability-calculator/0.1.0``."""
    return f"{base} {DIST_NAME}/{__version__}".strip()
