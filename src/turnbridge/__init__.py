"""turnbridge - non-blocking Claude queries for game turn loops."""

__version__ = "0.1.0"

from .bindings import build_entry_points, register  # noqa: E402
from .config import Settings, get_settings  # noqa: E402
from .responses import Response, is_error  # noqa: E402
from .session import Session, build_session  # noqa: E402

__all__ = [
    "Response",
    "Session",
    "Settings",
    "build_entry_points",
    "build_session",
    "get_settings",
    "is_error",
    "register",
]
