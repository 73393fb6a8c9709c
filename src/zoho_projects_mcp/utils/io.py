"""I/O mode helpers."""

import os

from .environment import _truthy


def is_read_only_mode() -> bool:
    """Return True when ``READ_ONLY_MODE`` disables every write tool."""
    return _truthy(os.getenv("READ_ONLY_MODE"))
