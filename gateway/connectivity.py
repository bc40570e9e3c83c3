"""Network connectivity probe consulted before each repository request."""
from typing import Callable

from core.config import settings


ConnectivityProbe = Callable[[], bool]


def is_online() -> bool:
    """Report whether requests may be issued."""
    return not settings.offline_mode
