"""Installation lifecycle: state detection, cleanup, probing and setup."""

from .state import detect_installation
from .cleanup import cleanup_generated
from .probe import is_available, get_install_instructions
from .setup import KiroCliSetup

__all__ = [
    "detect_installation",
    "cleanup_generated",
    "is_available",
    "get_install_instructions",
    "KiroCliSetup",
]
