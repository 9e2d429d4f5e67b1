"""prdeps utilities package."""

from .exit_codes import ExitCodes
from .logging import logger

__all__ = [
    "ExitCodes",
    "logger",
]
