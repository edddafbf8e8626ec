"""
Core tree utilities.

BeautifulSoup primitives and logging helpers with no binding logic.
"""

from . import dom
from .log_utils import configure_logging, get_current_log_file_path

__all__ = [
    "dom",
    "configure_logging",
    "get_current_log_file_path",
]
