"""Utility helpers shared across the registry builder."""

from .config import AppConfig, load_config
from .logging import configure_logging, get_logger
from .parallel import map_in_threads
from .paths import normalise_path, posix_relative

__all__ = [
    "AppConfig",
    "load_config",
    "configure_logging",
    "get_logger",
    "map_in_threads",
    "normalise_path",
    "posix_relative",
]
