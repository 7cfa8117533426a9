"""
Core infrastructure layer
"""
from .constants import *
from .exceptions import *
from .logging import (
    setup_logging,
    verbosity_to_level,
    get_logger,
    get_stdout_console,
    get_stderr_console,
)
from .interfaces import SystemEnvironment, ProcessRunner

__all__ = [
    "setup_logging",
    "verbosity_to_level",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "SystemEnvironment",
    "ProcessRunner",
]
