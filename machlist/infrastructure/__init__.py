"""
Infrastructure layer
"""
from .system import OsEnvironment, OsProcessRunner

__all__ = ["OsEnvironment", "OsProcessRunner"]
