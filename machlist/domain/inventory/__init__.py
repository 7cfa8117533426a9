"""
Inventory domain module
"""
from .models import (
    Inventory,
    ServerEntry,
    ResourceEntry,
    EnvironmentServers,
    EnvironmentResources,
)
from .username import resolve_username

__all__ = [
    "Inventory",
    "ServerEntry",
    "ResourceEntry",
    "EnvironmentServers",
    "EnvironmentResources",
    "resolve_username",
]
