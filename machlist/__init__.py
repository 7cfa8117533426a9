"""
machlist - SSH shortcut manager

Resolves human-friendly (environment, machine) pairs from a TOML
inventory into ssh/scp invocations, supporting:
- Per-environment known-hosts files
- Single level jump hosts
- Username directives read from environment variables
- Local port forwards to named resources
"""

__version__ = "0.1.0"

from .core.exceptions import MachlistError
from .domain.inventory import (
    Inventory,
    ServerEntry,
    ResourceEntry,
    EnvironmentServers,
    EnvironmentResources,
    resolve_username,
)
from .domain.connection import (
    ConnectionPlan,
    ConnectionService,
    PortForward,
    build_plan,
    resolve_server,
    resolve_resource,
)
from .adapters.config import InventoryLoader

__all__ = [
    "__version__",
    "MachlistError",
    "Inventory",
    "ServerEntry",
    "ResourceEntry",
    "EnvironmentServers",
    "EnvironmentResources",
    "resolve_username",
    "ConnectionPlan",
    "ConnectionService",
    "PortForward",
    "build_plan",
    "resolve_server",
    "resolve_resource",
    "InventoryLoader",
]
