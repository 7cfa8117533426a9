"""
Inventory domain models

The inventory mirrors the TOML resource file:

    username = "env:SSH_USER"

    [server.<env>.<machine>]
    ip = "10.0.0.5"
    name = "host.internal"
    jump = "<machine>"
    proxy = true

    [resource.<env>.<resource>]
    server = "<machine>"
    at = "127.0.0.1"
    port = 5432
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Iterator, List

from ...core.constants import MIN_PORT, MAX_PORT
from ...core.exceptions import (
    ConfigError,
    EnvironmentNotFoundError,
    MachineNotFoundError,
    ResourceNotFoundError,
)


# ============================================================
# Field validation helpers
# ============================================================

def _require_table(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{where}: expected a table, got {type(value).__name__}")
    return value


def _optional_str(data: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{where}.{key}: expected a string, got {type(value).__name__}")
    return value


def _required_str(data: Dict[str, Any], key: str, where: str) -> str:
    if key not in data:
        raise ConfigError(f"{where}: missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ConfigError(f"{where}.{key}: expected a string, got {type(value).__name__}")
    return value


# ============================================================
# Entries
# ============================================================

@dataclass
class ServerEntry:
    """One reachable host"""
    ip: Optional[str] = None
    name: Optional[str] = None
    jump: Optional[str] = None
    proxy: bool = False

    @property
    def address(self) -> Optional[str]:
        """Address to connect to, ip preferred over name"""
        return self.ip if self.ip is not None else self.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting unset fields"""
        data: Dict[str, Any] = {}
        if self.ip is not None:
            data["ip"] = self.ip
        if self.name is not None:
            data["name"] = self.name
        if self.jump is not None:
            data["jump"] = self.jump
        if self.proxy:
            data["proxy"] = True
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "server") -> "ServerEntry":
        """Create from dictionary"""
        data = _require_table(data, where)
        proxy = data.get("proxy", False)
        if not isinstance(proxy, bool):
            raise ConfigError(f"{where}.proxy: expected a boolean, got {type(proxy).__name__}")
        return cls(
            ip=_optional_str(data, "ip", where),
            name=_optional_str(data, "name", where),
            jump=_optional_str(data, "jump", where),
            proxy=proxy,
        )


@dataclass
class ResourceEntry:
    """A remote (host, port) reachable through a server"""
    server: str
    at: str
    port: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "server": self.server,
            "at": self.at,
            "port": self.port,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], where: str = "resource") -> "ResourceEntry":
        """Create from dictionary"""
        data = _require_table(data, where)
        if "port" not in data:
            raise ConfigError(f"{where}: missing field 'port'")
        port = data["port"]
        # bool is an int subclass, reject it explicitly
        if not isinstance(port, int) or isinstance(port, bool):
            raise ConfigError(f"{where}.port: expected an integer, got {type(port).__name__}")
        if not (MIN_PORT <= port <= MAX_PORT):
            raise ConfigError(f"{where}.port: {port} is not a valid port")
        return cls(
            server=_required_str(data, "server", where),
            at=_required_str(data, "at", where),
            port=port,
        )


# ============================================================
# Environments
# ============================================================

@dataclass
class EnvironmentServers:
    """Machines of one environment, keyed by machine name"""
    environment: str
    machines: Dict[str, ServerEntry] = field(default_factory=dict)

    def __iter__(self) -> Iterator[str]:
        return iter(self.machines)

    def __len__(self) -> int:
        return len(self.machines)

    def __contains__(self, machine_name: object) -> bool:
        return machine_name in self.machines

    def get_machine(self, machine_name: str) -> ServerEntry:
        """
        Look up a machine by name.

        Proxy entries are returned like any other entry.

        Raises:
            MachineNotFoundError: If the machine is not defined
        """
        try:
            return self.machines[machine_name]
        except KeyError:
            raise MachineNotFoundError(machine_name, self.environment) from None

    def list_servers(self, include_proxies: bool = False) -> Iterator[str]:
        """Lazily yield machine names, skipping proxy entries unless asked"""
        return (
            machine_name
            for machine_name, entry in self.machines.items()
            if include_proxies or not entry.proxy
        )

    def to_dict(self) -> Dict[str, Any]:
        return {k: v.to_dict() for k, v in self.machines.items()}

    @classmethod
    def from_dict(cls, environment: str, data: Dict[str, Any]) -> "EnvironmentServers":
        where = f"server.{environment}"
        data = _require_table(data, where)
        return cls(
            environment=environment,
            machines={
                machine_name: ServerEntry.from_dict(entry, f"{where}.{machine_name}")
                for machine_name, entry in data.items()
            },
        )


@dataclass
class EnvironmentResources:
    """Forwardable resources of one environment, keyed by resource name"""
    environment: str
    resources: Dict[str, ResourceEntry] = field(default_factory=dict)

    def __iter__(self) -> Iterator[str]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def get_resource(self, resource_name: str) -> ResourceEntry:
        """
        Look up a resource by name.

        Raises:
            ResourceNotFoundError: If the resource is not defined
        """
        try:
            return self.resources[resource_name]
        except KeyError:
            raise ResourceNotFoundError(resource_name, self.environment) from None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v.to_dict() for k, v in self.resources.items()}

    @classmethod
    def from_dict(cls, environment: str, data: Dict[str, Any]) -> "EnvironmentResources":
        where = f"resource.{environment}"
        data = _require_table(data, where)
        return cls(
            environment=environment,
            resources={
                resource_name: ResourceEntry.from_dict(entry, f"{where}.{resource_name}")
                for resource_name, entry in data.items()
            },
        )


# ============================================================
# Inventory
# ============================================================

@dataclass
class Inventory:
    """Parsed resource file"""
    username: Optional[str] = None
    servers: Dict[str, EnvironmentServers] = field(default_factory=dict)
    resources: Dict[str, EnvironmentResources] = field(default_factory=dict)

    def get_environment_servers(self, environment: str) -> EnvironmentServers:
        """
        Get the server mapping of an environment.

        Raises:
            EnvironmentNotFoundError: If the environment has no server section
        """
        try:
            return self.servers[environment]
        except KeyError:
            raise EnvironmentNotFoundError(environment, "servers") from None

    def get_environment_resources(self, environment: str) -> EnvironmentResources:
        """
        Get the resource mapping of an environment.

        An environment that has servers but no resource section yields an
        empty mapping; an environment unknown to both sections is an error.

        Raises:
            EnvironmentNotFoundError: If the environment is unknown
        """
        if environment in self.resources:
            return self.resources[environment]
        if environment in self.servers:
            return EnvironmentResources(environment=environment)
        raise EnvironmentNotFoundError(environment, "resources")

    def list_environment_names(self) -> List[str]:
        """Environment names, in no guaranteed order"""
        return list(self.servers)

    def list_environments(self) -> Iterator[str]:
        """Lazily yield environment names"""
        return iter(self.servers)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the TOML document shape"""
        data: Dict[str, Any] = {}
        if self.username is not None:
            data["username"] = self.username
        data["server"] = {k: v.to_dict() for k, v in self.servers.items()}
        if self.resources:
            data["resource"] = {k: v.to_dict() for k, v in self.resources.items()}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Inventory":
        """
        Create from the parsed TOML document.

        Raises:
            ConfigError: If required tables are missing or fields are mistyped
        """
        data = _require_table(data, "document")
        if "server" not in data:
            raise ConfigError("missing 'server' table")
        username = _optional_str(data, "username", "document")
        servers = _require_table(data["server"], "server")
        resources = _require_table(data.get("resource", {}), "resource")
        return cls(
            username=username,
            servers={
                env: EnvironmentServers.from_dict(env, env_data)
                for env, env_data in servers.items()
            },
            resources={
                env: EnvironmentResources.from_dict(env, env_data)
                for env, env_data in resources.items()
            },
        )
