"""
Connection domain models
"""
import shlex
from dataclasses import dataclass, field
from typing import Optional, List

from ..inventory.models import ServerEntry


@dataclass
class ResolvedServer:
    """A machine entry together with its (single level) jump host"""
    machine: str
    entry: ServerEntry
    jump_machine: Optional[str] = None
    jump: Optional[ServerEntry] = None


@dataclass
class ConnectionPlan:
    """
    SSH options and destination for one invocation.
    
    args holds the options in emission order (known-hosts override, then
    the jump option); destination is "host" or "user@host".
    """
    args: List[str] = field(default_factory=list)
    destination: str = ""

    def remote(self, path: str) -> str:
        """scp-style remote spec: destination:path"""
        return f"{self.destination}:{path}"


@dataclass
class PortForward:
    """Local port forward, rendered as local:remote_host:remote_port"""
    local_port: int
    remote_host: str
    remote_port: int

    @property
    def spec(self) -> str:
        return f"{self.local_port}:{self.remote_host}:{self.remote_port}"


@dataclass
class Command:
    """External program invocation"""
    program: str
    args: List[str] = field(default_factory=list)

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)
