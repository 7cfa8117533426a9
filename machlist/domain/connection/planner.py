"""
Connection plan building

Argument order is fixed: known-hosts override, jump option. The
destination is kept apart so callers can place it (or a scp
"dest:path" form of it) wherever their command needs it.
"""
from pathlib import Path
from typing import Optional

from ...core.constants import KNOWN_HOSTS_PREFIX
from ...core.exceptions import DestinationMissingError, JumpMissingIpError
from ..inventory.models import ServerEntry, ResourceEntry
from .models import ConnectionPlan, PortForward, ResolvedServer


def user_host(username: Optional[str], host: str) -> str:
    """Format user@host, or bare host without a username"""
    if username is None:
        return host
    return f"{username}@{host}"


def known_hosts_file(ssh_dir: Path, environment: str) -> Path:
    """Per-environment known-hosts file"""
    return ssh_dir / f"{KNOWN_HOSTS_PREFIX}{environment}"


def build_plan(
    username: Optional[str],
    environment: str,
    server: ServerEntry,
    jump: Optional[ServerEntry],
    ssh_dir: Path,
    machine_name: str = "",
    jump_name: str = "",
) -> ConnectionPlan:
    """
    Build the ssh option list and destination for a server.
    
    Args:
        username: Resolved username or None
        environment: Target environment name
        server: Destination entry
        jump: Jump host entry or None
        ssh_dir: Directory holding known-hosts files
        machine_name: Name of the destination, used in errors
        jump_name: Name of the jump host, used in errors
    
    Returns:
        ConnectionPlan
    
    Raises:
        JumpMissingIpError: If the jump host has no ip
        DestinationMissingError: If the server has neither ip nor name
    """
    args = [f"-oUserKnownHostsFile={known_hosts_file(ssh_dir, environment)}"]
    
    if jump is not None:
        if jump.ip is None:
            raise JumpMissingIpError(jump_name)
        args.extend(["-J", user_host(username, jump.ip)])
    
    address = server.address
    if address is None:
        raise DestinationMissingError(machine_name)
    
    return ConnectionPlan(args=args, destination=user_host(username, address))


def build_plan_for(
    username: Optional[str],
    environment: str,
    resolved: ResolvedServer,
    ssh_dir: Path,
) -> ConnectionPlan:
    """build_plan for a ResolvedServer"""
    return build_plan(
        username,
        environment,
        resolved.entry,
        resolved.jump,
        ssh_dir,
        machine_name=resolved.machine,
        jump_name=resolved.jump_machine or "",
    )


def build_forward(resource: ResourceEntry, local_port: Optional[int] = None) -> PortForward:
    """Port forward for a resource, the local port defaulting to the resource port"""
    return PortForward(
        local_port=resource.port if local_port is None else local_port,
        remote_host=resource.at,
        remote_port=resource.port,
    )
