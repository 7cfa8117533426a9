"""
Server and resource lookup within an environment
"""
from ...core.exceptions import (
    JumpMissingIpError,
    JumpTargetNotFoundError,
    MachineNotFoundError,
)
from ...core.logging import get_logger
from ..inventory.models import EnvironmentServers, EnvironmentResources, ResourceEntry
from .models import ResolvedServer

logger = get_logger(__name__)


def resolve_server(env_servers: EnvironmentServers, machine_name: str) -> ResolvedServer:
    """
    Resolve a machine and its jump host.
    
    Only one level of jump indirection is followed: the jump host's own
    jump field is ignored. Jump hosts must be addressed by ip.
    
    Args:
        env_servers: Machines of the target environment
        machine_name: Machine to connect to
    
    Returns:
        ResolvedServer
    
    Raises:
        MachineNotFoundError: If the machine is not defined
        JumpTargetNotFoundError: If the referenced jump machine is not defined
        JumpMissingIpError: If the jump machine has no ip
    """
    entry = env_servers.get_machine(machine_name)
    if entry.jump is None:
        return ResolvedServer(machine=machine_name, entry=entry)
    
    try:
        jump = env_servers.get_machine(entry.jump)
    except MachineNotFoundError:
        raise JumpTargetNotFoundError(entry.jump, machine_name) from None
    
    if jump.ip is None:
        raise JumpMissingIpError(entry.jump)
    
    if jump.jump is not None:
        logger.debug(
            "ignoring nested jump %s -> %s -> %s", machine_name, entry.jump, jump.jump
        )
    
    return ResolvedServer(
        machine=machine_name,
        entry=entry,
        jump_machine=entry.jump,
        jump=jump,
    )


def resolve_resource(env_resources: EnvironmentResources, resource_name: str) -> ResourceEntry:
    """
    Resolve a forwardable resource by name.
    
    Raises:
        ResourceNotFoundError: If the resource is not defined
    """
    return env_resources.get_resource(resource_name)
