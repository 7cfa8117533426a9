"""
Connection domain service - business logic
"""
from pathlib import Path
from typing import Optional, Tuple

from ...core.constants import SSH_DIR
from ...core.interfaces import SystemEnvironment
from ...core.logging import get_logger
from ..inventory.models import Inventory, ResourceEntry
from ..inventory.username import resolve_username
from .lookup import resolve_server, resolve_resource
from .models import ConnectionPlan, PortForward
from .planner import build_plan_for, build_forward

logger = get_logger(__name__)


class ConnectionService:
    """
    Connection service - pure business logic.
    
    Turns (environment, machine) and (environment, resource) pairs into
    connection plans. The username directive is resolved once, when the
    service is created. No direct dependency on CLI, Typer, or processes.
    """
    
    def __init__(self, inventory: Inventory, environment: SystemEnvironment):
        """
        Initialize connection service.
        
        Args:
            inventory: Parsed inventory
            environment: Process environment capability
        
        Raises:
            EnvVarMissingError: If the username directive cannot be resolved
            HomeDirectoryError: If the home directory cannot be resolved
        """
        self.inventory = inventory
        self.environment = environment
        self.username: Optional[str] = resolve_username(inventory, environment)
        self.ssh_dir: Path = environment.home_dir() / SSH_DIR
    
    def plan_for_machine(self, target_env: str, machine_name: str) -> ConnectionPlan:
        """
        Build the connection plan for a machine.
        
        Raises:
            EnvironmentNotFoundError, MachineNotFoundError,
            JumpTargetNotFoundError, JumpMissingIpError,
            DestinationMissingError
        """
        env_servers = self.inventory.get_environment_servers(target_env)
        resolved = resolve_server(env_servers, machine_name)
        plan = build_plan_for(self.username, target_env, resolved, self.ssh_dir)
        logger.info(
            "resolved %s/%s -> %s%s",
            target_env,
            machine_name,
            plan.destination,
            f" via {resolved.jump_machine}" if resolved.jump_machine else "",
        )
        return plan
    
    def lookup_resource(self, target_env: str, resource_name: str) -> ResourceEntry:
        """
        Find a resource in an environment.
        
        Raises:
            EnvironmentNotFoundError, ResourceNotFoundError
        """
        env_resources = self.inventory.get_environment_resources(target_env)
        return resolve_resource(env_resources, resource_name)
    
    def plan_for_resource(
        self,
        target_env: str,
        resource_name: str,
        local_port: Optional[int] = None,
    ) -> Tuple[ConnectionPlan, PortForward, ResourceEntry]:
        """
        Build the connection plan and port forward for a resource.
        
        The plan connects to the resource's server; the forward's local
        port defaults to the resource port.
        
        Returns:
            (plan, forward, resource)
        """
        resource = self.lookup_resource(target_env, resource_name)
        plan = self.plan_for_machine(target_env, resource.server)
        forward = build_forward(resource, local_port)
        logger.info("forwarding %s for resource %s", forward.spec, resource_name)
        return plan, forward, resource
