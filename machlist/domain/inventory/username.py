"""
Username directive resolution
"""
from typing import Optional

from ...core.constants import USERNAME_ENV_PREFIX
from ...core.exceptions import EnvVarMissingError
from ...core.interfaces import SystemEnvironment
from ...core.logging import get_logger
from .models import Inventory

logger = get_logger(__name__)


def resolve_username(inventory: Inventory, environment: SystemEnvironment) -> Optional[str]:
    """
    Turn the inventory's username directive into a login name.
    
    - no directive: None, ssh falls back to the local login name
    - "env:NAME": value of environment variable NAME
    - anything else: used verbatim
    
    Args:
        inventory: Parsed inventory
        environment: Process environment capability
    
    Returns:
        Effective username or None
    
    Raises:
        EnvVarMissingError: If the referenced variable is unset or empty
    """
    directive = inventory.username
    if directive is None:
        return None
    
    if directive.startswith(USERNAME_ENV_PREFIX):
        var_name = directive[len(USERNAME_ENV_PREFIX):]
        value = environment.getenv(var_name)
        if not value:
            raise EnvVarMissingError(var_name)
        logger.debug("username read from $%s", var_name)
        return value
    
    return directive
