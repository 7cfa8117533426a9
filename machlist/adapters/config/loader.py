"""
Inventory loader with priority: CLI > env > ./machlist-resources.toml > ~/.machlist/resources.toml
"""
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional, List

from ...core.constants import (
    DEFAULT_TARGET_ENV,
    ENV_RESOURCE_FILE,
    ENV_TARGET,
    LOCAL_RESOURCE_FILE,
    USER_RESOURCE_DIR,
    USER_RESOURCE_FILE,
)
from ...core.exceptions import ConfigError, ConfigNotFoundError, ConfigParseError
from ...core.interfaces import SystemEnvironment
from ...core.logging import get_logger
from ...domain.inventory import Inventory

logger = get_logger(__name__)


class InventoryLoader:
    """Locates and parses the TOML resource file"""
    
    def __init__(self, environment: SystemEnvironment):
        self.environment = environment
    
    def load_env(self) -> Dict[str, Any]:
        """Load overrides from MACHLIST_* environment variables"""
        config = {}
        env_mappings = {
            ENV_RESOURCE_FILE: "resources",
            ENV_TARGET: "target",
        }
        for env_key, config_key in env_mappings.items():
            value = self.environment.getenv(env_key)
            if value:
                config[config_key] = value
        return config
    
    def default_paths(self) -> List[Path]:
        """Fallback chain used when no path is given"""
        return [
            self.environment.cwd() / LOCAL_RESOURCE_FILE,
            self.environment.home_dir() / USER_RESOURCE_DIR / USER_RESOURCE_FILE,
        ]
    
    def locate(self, path: Optional[Path] = None) -> Path:
        """
        Find the resource file to use.
        
        An explicit path (argument or MACHLIST_RESOURCES) is used as-is,
        otherwise the first existing default path wins.
        
        Raises:
            ConfigNotFoundError: If no candidate exists
        """
        env_config = self.load_env()
        if path is None and "resources" in env_config:
            path = Path(env_config["resources"])
        
        if path is not None:
            path = path.expanduser()
            if not path.is_absolute():
                path = self.environment.cwd() / path
            if not path.is_file():
                raise ConfigNotFoundError([path])
            return path
        
        candidates = self.default_paths()
        for candidate in candidates:
            if candidate.is_file():
                return candidate
        raise ConfigNotFoundError(candidates)
    
    def load_toml(self, path: Path) -> Dict[str, Any]:
        """
        Read and parse a TOML file.
        
        Raises:
            ConfigParseError: If the file cannot be read or is not valid TOML
        """
        try:
            return tomllib.loads(path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            raise ConfigParseError(path, e) from e
    
    def load(self, path: Optional[Path] = None) -> Inventory:
        """
        Locate, parse and validate the inventory.
        
        Args:
            path: Explicit resource file, or None for the fallback chain
        
        Returns:
            Inventory
        
        Raises:
            ConfigNotFoundError: If no resource file exists
            ConfigParseError: If the file is malformed or misses required fields
        """
        resolved = self.locate(path)
        logger.info("loading resources from %s", resolved)
        data = self.load_toml(resolved)
        try:
            inventory = Inventory.from_dict(data)
        except ConfigError as e:
            raise ConfigParseError(resolved, e) from e
        logger.debug(
            "loaded %d environment(s): %s",
            len(inventory.servers),
            ", ".join(inventory.list_environment_names()),
        )
        return inventory
    
    def target_environment(self, target: Optional[str] = None) -> str:
        """Target environment with priority: explicit > MACHLIST_TARGET > default"""
        if target:
            return target
        return self.load_env().get("target", DEFAULT_TARGET_ENV)
