"""
Unified exception definitions
"""
from pathlib import Path
from typing import Sequence


class MachlistError(Exception):
    """Base exception class"""
    pass


# ============================================================
# Configuration
# ============================================================

class ConfigError(MachlistError):
    """Configuration error"""
    pass


class ConfigNotFoundError(ConfigError):
    """No inventory file could be located"""

    def __init__(self, searched: Sequence[Path]):
        self.searched = list(searched)
        paths = ", ".join(str(p) for p in self.searched)
        super().__init__(f"Resource file not found (searched: {paths})")


class ConfigParseError(ConfigError):
    """Inventory file exists but could not be parsed or validated"""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to parse resource file {path}: {cause}")


# ============================================================
# Lookups
# ============================================================

class LookupFailure(MachlistError):
    """A named entry is missing from the inventory"""

    kind = "entry"

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class EnvironmentNotFoundError(LookupFailure):
    kind = "environment"

    def __init__(self, name: str, section: str = "servers"):
        self.section = section
        super().__init__(name, f"cannot find target environment '{name}' in {section}")


class MachineNotFoundError(LookupFailure):
    kind = "machine"

    def __init__(self, name: str, environment: str):
        self.environment = environment
        super().__init__(name, f"cannot find machine '{name}' in environment '{environment}'")


class JumpTargetNotFoundError(LookupFailure):
    kind = "jump machine"

    def __init__(self, name: str, machine: str):
        self.machine = machine
        super().__init__(name, f"cannot find jump machine '{name}' referenced by '{machine}'")


class ResourceNotFoundError(LookupFailure):
    kind = "resource"

    def __init__(self, name: str, environment: str):
        self.environment = environment
        super().__init__(name, f"cannot find resource '{name}' in environment '{environment}'")


# ============================================================
# Resolution
# ============================================================

class ResolutionError(MachlistError):
    """Inventory entries found but not usable as connection parameters"""
    pass


class JumpMissingIpError(ResolutionError):

    def __init__(self, jump: str):
        self.jump = jump
        super().__init__(f"jump machine '{jump}' has no ip")


class DestinationMissingError(ResolutionError):

    def __init__(self, machine: str):
        self.machine = machine
        super().__init__(f"machine '{machine}' has neither ip nor name")


class EnvVarMissingError(MachlistError):
    """Username directive references an unset environment variable"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot find environment variable {name} (unset or empty)")


# ============================================================
# System
# ============================================================

class HomeDirectoryError(MachlistError):
    """Home directory cannot be resolved"""
    pass


class ExecutionError(MachlistError):
    """External ssh/scp process could not be started"""
    pass
