"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import NoReturn, Optional, Sequence


class SystemEnvironment(ABC):
    """Process environment capability: home directory, env vars, cwd"""
    
    @abstractmethod
    def home_dir(self) -> Path:
        """Return the user's home directory"""
        pass
    
    @abstractmethod
    def getenv(self, name: str) -> Optional[str]:
        """Read an environment variable, None if unset"""
        pass
    
    @abstractmethod
    def cwd(self) -> Path:
        """Return the current working directory"""
        pass


class ProcessRunner(ABC):
    """External process launcher"""
    
    @abstractmethod
    def exec(self, program: str, args: Sequence[str]) -> NoReturn:
        """Replace the current process image with program"""
        pass
    
    @abstractmethod
    def spawn(self, program: str, args: Sequence[str]) -> int:
        """Run program as a child, wait, and return its exit status"""
        pass
