"""
Operating system implementations of the core capability interfaces
"""
import os
import subprocess
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from ..core.exceptions import ExecutionError, HomeDirectoryError
from ..core.interfaces import ProcessRunner, SystemEnvironment
from ..core.logging import get_logger

logger = get_logger(__name__)


class OsEnvironment(SystemEnvironment):
    """Reads the real process environment"""
    
    def home_dir(self) -> Path:
        try:
            return Path.home()
        except RuntimeError as e:
            raise HomeDirectoryError(f"Cannot determine home directory: {e}") from e
    
    def getenv(self, name: str) -> Optional[str]:
        return os.environ.get(name)
    
    def cwd(self) -> Path:
        return Path.cwd()


class OsProcessRunner(ProcessRunner):
    """Launches real ssh/scp processes"""
    
    def exec(self, program: str, args: Sequence[str]) -> NoReturn:
        """
        Replace the current process with program.
        
        Raises:
            ExecutionError: If the program cannot be executed
        """
        logger.debug("exec %s %s", program, " ".join(args))
        try:
            os.execvp(program, [program, *args])
        except OSError as e:
            raise ExecutionError(f"Failed to execute {program}: {e}") from e
    
    def spawn(self, program: str, args: Sequence[str]) -> int:
        """
        Run program and wait for it.
        
        Returns:
            Exit status of the child
        
        Raises:
            ExecutionError: If the program cannot be started
        """
        logger.debug("spawn %s %s", program, " ".join(args))
        try:
            result = subprocess.run([program, *args])
        except OSError as e:
            raise ExecutionError(f"Failed to execute {program}: {e}") from e
        return result.returncode
