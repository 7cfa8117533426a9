"""
Shared CLI state and error reporting
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.markup import escape

from ...core.exceptions import MachlistError
from ...core.interfaces import ProcessRunner, SystemEnvironment
from ...core.logging import get_logger, get_stderr_console, setup_logging, verbosity_to_level
from ...domain.connection import ConnectionService
from ...domain.inventory import Inventory
from ...infrastructure import OsEnvironment, OsProcessRunner
from ..config.loader import InventoryLoader

logger = get_logger(__name__)
stderr_console = get_stderr_console()


@dataclass
class CliState:
    """
    Per-invocation state carried on the click context object.
    
    Tests pass a CliState with fake capabilities through
    CliRunner.invoke(..., obj=...).
    """
    environment: SystemEnvironment = field(default_factory=OsEnvironment)
    runner: ProcessRunner = field(default_factory=OsProcessRunner)
    verbose: int = 0
    resource_file: Optional[Path] = None
    log_level: Optional[str] = None
    log_file: Optional[Path] = None
    
    @property
    def loader(self) -> InventoryLoader:
        return InventoryLoader(self.environment)
    
    def load_inventory(self) -> Inventory:
        return self.loader.load(self.resource_file)
    
    def target(self, target: Optional[str]) -> str:
        return self.loader.target_environment(target)
    
    def connection_service(self) -> ConnectionService:
        return ConnectionService(self.load_inventory(), self.environment)


def get_state(
    ctx: typer.Context,
    verbose: int = 0,
    resources: Optional[Path] = None,
) -> CliState:
    """
    Fetch the invocation state, merging subcommand level -v/-r.
    
    -v counts given before and after the subcommand add up; a -r given
    after the subcommand wins over one given before it.
    """
    state = ctx.ensure_object(CliState)
    if resources is not None:
        state.resource_file = resources
    if verbose:
        state.verbose += verbose
        setup_logging(
            level=state.log_level or verbosity_to_level(state.verbose),
            log_file=state.log_file,
        )
    return state


def fail(error: MachlistError) -> NoReturn:
    """Report a domain error and exit non-zero"""
    logger.debug("command failed", exc_info=error)
    stderr_console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)


def crash(error: Exception, what: str) -> NoReturn:
    """Report an unexpected error with traceback and exit non-zero"""
    logger.exception("Failed to %s", what)
    stderr_console.print(f"[red]Error:[/red] Failed to {what}: {escape(str(error))}")
    raise typer.Exit(1)


# Options repeated on every subcommand so -v/-r may follow the command name
VERBOSE_OPTION = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity, also passed to ssh/scp (repeat to increase)",
)
RESOURCES_OPTION = typer.Option(
    None,
    "--resources",
    "-r",
    help="TOML resource file to use",
)
