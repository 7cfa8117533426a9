"""
Main CLI application
"""
import typer
from pathlib import Path
from typing import Optional

from ...core.logging import setup_logging, verbosity_to_level, get_logger
from .connect import register_connect_commands
from .context import get_state
from .listing import register_list_command

logger = get_logger(__name__)

app = typer.Typer(
    name="machlist",
    add_completion=False,
    help="SSH shortcut manager for environments and machines",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

register_connect_commands(app)
register_list_command(app)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity, also passed to ssh/scp (repeat to increase)",
    ),
    resources: Optional[Path] = typer.Option(
        None,
        "--resources",
        "-r",
        help="TOML resource file to use",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
):
    """
    machlist - SSH shortcut manager
    
    Resolves (environment, machine) pairs from a TOML inventory into
    ssh/scp invocations:
    - shell/ssh: Open a shell on a machine
    - copy-from/copy-to: Copy files with scp
    - tunnel: Forward a local port to a resource
    - list: List environments or machines
    """
    setup_logging(level=log_level or verbosity_to_level(verbose), log_file=log_file)
    
    state = get_state(ctx)
    state.verbose = verbose
    state.resource_file = resources
    state.log_level = log_level
    state.log_file = log_file


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
