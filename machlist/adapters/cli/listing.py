"""
List CLI command
"""
import typer
from pathlib import Path
from typing import Optional

from rich.table import Table

from ...core.exceptions import MachlistError
from ...core.logging import get_logger, get_stdout_console, get_stderr_console
from ...domain.inventory import EnvironmentServers
from .context import RESOURCES_OPTION, VERBOSE_OPTION, crash, fail, get_state

logger = get_logger(__name__)
stdout_console = get_stdout_console()
stderr_console = get_stderr_console()


def register_list_command(app: typer.Typer) -> None:
    """Register list command on the main app"""
    app.command(name="list")(list_resources)


def _servers_table(env_servers: EnvironmentServers, include_proxies: bool) -> Table:
    table = Table(
        title=f"Machines: {env_servers.environment}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Machine", style="cyan")
    table.add_column("IP", style="green")
    table.add_column("Name", style="green")
    table.add_column("Jump", style="yellow")
    table.add_column("Proxy", style="dim")
    
    for machine_name in env_servers.list_servers(include_proxies=include_proxies):
        entry = env_servers.get_machine(machine_name)
        table.add_row(
            machine_name,
            entry.ip or "-",
            entry.name or "-",
            entry.jump or "-",
            "yes" if entry.proxy else "",
        )
    return table


def list_resources(
    ctx: typer.Context,
    target: Optional[str] = typer.Option(
        None, "--target", "-t", help="Target environment, omit to list environments"
    ),
    include_proxies: bool = typer.Option(
        False, "--all", "-a", help="Include proxy (jump only) machines"
    ),
    details: bool = typer.Option(
        False, "--details", "-d", help="Show addresses and jump hosts"
    ),
    verbose: int = VERBOSE_OPTION,
    resources: Optional[Path] = RESOURCES_OPTION,
):
    """
    List environments, or machines of an environment
    
    Examples:
        machlist list
        machlist list -t prod
        machlist list -t prod --all --details
    """
    state = get_state(ctx, verbose, resources)
    try:
        inventory = state.load_inventory()
        
        if target is None:
            stderr_console.print("listing all target environments", markup=False, highlight=False)
            for env_name in inventory.list_environments():
                stdout_console.print(env_name, markup=False, highlight=False)
            return
        
        env_servers = inventory.get_environment_servers(target)
        if details:
            stdout_console.print(_servers_table(env_servers, include_proxies))
            return
        
        for machine_name in env_servers.list_servers(include_proxies=include_proxies):
            stdout_console.print(machine_name, markup=False, highlight=False)
    except MachlistError as e:
        fail(e)
    except Exception as e:
        crash(e, "list resources")
