"""
Connection CLI commands: shell, copy-from, copy-to, tunnel
"""
import typer
from pathlib import Path
from typing import Optional

from ...core.constants import DEFAULT_COPY_DESTINATION, DEFAULT_TARGET_ENV, ENV_TARGET, MIN_PORT, MAX_PORT
from ...core.exceptions import MachlistError
from ...core.logging import get_logger, get_stdout_console
from ...domain.connection import (
    Command,
    copy_from_command,
    copy_to_command,
    shell_command,
    tunnel_command,
)
from .context import RESOURCES_OPTION, VERBOSE_OPTION, CliState, crash, fail, get_state

logger = get_logger(__name__)
stdout_console = get_stdout_console()

TARGET_HELP = f"Target environment (alpha, prod, ..), default: ${ENV_TARGET} or {DEFAULT_TARGET_ENV}"


def register_connect_commands(app: typer.Typer) -> None:
    """Register connection commands on the main app"""
    app.command(name="shell")(shell)
    app.command(name="ssh", help="Alias of shell")(shell)
    app.command(name="copy-from")(copy_from)
    app.command(name="copy-to")(copy_to)
    app.command(name="tunnel")(tunnel)


def _notice(message: str) -> None:
    stdout_console.print(message, markup=False, highlight=False)


def _exec(state: CliState, command: Command) -> None:
    logger.info("running %s", command)
    state.runner.exec(command.program, command.args)


def _spawn(state: CliState, command: Command) -> int:
    logger.info("running %s", command)
    return state.runner.spawn(command.program, command.args)


def exit_status(code: int) -> int:
    """Shell-style status for a child result, 128 + N when killed by signal N"""
    if code < 0:
        return 128 - code
    return code


def shell(
    ctx: typer.Context,
    machine: str = typer.Argument(..., help="Machine destination"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help=TARGET_HELP),
    verbose: int = VERBOSE_OPTION,
    resources: Optional[Path] = RESOURCES_OPTION,
):
    """
    Shell on a given machine
    
    Examples:
        machlist shell db
        machlist shell -t prod web1
    """
    state = get_state(ctx, verbose, resources)
    try:
        target_env = state.target(target)
        plan = state.connection_service().plan_for_machine(target_env, machine)
        command = shell_command(plan, state.verbose)
        _notice(f"connecting target environment={target_env} dest={machine}")
        _exec(state, command)
    except MachlistError as e:
        fail(e)
    except Exception as e:
        crash(e, "open shell")


def copy_from(
    ctx: typer.Context,
    machine: str = typer.Argument(..., help="Machine destination"),
    remote_path: str = typer.Argument(..., help="Remote path to copy"),
    local_path: str = typer.Argument(DEFAULT_COPY_DESTINATION, help="Local destination"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help=TARGET_HELP),
    verbose: int = VERBOSE_OPTION,
    resources: Optional[Path] = RESOURCES_OPTION,
):
    """
    Copy a file from a given machine
    
    Examples:
        machlist copy-from db /var/log/syslog
        machlist copy-from -t prod web1 /etc/nginx/nginx.conf ./nginx.conf
    """
    state = get_state(ctx, verbose, resources)
    try:
        target_env = state.target(target)
        plan = state.connection_service().plan_for_machine(target_env, machine)
        command = copy_from_command(plan, remote_path, local_path, state.verbose)
        _notice(f"connecting target environment={target_env} dest={machine}")
        code = _spawn(state, command)
    except MachlistError as e:
        fail(e)
    except Exception as e:
        crash(e, "copy from remote")
    
    if code != 0:
        raise typer.Exit(exit_status(code))


def copy_to(
    ctx: typer.Context,
    machine: str = typer.Argument(..., help="Machine destination"),
    local_path: str = typer.Argument(..., help="Local path to copy"),
    remote_path: str = typer.Argument("", help="Remote destination (default: remote home)"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help=TARGET_HELP),
    verbose: int = VERBOSE_OPTION,
    resources: Optional[Path] = RESOURCES_OPTION,
):
    """
    Copy a file to a given machine
    
    Examples:
        machlist copy-to db ./dump.sql
        machlist copy-to -t prod web1 ./app.tar.gz /tmp/
    """
    state = get_state(ctx, verbose, resources)
    try:
        target_env = state.target(target)
        plan = state.connection_service().plan_for_machine(target_env, machine)
        command = copy_to_command(plan, local_path, remote_path, state.verbose)
        _notice(f"connecting target environment={target_env} dest={machine}")
        code = _spawn(state, command)
    except MachlistError as e:
        fail(e)
    except Exception as e:
        crash(e, "copy to remote")
    
    if code != 0:
        raise typer.Exit(exit_status(code))


def tunnel(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource to forward"),
    local_port: Optional[int] = typer.Argument(
        None,
        min=MIN_PORT,
        max=MAX_PORT,
        help="Local port to bind (default: the resource port)",
    ),
    target: Optional[str] = typer.Option(None, "--target", "-t", help=TARGET_HELP),
    verbose: int = VERBOSE_OPTION,
    resources: Optional[Path] = RESOURCES_OPTION,
):
    """
    Make a tunnel to a resource
    
    Examples:
        machlist tunnel postgres
        machlist tunnel -t prod postgres 15432
    """
    state = get_state(ctx, verbose, resources)
    try:
        target_env = state.target(target)
        service = state.connection_service()
        plan, forward, entry = service.plan_for_resource(target_env, resource, local_port)
        command = tunnel_command(plan, forward, state.verbose)
        _notice(
            f"tunneling to target environment={target_env} resource={resource} "
            f"via {entry.server} at port {forward.local_port}"
        )
        _exec(state, command)
    except MachlistError as e:
        fail(e)
    except Exception as e:
        crash(e, "open tunnel")
