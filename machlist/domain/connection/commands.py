"""
ssh / scp command assembly
"""
from typing import List

from ...core.constants import (
    DEFAULT_COPY_DESTINATION,
    MAX_SSH_VERBOSITY,
    SCP_PROGRAM,
    SSH_PROGRAM,
)
from .models import Command, ConnectionPlan, PortForward


def verbosity_flags(verbose: int) -> List[str]:
    """-v, -vv or -vvv for the external client"""
    if verbose <= 0:
        return []
    return ["-" + "v" * min(verbose, MAX_SSH_VERBOSITY)]


def shell_command(plan: ConnectionPlan, verbose: int = 0) -> Command:
    """ssh [-v] <plan args> dest"""
    return Command(
        SSH_PROGRAM,
        [*verbosity_flags(verbose), *plan.args, plan.destination],
    )


def copy_from_command(
    plan: ConnectionPlan,
    remote_path: str,
    local_path: str = DEFAULT_COPY_DESTINATION,
    verbose: int = 0,
) -> Command:
    """scp [-v] <plan args> dest:remote_path local_path"""
    return Command(
        SCP_PROGRAM,
        [*verbosity_flags(verbose), *plan.args, plan.remote(remote_path), local_path],
    )


def copy_to_command(
    plan: ConnectionPlan,
    local_path: str,
    remote_path: str = "",
    verbose: int = 0,
) -> Command:
    """scp [-v] <plan args> local_path dest:remote_path"""
    return Command(
        SCP_PROGRAM,
        [*verbosity_flags(verbose), *plan.args, local_path, plan.remote(remote_path)],
    )


def tunnel_command(plan: ConnectionPlan, forward: PortForward, verbose: int = 0) -> Command:
    """ssh [-v] <plan args> -N -L local:at:port dest"""
    return Command(
        SSH_PROGRAM,
        [
            *verbosity_flags(verbose),
            *plan.args,
            "-N",
            "-L",
            forward.spec,
            plan.destination,
        ],
    )
