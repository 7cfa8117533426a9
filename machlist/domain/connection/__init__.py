"""
Connection domain module
"""
from .models import Command, ConnectionPlan, PortForward, ResolvedServer
from .lookup import resolve_server, resolve_resource
from .planner import build_plan, build_plan_for, build_forward, known_hosts_file, user_host
from .commands import (
    verbosity_flags,
    shell_command,
    copy_from_command,
    copy_to_command,
    tunnel_command,
)
from .service import ConnectionService

__all__ = [
    "Command",
    "ConnectionPlan",
    "PortForward",
    "ResolvedServer",
    "resolve_server",
    "resolve_resource",
    "build_plan",
    "build_plan_for",
    "build_forward",
    "known_hosts_file",
    "user_host",
    "verbosity_flags",
    "shell_command",
    "copy_from_command",
    "copy_to_command",
    "tunnel_command",
    "ConnectionService",
]
