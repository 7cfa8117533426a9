"""
Tests for server lookup, plan building, command assembly and the service.
"""

import tomllib
from pathlib import Path

import pytest

from conftest import SAMPLE_RESOURCES, FakeEnvironment
from machlist.core.exceptions import (
    DestinationMissingError,
    EnvironmentNotFoundError,
    EnvVarMissingError,
    JumpMissingIpError,
    JumpTargetNotFoundError,
    MachineNotFoundError,
    ResourceNotFoundError,
)
from machlist.domain.connection import (
    ConnectionPlan,
    ConnectionService,
    build_forward,
    build_plan,
    copy_from_command,
    copy_to_command,
    resolve_resource,
    resolve_server,
    shell_command,
    tunnel_command,
    verbosity_flags,
)
from machlist.domain.inventory import EnvironmentServers, Inventory, ResourceEntry, ServerEntry

SSH_DIR = Path("/home/test/.ssh")
KNOWN_HOSTS_ALPHA = "-oUserKnownHostsFile=/home/test/.ssh/known_hosts_machlist_alpha"


@pytest.fixture
def inventory() -> Inventory:
    return Inventory.from_dict(tomllib.loads(SAMPLE_RESOURCES))


@pytest.fixture
def alpha(inventory) -> EnvironmentServers:
    return inventory.get_environment_servers("alpha")


# ═══════════════════════════════════════════════════════════════════════
#  Server Lookup
# ═══════════════════════════════════════════════════════════════════════


class TestResolveServer:
    def test_plain_machine(self, alpha):
        resolved = resolve_server(alpha, "web")
        assert resolved.entry is alpha.machines["web"]
        assert resolved.jump is None
        assert resolved.jump_machine is None

    def test_machine_with_jump(self, alpha):
        resolved = resolve_server(alpha, "db")
        assert resolved.jump is alpha.machines["bastion"]
        assert resolved.jump_machine == "bastion"

    def test_unknown_machine(self, alpha):
        with pytest.raises(MachineNotFoundError):
            resolve_server(alpha, "nope")

    def test_jump_target_missing(self, alpha):
        with pytest.raises(JumpTargetNotFoundError) as exc:
            resolve_server(alpha, "dangling")
        assert exc.value.name == "missing"
        assert exc.value.kind == "jump machine"

    def test_jump_without_ip(self, alpha):
        with pytest.raises(JumpMissingIpError) as exc:
            resolve_server(alpha, "behind-named")
        assert exc.value.jump == "named-jump"

    def test_single_level_of_jump(self):
        env = EnvironmentServers.from_dict("alpha", {
            "outer": {"ip": "10.0.0.1"},
            "inner": {"ip": "10.0.0.2", "jump": "outer"},
            "target": {"ip": "10.0.0.3", "jump": "inner"},
        })
        resolved = resolve_server(env, "target")
        assert resolved.jump_machine == "inner"

    def test_nested_jump_is_not_dereferenced(self):
        env = EnvironmentServers.from_dict("alpha", {
            "inner": {"ip": "10.0.0.2", "jump": "does-not-exist"},
            "target": {"ip": "10.0.0.3", "jump": "inner"},
        })
        assert resolve_server(env, "target").jump.ip == "10.0.0.2"


class TestResolveResource:
    def test_found(self, inventory):
        entry = resolve_resource(inventory.get_environment_resources("alpha"), "postgres")
        assert entry.port == 5432

    def test_missing(self, inventory):
        with pytest.raises(ResourceNotFoundError) as exc:
            resolve_resource(inventory.get_environment_resources("alpha"), "redis")
        assert exc.value.environment == "alpha"


# ═══════════════════════════════════════════════════════════════════════
#  Plan Builder
# ═══════════════════════════════════════════════════════════════════════


class TestBuildPlan:
    def test_known_hosts_only(self):
        plan = build_plan(None, "alpha", ServerEntry(ip="10.0.0.5"), None, SSH_DIR)
        assert plan == ConnectionPlan(args=[KNOWN_HOSTS_ALPHA], destination="10.0.0.5")

    def test_known_hosts_per_environment(self):
        plan = build_plan(None, "prod", ServerEntry(ip="10.0.0.5"), None, SSH_DIR)
        assert plan.args == ["-oUserKnownHostsFile=/home/test/.ssh/known_hosts_machlist_prod"]

    def test_username_prefixes_destination(self):
        plan = build_plan("bob", "alpha", ServerEntry(name="host"), None, SSH_DIR)
        assert plan.destination == "bob@host"

    def test_ip_preferred_over_name(self):
        plan = build_plan(None, "alpha", ServerEntry(ip="1.2.3.4", name="host"), None, SSH_DIR)
        assert plan.destination == "1.2.3.4"

    def test_destination_missing(self):
        with pytest.raises(DestinationMissingError) as exc:
            build_plan("bob", "alpha", ServerEntry(), None, SSH_DIR, machine_name="ghost")
        assert exc.value.machine == "ghost"

    def test_jump_uses_ip_with_user(self):
        jump = ServerEntry(ip="10.0.0.1", name="bastion.internal")
        plan = build_plan("bob", "alpha", ServerEntry(ip="10.0.0.5"), jump, SSH_DIR)
        assert plan.args == [KNOWN_HOSTS_ALPHA, "-J", "bob@10.0.0.1"]
        assert plan.destination == "bob@10.0.0.5"

    def test_jump_without_user(self):
        jump = ServerEntry(ip="10.0.0.1")
        plan = build_plan(None, "alpha", ServerEntry(ip="10.0.0.5"), jump, SSH_DIR)
        assert plan.args[1:] == ["-J", "10.0.0.1"]

    def test_jump_never_falls_back_to_name(self):
        jump = ServerEntry(name="bastion.internal")
        with pytest.raises(JumpMissingIpError):
            build_plan("bob", "alpha", ServerEntry(ip="10.0.0.5"), jump, SSH_DIR, jump_name="bastion")


class TestBuildForward:
    def test_defaults_local_port(self):
        forward = build_forward(ResourceEntry(server="db", at="127.0.0.1", port=5432))
        assert forward.spec == "5432:127.0.0.1:5432"

    def test_explicit_local_port(self):
        forward = build_forward(ResourceEntry(server="db", at="127.0.0.1", port=5432), 9999)
        assert forward.spec == "9999:127.0.0.1:5432"


# ═══════════════════════════════════════════════════════════════════════
#  Commands
# ═══════════════════════════════════════════════════════════════════════


PLAN = ConnectionPlan(args=[KNOWN_HOSTS_ALPHA, "-J", "bob@10.0.0.1"], destination="bob@10.0.0.5")


class TestCommands:
    @pytest.mark.parametrize("verbose,expected", [(0, []), (1, ["-v"]), (2, ["-vv"]), (7, ["-vvv"])])
    def test_verbosity_flags(self, verbose, expected):
        assert verbosity_flags(verbose) == expected

    def test_shell(self):
        command = shell_command(PLAN, verbose=1)
        assert command.argv == ["ssh", "-v", KNOWN_HOSTS_ALPHA, "-J", "bob@10.0.0.1", "bob@10.0.0.5"]

    def test_copy_from(self):
        command = copy_from_command(PLAN, "/var/log/syslog")
        assert command.argv == [
            "scp", KNOWN_HOSTS_ALPHA, "-J", "bob@10.0.0.1", "bob@10.0.0.5:/var/log/syslog", "./",
        ]

    def test_copy_to_default_remote(self):
        command = copy_to_command(PLAN, "dump.sql")
        assert command.argv[-2:] == ["dump.sql", "bob@10.0.0.5:"]

    def test_copy_to_remote_path(self):
        command = copy_to_command(PLAN, "dump.sql", "/tmp/")
        assert command.argv[-1] == "bob@10.0.0.5:/tmp/"

    def test_tunnel(self):
        forward = build_forward(ResourceEntry(server="db", at="127.0.0.1", port=5432))
        command = tunnel_command(PLAN, forward)
        assert command.argv == [
            "ssh", KNOWN_HOSTS_ALPHA, "-J", "bob@10.0.0.1",
            "-N", "-L", "5432:127.0.0.1:5432", "bob@10.0.0.5",
        ]

    def test_str_is_shell_quoted(self):
        command = copy_from_command(ConnectionPlan(args=[], destination="h"), "my file")
        assert str(command) == "scp 'h:my file' ./"


# ═══════════════════════════════════════════════════════════════════════
#  Service
# ═══════════════════════════════════════════════════════════════════════


class TestConnectionService:
    @pytest.fixture
    def env(self):
        return FakeEnvironment(Path("/home/test"), Path("/work"), {"SSH_USER": "bob"})

    def test_username_resolved_on_creation(self, inventory, env):
        env.variables.clear()
        with pytest.raises(EnvVarMissingError):
            ConnectionService(inventory, env)

    def test_plan_for_machine(self, inventory, env):
        plan = ConnectionService(inventory, env).plan_for_machine("alpha", "db")
        assert plan.args == [KNOWN_HOSTS_ALPHA, "-J", "bob@10.0.0.1"]
        assert plan.destination == "bob@10.0.0.5"

    def test_plan_for_unknown_environment(self, inventory, env):
        with pytest.raises(EnvironmentNotFoundError):
            ConnectionService(inventory, env).plan_for_machine("staging", "db")

    def test_plan_for_machine_without_address(self, inventory, env):
        with pytest.raises(DestinationMissingError):
            ConnectionService(inventory, env).plan_for_machine("alpha", "ghost")

    def test_plan_for_resource(self, inventory, env):
        service = ConnectionService(inventory, env)
        plan, forward, resource = service.plan_for_resource("alpha", "postgres")
        assert plan.destination == "bob@10.0.0.5"
        assert forward.spec == "5432:127.0.0.1:5432"
        assert resource.server == "db"

    def test_plan_for_resource_local_port(self, inventory, env):
        _, forward, _ = ConnectionService(inventory, env).plan_for_resource("alpha", "postgres", 9999)
        assert forward.spec == "9999:127.0.0.1:5432"

    def test_resource_server_must_exist(self, inventory, env):
        with pytest.raises(MachineNotFoundError):
            ConnectionService(inventory, env).plan_for_resource("alpha", "orphan")
