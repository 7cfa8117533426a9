"""
Shared test fixtures and configuration.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from machlist.core.interfaces import ProcessRunner, SystemEnvironment


SAMPLE_RESOURCES = """\
username = "env:SSH_USER"

[server.alpha.bastion]
ip = "10.0.0.1"
proxy = true

[server.alpha.db]
ip = "10.0.0.5"
name = "db.internal"
jump = "bastion"

[server.alpha.web]
name = "web.internal"

[server.alpha.dangling]
ip = "10.0.0.7"
jump = "missing"

[server.alpha.named-jump]
name = "jump.internal"
proxy = true

[server.alpha.behind-named]
ip = "10.0.0.9"
jump = "named-jump"

[server.alpha.ghost]

[server.prod.db]
ip = "10.1.0.5"

[resource.alpha.postgres]
server = "db"
at = "127.0.0.1"
port = 5432

[resource.alpha.orphan]
server = "nowhere"
at = "10.0.0.50"
port = 8080
"""


# ═══════════════════════════════════════════════════════════════════════
#  Fakes
# ═══════════════════════════════════════════════════════════════════════


class FakeEnvironment(SystemEnvironment):
    """In-memory process environment."""

    def __init__(self, home: Path, cwd: Path, variables: Optional[Dict[str, str]] = None):
        self._home = home
        self._cwd = cwd
        self.variables = dict(variables or {})

    def home_dir(self) -> Path:
        return self._home

    def getenv(self, name: str) -> Optional[str]:
        return self.variables.get(name)

    def cwd(self) -> Path:
        return self._cwd


class RecordingRunner(ProcessRunner):
    """Records launches instead of running anything."""

    def __init__(self, spawn_code: int = 0):
        self.calls: List[Tuple[str, str, List[str]]] = []
        self.spawn_code = spawn_code

    def exec(self, program: str, args: Sequence[str]) -> None:
        self.calls.append(("exec", program, list(args)))

    def spawn(self, program: str, args: Sequence[str]) -> int:
        self.calls.append(("spawn", program, list(args)))
        return self.spawn_code


# ═══════════════════════════════════════════════════════════════════════
#  Fixtures
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    work = tmp_path / "work"
    work.mkdir()
    return work


@pytest.fixture
def fake_env(home_dir: Path, work_dir: Path) -> FakeEnvironment:
    return FakeEnvironment(home_dir, work_dir, {"SSH_USER": "bob"})


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def write_resources():
    """Return a helper writing TOML text to a path."""

    def _write(path: Path, text: str = SAMPLE_RESOURCES) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def resources_file(work_dir: Path, write_resources) -> Path:
    """Sample inventory at ./machlist-resources.toml."""
    return write_resources(work_dir / "machlist-resources.toml")
