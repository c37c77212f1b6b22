"""Pytest fixtures shared by the extbuild test suite."""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest

from extbuild.build import BuildContext, ToolchainIdentity
from extbuild.build.build_profiles import BuildProfile, get_profile
from extbuild.config import ProjectConfig
from extbuild.packages import HostRuntimeInfo, PackageFlags


class RecordingRunner:
    """Command runner that records invocations instead of spawning processes.

    On success it creates the file named after "-o", the way a compiler or
    linker would, so mtime-based staleness behaves as in a real build.
    """

    def __init__(self, fail_when: Optional[Callable[[List[str]], bool]] = None):
        self.commands: List[List[str]] = []
        self.fail_when = fail_when

    def run(self, argv: Sequence[str]) -> bool:
        argv = list(argv)
        self.commands.append(argv)
        if self.fail_when is not None and self.fail_when(argv):
            return False
        if "-o" in argv:
            output = Path(argv[argv.index("-o") + 1])
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_bytes(b"")
        return True

    @property
    def compile_commands(self) -> List[List[str]]:
        return [c for c in self.commands if "-c" in c]

    @property
    def link_commands(self) -> List[List[str]]:
        return [c for c in self.commands if "-c" not in c]


HOST_INFO = HostRuntimeInfo(
    prefix=Path("/opt/host"),
    vernum=80203,
    includes="-I/opt/host/include/php -I/opt/host/include/php/main",
    ldflags="-L/opt/host/lib/extra",
    extension_dir=Path("/opt/host/lib/extensions"),
)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_project(tmp_path) -> Callable[..., Path]:
    """Create a project directory with a descriptor and source files."""

    def _make(
        descriptor: Optional[Dict[str, Any]] = None,
        sources: Optional[Dict[str, str]] = None,
        config_name: str = "project.json",
    ) -> Path:
        project = tmp_path / "project"
        (project / "src").mkdir(parents=True, exist_ok=True)
        if descriptor is None:
            descriptor = {"project": {"name": "hello", "type": "binary"}}
        (project / config_name).write_text(json.dumps(descriptor))
        for name, content in (sources or {}).items():
            path = project / "src" / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return project

    return _make


@pytest.fixture
def make_context() -> Callable[..., BuildContext]:
    """Build a BuildContext for a project without probing the real host."""

    def _make(
        project_dir: Path,
        debug: bool = False,
        host_os: str = "Linux",
        vernum: int = HOST_INFO.vernum,
        env: Optional[Dict[str, str]] = None,
        packages: Sequence[PackageFlags] = (),
        verbose: bool = False,
    ) -> BuildContext:
        info = HostRuntimeInfo(
            prefix=HOST_INFO.prefix,
            vernum=vernum,
            includes=HOST_INFO.includes,
            ldflags=HOST_INFO.ldflags,
            extension_dir=HOST_INFO.extension_dir,
        )
        profile = BuildProfile.from_debug(debug)
        return BuildContext(
            project_dir=project_dir,
            config=ProjectConfig.load(project_dir),
            toolchain=ToolchainIdentity.from_host_info(info, env or {}, host_os=host_os),
            profile=profile,
            profile_flags=get_profile(profile),
            packages=tuple(packages),
            verbose=verbose,
        )

    return _make


@pytest.fixture
def make_runner() -> Callable[..., RecordingRunner]:
    return RecordingRunner
