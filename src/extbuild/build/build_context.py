"""Build Context - Aggregated build configuration.

This module defines:
- ToolchainIdentity: compiler executables and host runtime values
- BuildContext: everything the compiler, linker and orchestrator need

Design:
    BuildContext.create() is the single place that reads the process
    environment and runs the external probes. The resulting frozen context
    is passed by reference into every component, so no deep logic ever
    consults os.environ or the working directory.

    Commands that only touch the project layout (clean, target) create the
    context with probe_host=False. Such a context has no toolchain and no
    resolved packages, and cannot compile, link or install.
"""

import logging
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..config import ProjectConfig
from ..errors import ConfigError
from ..packages import HostRuntimeInfo, HostRuntimeProbe, PackageFlags, PackageResolver
from ..packages.host_runtime import DEFAULT_HOST_CONFIG
from .build_profiles import BuildProfile, ProfileFlags, get_profile

logger = logging.getLogger(__name__)

DIR_SRC = "src"
DIR_INCLUDE = "include"
DIR_LIBRARY = "lib"
DIR_BIN = "bin"
DIR_BUILD = ".build"

SHARED_EXT = "so"

DEFAULT_CC = "cc"
DEFAULT_CXX = "c++"

ENV_EXTRA_ROOT = "EXTBUILD_DIR"
ENV_HOST_CONFIG = "EXTBUILD_HOST_CONFIG"


@dataclass(frozen=True)
class ToolchainIdentity:
    """Compiler executables and host runtime values for one build.

    Attributes:
        cc: C compiler executable
        cxx: C++ compiler executable (also used for linking)
        host_prefix: Host runtime installation prefix
        host_includes: Host runtime compiler include flags, verbatim
        host_ldflags: Host runtime linker flags, verbatim
        host_vernum: Host runtime numeric version
        extension_dir: Where the host runtime loads extensions from
        host_os: Build host operating system name (platform.system())
        extra_root: Optional extra include/library root
    """

    cc: str
    cxx: str
    host_prefix: Path
    host_includes: str
    host_ldflags: str
    host_vernum: int
    extension_dir: Path
    host_os: str
    extra_root: Optional[Path] = None

    @property
    def host_lib_dir(self) -> Path:
        return self.host_prefix / "lib"

    @property
    def is_darwin(self) -> bool:
        return self.host_os.lower() == "darwin"

    @classmethod
    def from_host_info(
        cls,
        info: HostRuntimeInfo,
        env: Mapping[str, str],
        host_os: Optional[str] = None,
    ) -> "ToolchainIdentity":
        """Combine probed host runtime values with environment overrides."""
        extra_root = env.get(ENV_EXTRA_ROOT)
        return cls(
            cc=env.get("CC") or DEFAULT_CC,
            cxx=env.get("CXX") or DEFAULT_CXX,
            host_prefix=info.prefix,
            host_includes=info.includes,
            host_ldflags=info.ldflags,
            host_vernum=info.vernum,
            extension_dir=info.extension_dir,
            host_os=host_os if host_os is not None else platform.system(),
            extra_root=Path(extra_root) if extra_root else None,
        )

    @classmethod
    def detect(
        cls,
        env: Optional[Mapping[str, str]] = None,
        probe: Optional[HostRuntimeProbe] = None,
    ) -> "ToolchainIdentity":
        """Probe the host runtime and read compiler overrides from the environment."""
        if env is None:
            env = os.environ
        if probe is None:
            probe = HostRuntimeProbe(env.get(ENV_HOST_CONFIG) or DEFAULT_HOST_CONFIG)
        return cls.from_host_info(probe.probe(), env)


@dataclass(frozen=True)
class BuildContext:
    """Full build context, assembled once at startup.

    Attributes:
        project_dir: Project root directory
        config: Loaded project descriptor
        toolchain: Compiler executables and host runtime values (None when not probed)
        profile: Build profile enum value
        profile_flags: Pre-resolved profile flags
        packages: Resolved package flags, in declared order
        verbose: Whether to enable verbose output
    """

    project_dir: Path
    config: ProjectConfig
    toolchain: Optional[ToolchainIdentity]
    profile: BuildProfile
    profile_flags: ProfileFlags
    packages: tuple[PackageFlags, ...]
    verbose: bool = False

    @classmethod
    def create(
        cls,
        project_dir: Path,
        debug: bool = False,
        verbose: bool = False,
        env: Optional[Mapping[str, str]] = None,
        probe: Optional[HostRuntimeProbe] = None,
        resolver: Optional[PackageResolver] = None,
        probe_host: bool = True,
    ) -> "BuildContext":
        """Load the descriptor, probe the host runtime and resolve packages.

        Args:
            probe_host: If False, skip the host runtime probe and package
                resolution; the context then only describes the project layout

        Raises:
            FileSystemError: If the project has no src directory
            ConfigError: If the descriptor, host runtime or a package is unusable
        """
        project_dir = project_dir.resolve()
        config = ProjectConfig.load(project_dir)
        toolchain: Optional[ToolchainIdentity] = None
        packages: tuple[PackageFlags, ...] = ()
        if probe_host:
            toolchain = ToolchainIdentity.detect(env=env, probe=probe)
            if resolver is None:
                resolver = PackageResolver()
            packages = tuple(resolver.resolve_all(config.packages))
        profile = BuildProfile.from_debug(debug)

        logger.debug(f"Build context for {config.name} ({config.type}) in {project_dir}")
        return cls(
            project_dir=project_dir,
            config=config,
            toolchain=toolchain,
            profile=profile,
            profile_flags=get_profile(profile),
            packages=packages,
            verbose=verbose,
        )

    @property
    def host_probed(self) -> bool:
        return self.toolchain is not None

    @property
    def debug(self) -> bool:
        return self.profile is BuildProfile.DEBUG

    @property
    def compile_flags(self) -> tuple[str, ...]:
        """Get compilation flags from the resolved profile."""
        return self.profile_flags.compile_flags

    @property
    def src_dir(self) -> Path:
        return self.project_dir / DIR_SRC

    @property
    def include_dir(self) -> Path:
        return self.project_dir / DIR_INCLUDE

    @property
    def lib_dir(self) -> Path:
        return self.project_dir / DIR_LIBRARY

    @property
    def bin_dir(self) -> Path:
        return self.project_dir / DIR_BIN

    @property
    def build_cache_dir(self) -> Path:
        return self.project_dir / DIR_BUILD

    @property
    def target(self) -> Path:
        """Final artifact: lib/<name>.so for extensions, bin/<name> for binaries."""
        if self.config.is_extension:
            return self.lib_dir / f"{self.config.name}.{SHARED_EXT}"
        return self.bin_dir / self.config.name

    @property
    def install_dir(self) -> Path:
        if self.toolchain is None:
            raise ConfigError("install directory is unknown, the host runtime was not probed")
        if self.config.is_extension:
            return self.toolchain.extension_dir
        return self.toolchain.host_prefix / "bin"
