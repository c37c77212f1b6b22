"""Build Profile Configuration.

Two profiles exist: release (the default) and debug. A profile owns the
optimization flags; everything else on the compile line comes from the
project descriptor and the host runtime.
"""

from dataclasses import dataclass
from enum import Enum

from ..config import ProjectType


class BuildProfile(Enum):
    """Build profile enum for type-safe profile selection."""

    RELEASE = "release"
    DEBUG = "debug"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_debug(cls, debug: bool) -> "BuildProfile":
        return cls.DEBUG if debug else cls.RELEASE


@dataclass(frozen=True)
class ProfileFlags:
    """Flags a profile contributes to every compile command.

    Attributes:
        name: Profile identifier (matches BuildProfile enum value)
        description: Human-readable profile description
        compile_flags: Optimization flags for this profile
    """

    name: str
    description: str
    compile_flags: tuple[str, ...]


PROFILES: dict[BuildProfile, ProfileFlags] = {
    BuildProfile.RELEASE: ProfileFlags(
        name="release",
        description="Optimized build (default)",
        compile_flags=("-O2",),
    ),
    BuildProfile.DEBUG: ProfileFlags(
        name="debug",
        description="Unoptimized build for debugging",
        compile_flags=("-O0",),
    ),
}


def get_profile(profile: BuildProfile) -> ProfileFlags:
    """Get profile configuration by enum."""
    return PROFILES[profile]


def format_profile_banner(profile: BuildProfile, project_type: ProjectType, compiler: str | None = None) -> str:
    """Format a build profile banner for display.

    Args:
        profile: BuildProfile enum value
        project_type: Kind of artifact being built
        compiler: C++ compiler executable (optional)

    Returns:
        Formatted banner string
    """
    parts = [f"PROFILE={profile.value}", f"TYPE={project_type.value}"]
    if compiler:
        parts.append(f"CXX={compiler}")

    return " ".join(parts)


def print_profile_banner(profile: BuildProfile, project_type: ProjectType, compiler: str | None = None) -> None:
    """Print the build profile banner through the extbuild output module."""
    from ..output import log

    log(format_profile_banner(profile, project_type, compiler=compiler))
