"""Third-party package flags via pkg-config."""

import logging
import subprocess
from dataclasses import dataclass
from typing import Dict, Iterable, List

from ..errors import ConfigError
from ..subprocess_utils import capture_output

logger = logging.getLogger(__name__)


class PackageNotFoundError(ConfigError):
    """Raised when pkg-config does not know a declared package."""

    pass


@dataclass(frozen=True)
class PackageFlags:
    """Compiler and linker flags for one package, verbatim from pkg-config."""

    name: str
    cflags: str
    libs: str


class PackageResolver:
    """Resolves package names to flags, caching each package once."""

    def __init__(self, tool: str = "pkg-config"):
        self.tool = tool
        self._cache: Dict[str, PackageFlags] = {}

    def _query(self, option: str, package: str) -> str:
        try:
            return capture_output([self.tool, option, package])
        except FileNotFoundError as e:
            raise PackageNotFoundError(f"{self.tool} not found, cannot resolve package {package!r}") from e
        except subprocess.CalledProcessError as e:
            raise PackageNotFoundError(f"package {package!r} not found by {self.tool} (exit status {e.returncode})") from e

    def resolve(self, package: str) -> PackageFlags:
        """Return the flags for a single package.

        Raises:
            PackageNotFoundError: If the package cannot be resolved
        """
        cached = self._cache.get(package)
        if cached is not None:
            return cached

        flags = PackageFlags(
            name=package,
            cflags=self._query("--cflags", package),
            libs=self._query("--libs", package),
        )
        logger.debug(f"Resolved package {package}: cflags={flags.cflags!r} libs={flags.libs!r}")
        self._cache[package] = flags
        return flags

    def resolve_all(self, packages: Iterable[str]) -> List[PackageFlags]:
        """Resolve packages preserving the declared order."""
        return [self.resolve(p) for p in packages]
