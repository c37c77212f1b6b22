"""Host runtime probe.

Queries the host runtime's config tool (php-config by default) for the
values the compile and link steps need. The values are treated as opaque
strings; only the version number is interpreted.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..errors import ConfigError
from ..subprocess_utils import capture_output

logger = logging.getLogger(__name__)

DEFAULT_HOST_CONFIG = "php-config"


class HostRuntimeError(ConfigError):
    """Raised when the host runtime config tool is missing or fails."""

    pass


@dataclass(frozen=True)
class HostRuntimeInfo:
    """Snapshot of the host runtime installation.

    Attributes:
        prefix: Installation prefix (e.g. /usr/local)
        vernum: Numeric version (e.g. 80203 for 8.2.3)
        includes: Compiler include flags, verbatim
        ldflags: Linker flags, verbatim
        extension_dir: Directory loadable extensions are installed into
    """

    prefix: Path
    vernum: int
    includes: str
    ldflags: str
    extension_dir: Path


class HostRuntimeProbe:
    """Runs the host config tool once per query."""

    def __init__(self, tool: str = DEFAULT_HOST_CONFIG):
        self.tool = tool

    def query(self, option: str) -> str:
        """Return the stripped output of `<tool> <option>`.

        Raises:
            HostRuntimeError: If the tool cannot be run or exits non-zero
        """
        try:
            return capture_output([self.tool, option])
        except FileNotFoundError as e:
            raise HostRuntimeError(f"host config tool not found: {self.tool}") from e
        except subprocess.CalledProcessError as e:
            raise HostRuntimeError(f"{self.tool} {option} failed with exit status {e.returncode}") from e

    def prefix(self) -> Path:
        return Path(self.query("--prefix"))

    def vernum(self) -> int:
        raw = self.query("--vernum")
        try:
            return int(raw)
        except ValueError:
            raise HostRuntimeError(f"{self.tool} --vernum returned a non-numeric version: {raw!r}") from None

    def includes(self) -> str:
        return self.query("--includes")

    def ldflags(self) -> str:
        return self.query("--ldflags")

    def extension_dir(self) -> Path:
        return Path(self.query("--extension-dir"))

    def probe(self) -> HostRuntimeInfo:
        """Query every value the build needs."""
        info = HostRuntimeInfo(
            prefix=self.prefix(),
            vernum=self.vernum(),
            includes=self.includes(),
            ldflags=self.ldflags(),
            extension_dir=self.extension_dir(),
        )
        logger.debug(f"Host runtime: prefix={info.prefix} vernum={info.vernum}")
        return info
