"""External command execution.

The orchestrator only needs "run this, did it succeed?". Keeping that behind
a small protocol lets tests substitute a recording fake for real compilers.
"""

import logging
import shlex
from typing import Protocol, Sequence

from ..output import log
from ..subprocess_utils import safe_run

logger = logging.getLogger(__name__)


def format_command(argv: Sequence[str]) -> str:
    """Render an argument vector as a copy-pasteable shell command."""
    return " ".join(shlex.quote(a) for a in argv)


class CommandRunner(Protocol):
    def run(self, argv: Sequence[str]) -> bool:
        """Run a command to completion and report whether it exited with status 0."""
        ...


class SubprocessRunner:
    """Runs commands as child processes, blocking until each one exits.

    Compiler diagnostics go straight to the terminal. No timeout is applied.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def run(self, argv: Sequence[str]) -> bool:
        if self.verbose:
            log(format_command(argv))
        try:
            result = safe_run(argv)
        except FileNotFoundError:
            logger.error(f"Executable not found: {argv[0]}")
            return False
        if result.returncode != 0:
            logger.debug(f"Command exited with status {result.returncode}: {format_command(argv)}")
        return result.returncode == 0
