"""Subprocess utilities for platform-safe process execution.

Wraps subprocess.run so that toolchain and probe invocations never flash a
console window on Windows and never inherit the terminal's stdin.
"""

import subprocess
import sys
from typing import Any, Sequence


def get_subprocess_creation_flags() -> int:
    """Get platform-specific subprocess creation flags.

    Returns:
        - Windows: subprocess.CREATE_NO_WINDOW (prevents console window)
        - Other platforms: 0 (no special flags)
    """
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


def safe_run(cmd: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess:
    """Execute subprocess.run with platform-specific flags.

    Automatically applies:
    - CREATE_NO_WINDOW on Windows (prevents console window)
    - stdin=DEVNULL (a compiler must never block waiting on the terminal)

    Args:
        cmd: Command and arguments (same as subprocess.run)
        **kwargs: Additional arguments passed to subprocess.run

    Returns:
        CompletedProcess result from subprocess.run

    Note:
        - An explicit 'creationflags' is OR'd with the platform defaults.
        - An explicit 'stdin' is used as-is.
    """
    default_flags = get_subprocess_creation_flags()

    if "creationflags" in kwargs:
        kwargs["creationflags"] = kwargs["creationflags"] | default_flags
    elif default_flags:
        kwargs["creationflags"] = default_flags

    if "stdin" not in kwargs:
        kwargs["stdin"] = subprocess.DEVNULL

    return subprocess.run(list(cmd), **kwargs)


def capture_output(cmd: Sequence[str]) -> str:
    """Run a query command and return its stripped stdout.

    Raises:
        FileNotFoundError: If the executable does not exist
        subprocess.CalledProcessError: If the command exits non-zero
    """
    result = safe_run(cmd, capture_output=True, text=True, check=True)
    return result.stdout.strip()
