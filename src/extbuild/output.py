"""
Timestamped user-facing output for extbuild.

Every line is prefixed with the time elapsed since program launch in
MM:SS.cc format, so it is easy to see where a build spends its time.

Example output:
    00:00.01 extbuild v0.1.0
    00:00.02 PROFILE=release TYPE=extension
    00:00.40 Compiling 12 source files...
    00:03.85 Linking lib/hello.so...

Usage:
    from extbuild.output import log, log_detail, log_file

    log("Compiling 12 source files...")
    log_detail("Target: lib/hello.so")
    log_file("c++", "src/hello.cc", cached=True)
"""

import sys
import time
from types import TracebackType
from typing import Optional, TextIO

_start_time: Optional[float] = None
_output_stream: Optional[TextIO] = None
_verbose: bool = True


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Initialize the program timer.

    Called automatically on the first log line if not called explicitly.

    Args:
        output_stream: Optional output stream (defaults to sys.stdout)
    """
    global _start_time, _output_stream
    _start_time = time.time()
    if output_stream is not None:
        _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """Enable or disable messages logged with verbose_only=True."""
    global _verbose
    _verbose = verbose


def get_elapsed() -> float:
    """Seconds elapsed since the timer was initialized."""
    if _start_time is None:
        init_timer()
    return time.time() - _start_time  # type: ignore


def format_timestamp() -> str:
    """Format the current elapsed time as MM:SS.cc."""
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _print(message: str) -> None:
    stream = _output_stream if _output_stream is not None else sys.stdout
    stream.write(f"{format_timestamp()} {message}\n")
    stream.flush()


def log(message: str, verbose_only: bool = False) -> None:
    """
    Log a message with timestamp.

    Args:
        message: Message to log
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(message)


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """Log an indented detail line."""
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_file(language: str, filename: str, cached: bool = False, verbose_only: bool = True) -> None:
    """
    Log a per-file compilation line.

    Format: [language] filename (cached)

    Args:
        language: Source language tag ('c' or 'c++')
        filename: Source file being compiled
        cached: If True, the object file was up to date and reused
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    suffix = " (cached)" if cached else ""
    _print(f"      [{language}] {filename}{suffix}")


def log_header(title: str, version: str) -> None:
    _print(f"{title} v{version}")


def log_build_complete(build_time: float, verbose_only: bool = False) -> None:
    if verbose_only and not _verbose:
        return
    _print(f"Build time: {build_time:.2f}s")


def log_error(message: str) -> None:
    _print(f"ERROR: {message}")


class TimedLogger:
    """
    Context manager that logs an operation and how long it took.

    Usage:
        with TimedLogger("Linking lib/hello.so"):
            runner.run(cmd)
    """

    def __init__(self, operation: str, verbose_only: bool = False):
        self.operation = operation
        self.verbose_only = verbose_only
        self.start_time = 0.0

    def __enter__(self) -> "TimedLogger":
        self.start_time = time.time()
        log(f"{self.operation}...", self.verbose_only)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        del exc_val, exc_tb  # Unused
        elapsed = time.time() - self.start_time
        if exc_type is None:
            log_detail(f"Done ({elapsed:.2f}s)", verbose_only=self.verbose_only)
        return None
