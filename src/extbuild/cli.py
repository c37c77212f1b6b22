"""
Command-line interface for extbuild.

This module provides the `extbuild` CLI tool for building native host-runtime
extensions and binaries.
"""

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from extbuild import __version__
from extbuild.build import BuildContext, BuildOrchestrator
from extbuild.errors import ExtBuildError
from extbuild.output import log_header, set_verbose

COMMANDS = ("make", "build", "clean", "install", "target")
# Commands that only need the project layout, not the host runtime or packages.
LAYOUT_COMMANDS = ("clean", "target")


@dataclass
class CommandArgs:
    """Arguments shared by every command."""

    command: str
    project_dir: Path
    debug: bool = False
    verbose: bool = False


def _error(title: str, message: str) -> None:
    print()
    print(f"\033[1;31m✗ {title}\033[0m")
    print()
    print(message)


def make_command(orchestrator: BuildOrchestrator) -> int:
    """Build the project.

    Examples:
        extbuild                      # Build the project in the current directory
        extbuild make path/to/ext     # Build a specific project
        extbuild make --debug         # Build with -O0
    """
    start_time = time.time()
    if orchestrator.make():
        print()
        print("\033[1;32m✓ Build successful!\033[0m")
        print(f"Target: {orchestrator.get_target()}")
        print(f"Build time: {time.time() - start_time:.2f}s")
        return 0
    _error("Build failed!", str(orchestrator.last_error or ""))
    return 1


def clean_command(orchestrator: BuildOrchestrator) -> int:
    removed = orchestrator.clean()
    print(f"Removed {removed} object files")
    return 0


def install_command(orchestrator: BuildOrchestrator) -> int:
    if orchestrator.install():
        print("\033[1;32m✓ Install successful!\033[0m")
        return 0
    _error("Install failed!", str(orchestrator.last_error or ""))
    return 1


def target_command(orchestrator: BuildOrchestrator) -> int:
    print(orchestrator.get_target())
    return 0


HANDLERS: dict[str, Callable[[BuildOrchestrator], int]] = {
    "make": make_command,
    "build": make_command,
    "clean": clean_command,
    "install": install_command,
    "target": target_command,
}


def run_command(args: CommandArgs) -> int:
    """Assemble the build context and dispatch to the command handler.

    Returns:
        Process exit status
    """
    if args.command != "target":
        log_header("extbuild", __version__)

    try:
        context = BuildContext.create(
            args.project_dir,
            debug=args.debug,
            verbose=args.verbose,
            probe_host=args.command not in LAYOUT_COMMANDS,
        )
        orchestrator = BuildOrchestrator(context)
        return HANDLERS[args.command](orchestrator)

    except ExtBuildError as e:
        _error(f"Error: {type(e).__name__}", str(e))
        return 1

    except KeyboardInterrupt:
        print()
        print("\033[1;33m✗ Build interrupted\033[0m")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        _error("Unexpected error", f"{type(e).__name__}: {e}")
        if args.verbose:
            import traceback

            print()
            print("Traceback:")
            print(traceback.format_exc())
        return 1


def setup_logging(verbose: bool) -> None:
    """Send library log records to stderr; warnings only unless verbose."""
    logger = logging.getLogger("extbuild")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if logger.handlers:
        return

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(console_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extbuild",
        description="Incremental builder for native host-runtime extensions and binaries",
    )
    parser.add_argument("--version", action="version", version=f"extbuild {__version__}")
    parser.add_argument(
        "command",
        nargs="?",
        default="make",
        choices=COMMANDS,
        help="Operation to run (default: make)",
    )
    parser.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Project directory (default: current directory)",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Build without optimization (-O0)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show every compiler and linker command",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parsed_args = build_parser().parse_args(argv)

    if not parsed_args.project_dir.is_dir():
        print(f"\033[1;31m✗ Error: Path is not a directory: {parsed_args.project_dir}\033[0m")
        sys.exit(2)

    set_verbose(parsed_args.verbose)
    setup_logging(parsed_args.verbose)
    args = CommandArgs(
        command=parsed_args.command,
        project_dir=parsed_args.project_dir,
        debug=parsed_args.debug,
        verbose=parsed_args.verbose,
    )
    sys.exit(run_command(args))


if __name__ == "__main__":
    main()
