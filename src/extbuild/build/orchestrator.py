"""
Build orchestration for extbuild projects.

Sequences one build:
1. Discover sources under src/
2. Map each source to its object under .build/ and create object directories
3. Compile every stale source, stopping at the first failure
4. Link all objects, fresh and cached, into the target
5. Optionally copy the target into the host runtime's install directory

Compilation is sequential; the process blocks on each compiler invocation.
"""

import logging
import shutil
import time
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from tqdm import tqdm

from ..errors import ExtBuildError, FileSystemError, ToolchainError
from ..output import TimedLogger, log, log_build_complete, log_detail, log_error, log_file
from .build_context import BuildContext
from .build_profiles import print_profile_banner
from .command_runner import CommandRunner, SubprocessRunner
from .compiler import CompileCommandBuilder
from .linker import LinkCommandBuilder
from .source_scanner import OBJECT_EXTENSION, SourceFile, scan_sources, walk
from .staleness import ensure_object_dir, needs_compile, object_path_for

logger = logging.getLogger(__name__)


class BuildOrchestratorError(ExtBuildError):
    """Raised when orchestrator operations are called out of order."""

    pass


class BuildPhase(Enum):
    IDLE = "idle"
    COMPILING = "compiling"
    COMPILED = "compiled"
    LINKING = "linking"
    DONE = "done"
    FAILED = "failed"


class BuildOrchestrator:
    """
    Orchestrates compile, link, clean and install for one project.

    Toolchain failures are reported as False return values and recorded in
    last_error; configuration and filesystem errors are raised.

    Example usage:
        context = BuildContext.create(Path("."), debug=False)
        orchestrator = BuildOrchestrator(context)
        if orchestrator.make():
            artifact = orchestrator.get_target()
    """

    def __init__(
        self,
        context: BuildContext,
        runner: Optional[CommandRunner] = None,
        show_progress: Optional[bool] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            context: Build context assembled at startup
            runner: Command runner (defaults to running real processes)
            show_progress: Show a progress bar while compiling (defaults to not verbose)
        """
        self.context = context
        self.runner = runner if runner is not None else SubprocessRunner(verbose=context.verbose)
        self.show_progress = (not context.verbose) if show_progress is None else show_progress
        self.compiler = CompileCommandBuilder(context)
        self.linker = LinkCommandBuilder(context)

        self.phase = BuildPhase.IDLE
        self.objects: List[Path] = []
        self.compiled_count = 0
        self.last_error: Optional[ToolchainError] = None

    def get_target(self) -> Path:
        return self.context.target

    def _relative(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.context.project_dir))
        except ValueError:
            return str(path)

    def _fail(self, message: str) -> bool:
        self.last_error = ToolchainError(message)
        self.phase = BuildPhase.FAILED
        log_error(message)
        return False

    def _require_toolchain(self) -> None:
        if not self.context.host_probed:
            raise BuildOrchestratorError("build context was created without probing the host runtime")

    def _plan(self, sources: List[SourceFile]) -> List[Tuple[SourceFile, Path]]:
        """Pair each source with its object path and create the object directories."""
        context = self.context
        plan = []
        for source in sources:
            object_path = object_path_for(source.path, context.src_dir, context.build_cache_dir)
            ensure_object_dir(object_path)
            plan.append((source, object_path))
        return plan

    def compile(self) -> bool:
        """Compile every stale source.

        Returns:
            True if all sources are compiled or up to date, False on the first
            compiler failure (remaining sources are not attempted)

        Raises:
            FileSystemError: If src/ is missing or contains no sources
            BuildOrchestratorError: If the host runtime was not probed
        """
        self._require_toolchain()
        self.phase = BuildPhase.COMPILING
        self.objects = []
        self.compiled_count = 0
        self.last_error = None

        try:
            plan = self._plan(scan_sources(self.context.src_dir))
        except ExtBuildError:
            self.phase = BuildPhase.FAILED
            raise
        log(f"Compiling {len(plan)} source files...")

        with tqdm(
            total=len(plan),
            desc="Compiling",
            unit="file",
            ncols=80,
            leave=False,
            disable=not self.show_progress,
        ) as pbar:
            for source, object_path in plan:
                self.objects.append(object_path)
                name = self._relative(source.path)

                if not needs_compile(source.path, object_path):
                    log_file(str(source.language), name, cached=True)
                    pbar.update(1)
                    continue

                # TODO: track header dependencies (e.g. from -MMD .d files) so header edits rebuild dependents
                log_file(str(source.language), name)
                if not self.runner.run(self.compiler.build(source, object_path)):
                    return self._fail(f"compilation failed: {name}")
                self.compiled_count += 1
                pbar.update(1)

        logger.info(f"Compiled {self.compiled_count} of {len(plan)} source files")
        self.phase = BuildPhase.COMPILED
        return True

    def link(self) -> bool:
        """Link the objects of the last successful compile into the target.

        Raises:
            BuildOrchestratorError: If compile() has not succeeded first
        """
        if self.phase is not BuildPhase.COMPILED:
            raise BuildOrchestratorError(f"link() requires a successful compile(), phase is {self.phase.value}")

        self.phase = BuildPhase.LINKING
        target = self.context.target
        target.parent.mkdir(parents=True, exist_ok=True)

        name = self._relative(target)
        log(f"Linking {name}...")
        if not self.runner.run(self.linker.build(self.objects, target)):
            return self._fail(f"link failed: {name}")

        self.phase = BuildPhase.DONE
        log_detail(f"Target: {target}")
        return True

    def make(self) -> bool:
        """Compile, then link if compilation succeeded."""
        self._require_toolchain()
        start_time = time.time()
        print_profile_banner(self.context.profile, self.context.config.type, compiler=self.context.toolchain.cxx)
        if not self.compile():
            return False
        if not self.link():
            return False
        log_build_complete(time.time() - start_time)
        return True

    def clean(self) -> int:
        """Delete every object file under the build cache.

        Returns:
            Number of object files removed
        """
        cache_dir = self.context.build_cache_dir
        if not cache_dir.is_dir():
            logger.debug(f"Nothing to clean, {cache_dir} does not exist")
            return 0

        objects = walk(cache_dir, [OBJECT_EXTENSION])
        for object_path in objects:
            object_path.unlink()
        log(f"Removed {len(objects)} object files")
        self.phase = BuildPhase.IDLE
        return len(objects)

    def install(self) -> bool:
        """Copy the target into the install directory, building it first if missing.

        Returns:
            False if the implicit build failed

        Raises:
            FileSystemError: If the copy fails
        """
        self._require_toolchain()
        target = self.context.target
        if not target.is_file():
            if not self.make():
                return False

        destination = self.context.install_dir / target.name
        with TimedLogger(f"Installing {destination}"):
            try:
                shutil.copy2(target, destination)
            except OSError as e:
                raise FileSystemError(f"cannot install {target} to {destination}: {e}") from e
        return True
