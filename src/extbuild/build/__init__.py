"""
Build system components for extbuild.

This package provides:
- Source discovery and object file mapping
- Compile and link command assembly
- Build orchestration (compile, link, clean, install)
"""

from .build_context import BuildContext, ToolchainIdentity
from .build_profiles import BuildProfile
from .command_runner import CommandRunner, SubprocessRunner
from .compiler import CompileCommandBuilder
from .linker import LinkCommandBuilder
from .orchestrator import BuildOrchestrator, BuildOrchestratorError, BuildPhase
from .source_scanner import Language, SourceFile

__all__ = [
    "BuildContext",
    "BuildOrchestrator",
    "BuildOrchestratorError",
    "BuildPhase",
    "BuildProfile",
    "CommandRunner",
    "CompileCommandBuilder",
    "Language",
    "LinkCommandBuilder",
    "SourceFile",
    "SubprocessRunner",
    "ToolchainIdentity",
]
