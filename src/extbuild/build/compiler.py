"""Compile command assembly.

Builds the argument vector for compiling one source file. Flag order:

    <cc|c++> <-O0|-O2> [-fPIC] <host includes> -I<project>/include
    <package cflags...> [-std=...] <user flags> -c <source> -o <object>

User flags come last so that they win under last-flag-wins semantics.
"""

import shlex
from pathlib import Path
from typing import List

from .build_context import BuildContext
from .source_scanner import Language, SourceFile

BASE_FLAGS = "-g"
DEFAULT_CXX_STD = "c++11"
PIC_FLAG = "-fPIC"


def split_flags(flags: str) -> List[str]:
    """Split an opaque flag string into arguments, honoring shell quoting."""
    if not flags:
        return []
    return shlex.split(flags)


class CompileCommandBuilder:
    """Assembles per-file compiler invocations for one build context."""

    def __init__(self, context: BuildContext):
        self.context = context

    def compiler_for(self, language: Language) -> str:
        if language is Language.C:
            return self.context.toolchain.cc
        return self.context.toolchain.cxx

    def std_flag(self, language: Language) -> List[str]:
        """C++ falls back to the built-in default standard; C has none."""
        config = self.context.config
        if language is Language.C:
            std = config.c_std
        else:
            std = config.cxx_std or DEFAULT_CXX_STD
        return [f"-std={std}"] if std else []

    def user_flags(self, language: Language) -> List[str]:
        """Project-level flags: -g, the descriptor flags and the extra root include."""
        config = self.context.config
        flags = [BASE_FLAGS]
        flags.extend(split_flags(config.cflags if language is Language.C else config.cxxflags))
        extra_root = self.context.toolchain.extra_root
        if extra_root is not None:
            flags.append(f"-I{extra_root / 'include'}")
        return flags

    def build(self, source: SourceFile, object_path: Path) -> List[str]:
        """Return the compiler argument vector for one source file."""
        context = self.context
        cmd = [self.compiler_for(source.language)]
        cmd.extend(context.compile_flags)
        if context.config.is_extension:
            cmd.append(PIC_FLAG)
        cmd.extend(split_flags(context.toolchain.host_includes))
        cmd.append(f"-I{context.include_dir}")
        for package in context.packages:
            cmd.extend(split_flags(package.cflags))
        cmd.extend(self.std_flag(source.language))
        cmd.extend(self.user_flags(source.language))
        cmd.extend(["-c", str(source.path), "-o", str(object_path)])
        return cmd
