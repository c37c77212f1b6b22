"""Link command assembly.

Always links with the C++ compiler, whatever the mix of sources. Flag order:

    c++ <objects...> -L<project>/lib -L<prefix>/lib -lstdc++ -lphpx
    (-shared [-undefined dynamic_lookup] | -lphp[7])
    <host ldflags> <user ldflags> <package libs...> -o <target>
"""

from pathlib import Path
from typing import List, Sequence

from .build_context import BuildContext
from .compiler import split_flags

RUNTIME_SUPPORT_LIBS = ("-lstdc++", "-lphpx")
HOST_RUNTIME_LIB = "php"
# Host runtimes before this version ship their embed library as lib<name>7.
HOST_ABI_VERNUM = 80000
HOST_ABI_LEGACY_SUFFIX = "7"


def host_runtime_lib_flag(vernum: int) -> str:
    if vernum < HOST_ABI_VERNUM:
        return f"-l{HOST_RUNTIME_LIB}{HOST_ABI_LEGACY_SUFFIX}"
    return f"-l{HOST_RUNTIME_LIB}"


class LinkCommandBuilder:
    """Assembles the single link invocation for one build context."""

    def __init__(self, context: BuildContext):
        self.context = context

    def type_flags(self) -> List[str]:
        """Shared-object flags for extensions, the runtime library for binaries."""
        toolchain = self.context.toolchain
        if self.context.config.is_extension:
            flags = ["-shared"]
            if toolchain.is_darwin:
                flags.extend(["-undefined", "dynamic_lookup"])
            return flags
        return [host_runtime_lib_flag(toolchain.host_vernum)]

    def user_flags(self) -> List[str]:
        flags = split_flags(self.context.config.ldflags)
        extra_root = self.context.toolchain.extra_root
        if extra_root is not None:
            flags.append(f"-L{extra_root / 'lib'}")
        return flags

    def build(self, objects: Sequence[Path], target: Path) -> List[str]:
        """Return the linker argument vector."""
        context = self.context
        toolchain = context.toolchain
        cmd = [toolchain.cxx]
        cmd.extend(str(obj) for obj in objects)
        cmd.append(f"-L{context.lib_dir}")
        cmd.append(f"-L{toolchain.host_lib_dir}")
        cmd.extend(RUNTIME_SUPPORT_LIBS)
        cmd.extend(self.type_flags())
        cmd.extend(split_flags(toolchain.host_ldflags))
        cmd.extend(self.user_flags())
        for package in context.packages:
            cmd.extend(split_flags(package.libs))
        cmd.extend(["-o", str(target)])
        return cmd
