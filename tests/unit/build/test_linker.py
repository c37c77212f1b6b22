"""Tests for link command assembly."""

import pytest

from extbuild.build.linker import (
    HOST_ABI_VERNUM,
    RUNTIME_SUPPORT_LIBS,
    LinkCommandBuilder,
    host_runtime_lib_flag,
)
from extbuild.packages import PackageFlags


def _descriptor(project_type, **build):
    return {"project": {"name": "hello", "type": project_type}, "build": build}


def _objects(context):
    return [context.build_cache_dir / "b.cpp.o", context.build_cache_dir / "a.c.o"]


class TestLinkCommand:
    """Test the link invocation for both project types."""

    def test_extension(self, make_project, make_context):
        context = make_context(make_project(_descriptor("extension")))
        cmd = LinkCommandBuilder(context).build(_objects(context), context.target)

        assert cmd[0] == "c++"
        assert "-shared" in cmd
        assert "-lphp" not in cmd
        assert not any(arg.startswith("-lphp7") for arg in cmd)
        assert "-undefined" not in cmd
        assert cmd[-2:] == ["-o", str(context.target)]
        assert context.target == context.lib_dir / "hello.so"

    def test_extension_on_darwin(self, make_project, make_context):
        context = make_context(make_project(_descriptor("extension")), host_os="Darwin")
        cmd = LinkCommandBuilder(context).build(_objects(context), context.target)
        i = cmd.index("-undefined")
        assert cmd[i + 1] == "dynamic_lookup"

    def test_binary(self, make_project, make_context):
        context = make_context(make_project(_descriptor("binary")))
        cmd = LinkCommandBuilder(context).build(_objects(context), context.target)

        assert "-shared" not in cmd
        assert "-lphp" in cmd
        assert context.target == context.bin_dir / "hello"

    def test_binary_on_darwin_has_no_dynamic_lookup(self, make_project, make_context):
        context = make_context(make_project(_descriptor("binary")), host_os="Darwin")
        cmd = LinkCommandBuilder(context).build(_objects(context), context.target)
        assert "-undefined" not in cmd

    @pytest.mark.parametrize(
        "vernum, expected",
        [
            (70400, "-lphp7"),
            (HOST_ABI_VERNUM - 1, "-lphp7"),
            (HOST_ABI_VERNUM, "-lphp"),
            (80300, "-lphp"),
        ],
    )
    def test_runtime_lib_suffix(self, make_project, make_context, vernum, expected):
        context = make_context(make_project(_descriptor("binary")), vernum=vernum)
        cmd = LinkCommandBuilder(context).build(_objects(context), context.target)
        assert expected in cmd
        assert host_runtime_lib_flag(vernum) == expected

    def test_objects_keep_order(self, make_project, make_context):
        context = make_context(make_project(_descriptor("binary")))
        objects = _objects(context)
        cmd = LinkCommandBuilder(context).build(objects, context.target)
        assert cmd[1:3] == [str(o) for o in objects]

    def test_always_links_with_cxx(self, make_project, make_context):
        context = make_context(make_project(_descriptor("binary")), env={"CC": "gcc", "CXX": "g++"})
        cmd = LinkCommandBuilder(context).build([context.build_cache_dir / "only.c.o"], context.target)
        assert cmd[0] == "g++"

    def test_search_paths_and_runtime_libs(self, make_project, make_context):
        context = make_context(make_project(_descriptor("binary")))
        cmd = LinkCommandBuilder(context).build(_objects(context), context.target)
        assert f"-L{context.lib_dir}" in cmd
        assert f"-L{context.toolchain.host_lib_dir}" in cmd
        for lib in RUNTIME_SUPPORT_LIBS:
            assert lib in cmd

    def test_host_and_user_ldflags(self, make_project, make_context):
        context = make_context(make_project(_descriptor("binary", ldflags="-Wl,--as-needed -lm")))
        cmd = LinkCommandBuilder(context).build(_objects(context), context.target)
        assert cmd.index("-L/opt/host/lib/extra") < cmd.index("-Wl,--as-needed") < cmd.index("-lm")

    def test_package_libs_verbatim(self, make_project, make_context):
        packages = [PackageFlags(name="foo", cflags="-I/foo/include", libs="-lfoo")]
        context = make_context(make_project(_descriptor("binary", packages=["foo"])), packages=packages)
        cmd = LinkCommandBuilder(context).build(_objects(context), context.target)
        assert "-lfoo" in cmd
        assert cmd.index("-lfoo") < cmd.index("-o")

    def test_extra_root_library_path(self, make_project, make_context):
        context = make_context(make_project(_descriptor("extension")), env={"EXTBUILD_DIR": "/opt/phpx"})
        cmd = LinkCommandBuilder(context).build(_objects(context), context.target)
        assert any(arg.startswith("-L/opt/phpx") and arg.endswith("lib") for arg in cmd)
