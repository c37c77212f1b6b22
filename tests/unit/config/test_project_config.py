"""Tests for project descriptor loading."""

import json

import pytest

from extbuild.config import ProjectConfig, ProjectType, find_config_file
from extbuild.config.project_config import parse_project_type
from extbuild.errors import ConfigError, FileSystemError


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src").mkdir()
    return tmp_path


def _write(path, data):
    path.write_text(json.dumps(data))


class TestLoad:
    def test_minimal_descriptor(self, project):
        _write(project / "project.json", {"project": {"name": "hello"}})
        config = ProjectConfig.load(project)

        assert config.name == "hello"
        assert config.type is ProjectType.BINARY
        assert config.cflags == ""
        assert config.c_std is None
        assert config.cxx_std is None
        assert config.packages == ()
        assert config.path == project / "project.json"

    def test_full_descriptor(self, project):
        _write(
            project / "project.json",
            {
                "project": {"name": "hello", "type": "extension"},
                "build": {
                    "cflags": "-DC",
                    "cxxflags": "-DCXX",
                    "ldflags": "-lm",
                    "c_std": "c99",
                    "cxx_std": "c++17",
                    "packages": ["libcurl", "openssl"],
                },
            },
        )
        config = ProjectConfig.load(project)

        assert config.is_extension
        assert config.cflags == "-DC"
        assert config.cxxflags == "-DCXX"
        assert config.ldflags == "-lm"
        assert config.c_std == "c99"
        assert config.cxx_std == "c++17"
        assert config.packages == ("libcurl", "openssl")

    def test_local_config_takes_precedence(self, project):
        _write(project / "project.json", {"project": {"name": "shared"}})
        _write(project / ".config.json", {"project": {"name": "local"}})
        assert find_config_file(project) == project / ".config.json"
        assert ProjectConfig.load(project).name == "local"

    def test_missing_src_dir(self, tmp_path):
        _write(tmp_path / "project.json", {"project": {"name": "hello"}})
        with pytest.raises(FileSystemError, match="no src dir"):
            ProjectConfig.load(tmp_path)

    def test_missing_descriptor(self, project):
        with pytest.raises(ConfigError, match="no project config file"):
            ProjectConfig.load(project)

    def test_invalid_json(self, project):
        (project / "project.json").write_text("not valid json {{{")
        with pytest.raises(ConfigError, match="invalid JSON"):
            ProjectConfig.load(project)

    @pytest.mark.parametrize("data", [{}, {"project": {}}, {"project": {"name": ""}}, {"project": {"name": 42}}])
    def test_missing_name(self, project, data):
        _write(project / "project.json", data)
        with pytest.raises(ConfigError, match="project.name"):
            ProjectConfig.load(project)

    def test_packages_must_be_list(self, project):
        _write(project / "project.json", {"project": {"name": "x"}, "build": {"packages": "libcurl"}})
        with pytest.raises(ConfigError, match="packages"):
            ProjectConfig.load(project)

    def test_list_flags_are_joined(self, project):
        _write(project / "project.json", {"project": {"name": "x"}, "build": {"cxxflags": ["-Wall", "-Wextra"]}})
        assert ProjectConfig.load(project).cxxflags == "-Wall -Wextra"


class TestProjectType:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("extension", ProjectType.EXTENSION),
            ("ext", ProjectType.EXTENSION),
            ("binary", ProjectType.BINARY),
            ("bin", ProjectType.BINARY),
            (None, ProjectType.BINARY),
        ],
    )
    def test_aliases(self, value, expected):
        assert parse_project_type(value) is expected

    def test_unknown_type(self):
        with pytest.raises(ConfigError, match="unknown project.type"):
            parse_project_type("library")


class TestGetValue:
    def test_lookup(self):
        config = ProjectConfig.from_dict({"project": {"name": "x"}, "build": {"c_std": "c11"}})
        assert config.get_value("build", "c_std") == "c11"
        assert config.get_value("build", "missing") is None
        assert config.get_value("missing", "key") is None
        assert config.get_value("project") == {"name": "x"}

    def test_config_is_immutable(self):
        config = ProjectConfig.from_dict({"project": {"name": "x"}})
        with pytest.raises(AttributeError):
            config.name = "y"  # type: ignore[misc]
