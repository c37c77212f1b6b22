"""Project descriptor loading.

A project is a directory with a fixed layout (src/, include/, lib/, bin/,
.build/) and a JSON descriptor:

    {
        "project": {"name": "hello", "type": "extension"},
        "build": {
            "cxxflags": "-Wall",
            "cflags": "",
            "ldflags": "",
            "c_std": "c99",
            "cxx_std": "c++17",
            "packages": ["libcurl", "openssl"]
        }
    }

A hidden .config.json takes precedence over project.json.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..errors import ConfigError, FileSystemError

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILE = "project.json"
LOCAL_CONFIG_FILE = ".config.json"
DIR_SRC = "src"


class ProjectType(Enum):
    """Kind of artifact a project produces."""

    EXTENSION = "extension"
    BINARY = "binary"

    def __str__(self) -> str:
        return self.value


_TYPE_ALIASES: Dict[str, ProjectType] = {
    "extension": ProjectType.EXTENSION,
    "ext": ProjectType.EXTENSION,
    "binary": ProjectType.BINARY,
    "bin": ProjectType.BINARY,
}


def parse_project_type(value: Optional[str]) -> ProjectType:
    """Map a descriptor `project.type` value to a ProjectType.

    A missing type means a standalone binary.

    Raises:
        ConfigError: If the value is not a known project type
    """
    if value is None or value == "":
        return ProjectType.BINARY
    try:
        return _TYPE_ALIASES[value]
    except (KeyError, TypeError):
        raise ConfigError(f"unknown project.type {value!r} (expected 'extension' or 'binary')") from None


@dataclass(frozen=True)
class ProjectConfig:
    """Read-only view of a loaded project descriptor.

    Attributes:
        name: Project name, used to name the build artifact
        type: Extension module or standalone binary
        cflags: Extra flags for C sources
        cxxflags: Extra flags for C++ sources
        ldflags: Extra flags for the link step
        c_std: C language standard (no default)
        cxx_std: C++ language standard (None means the built-in default)
        packages: pkg-config package names, in declared order
        path: Descriptor file the config was loaded from
        raw: The full parsed descriptor
    """

    name: str
    type: ProjectType
    cflags: str = ""
    cxxflags: str = ""
    ldflags: str = ""
    c_std: Optional[str] = None
    cxx_std: Optional[str] = None
    packages: Tuple[str, ...] = ()
    path: Optional[Path] = None
    raw: Optional[Dict[str, Any]] = None

    @property
    def is_extension(self) -> bool:
        return self.type is ProjectType.EXTENSION

    def get_value(self, section: str, key: Optional[str] = None) -> Any:
        """Look up a descriptor value by section and key.

        Returns:
            The value, the whole section when key is omitted, or None if absent
        """
        data = self.raw or {}
        if section not in data or not isinstance(data[section], dict):
            return None
        if key is None:
            return data[section]
        return data[section].get(key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Optional[Path] = None) -> "ProjectConfig":
        """Validate a parsed descriptor and build a ProjectConfig.

        Raises:
            ConfigError: If a required field is missing or a field has the wrong shape
        """
        if not isinstance(data, dict):
            raise ConfigError("project descriptor must be a JSON object")

        project = data.get("project") or {}
        build = data.get("build") or {}
        if not isinstance(project, dict) or not isinstance(build, dict):
            raise ConfigError("'project' and 'build' must be JSON objects")

        name = project.get("name")
        if not name or not isinstance(name, str):
            raise ConfigError("no project.name option in project descriptor")

        packages = build.get("packages") or []
        if not isinstance(packages, list) or not all(isinstance(p, str) for p in packages):
            raise ConfigError("build.packages must be a list of package names")

        return cls(
            name=name,
            type=parse_project_type(project.get("type")),
            cflags=_flag_string(build, "cflags"),
            cxxflags=_flag_string(build, "cxxflags"),
            ldflags=_flag_string(build, "ldflags"),
            c_std=build.get("c_std") or None,
            cxx_std=build.get("cxx_std") or None,
            packages=tuple(packages),
            path=path,
            raw=data,
        )

    @classmethod
    def load(cls, project_dir: Path) -> "ProjectConfig":
        """Load the descriptor of the project rooted at project_dir.

        Raises:
            FileSystemError: If the project has no src directory
            ConfigError: If the descriptor is missing, malformed or incomplete
        """
        if not (project_dir / DIR_SRC).is_dir():
            raise FileSystemError(f"no src dir in {project_dir}")

        config_file = find_config_file(project_dir)
        if not config_file.is_file():
            raise ConfigError(f"no project config file [{config_file}]")

        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid JSON in {config_file}: {e}") from e
        except OSError as e:
            raise ConfigError(f"cannot read {config_file}: {e}") from e

        logger.debug(f"Loaded project descriptor {config_file}")
        return cls.from_dict(data, path=config_file)


def find_config_file(project_dir: Path) -> Path:
    """Return the descriptor path, preferring .config.json over project.json."""
    local = project_dir / LOCAL_CONFIG_FILE
    if local.is_file():
        return local
    return project_dir / PROJECT_CONFIG_FILE


def _flag_string(build: Dict[str, Any], key: str) -> str:
    value = build.get(key) or ""
    if isinstance(value, list):
        return " ".join(str(v) for v in value)
    if not isinstance(value, str):
        raise ConfigError(f"build.{key} must be a string")
    return value
