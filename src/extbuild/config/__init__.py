"""Project descriptor parsing for extbuild."""

from .project_config import ProjectConfig, ProjectType, find_config_file

__all__ = ["ProjectConfig", "ProjectType", "find_config_file"]
