"""Source discovery.

Walks a directory tree and collects files whose extension is in an allowed
set. Entries are visited in name order within each directory, so the result
is deterministic for a given filesystem state.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List

from ..errors import FileSystemError

SOURCE_EXTENSIONS = (".cc", ".cpp", ".c")
OBJECT_EXTENSION = ".o"


class Language(Enum):
    C = "c"
    CXX = "c++"

    def __str__(self) -> str:
        return self.value


def detect_language(path: Path) -> Language:
    """Only `.c` is C; every other extension is compiled as C++."""
    if path.suffix == ".c":
        return Language.C
    return Language.CXX


@dataclass(frozen=True)
class SourceFile:
    path: Path
    language: Language

    @classmethod
    def from_path(cls, path: Path) -> "SourceFile":
        return cls(path=path, language=detect_language(path))


def walk(root: Path, extensions: Iterable[str]) -> List[Path]:
    """Recursively list files under root whose suffix is in extensions.

    The suffix match is case-sensitive and includes the leading dot.

    Args:
        root: Directory to walk
        extensions: Allowed suffixes, e.g. (".c", ".cpp")

    Returns:
        File paths in traversal order

    Raises:
        FileSystemError: If root does not exist or cannot be read
    """
    allowed = frozenset(extensions)
    result: List[Path] = []
    _walk_into(root, allowed, result)
    return result


def _walk_into(directory: Path, allowed: frozenset, result: List[Path]) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except FileNotFoundError as e:
        raise FileSystemError(f"directory not found: {directory}") from e
    except NotADirectoryError as e:
        raise FileSystemError(f"not a directory: {directory}") from e
    except PermissionError as e:
        raise FileSystemError(f"directory not readable: {directory}") from e

    for entry in entries:
        path = directory / entry.name
        if entry.is_dir():
            _walk_into(path, allowed, result)
        elif path.suffix in allowed:
            result.append(path)


def scan_sources(src_dir: Path, extensions: Iterable[str] = SOURCE_EXTENSIONS) -> List[SourceFile]:
    """Discover the project's sources.

    Raises:
        FileSystemError: If src_dir is missing or holds no source files
    """
    files = walk(src_dir, extensions)
    if not files:
        raise FileSystemError(f"no src files in {src_dir}")
    return [SourceFile.from_path(f) for f in files]
