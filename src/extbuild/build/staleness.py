"""Object file mapping and mtime-based staleness.

Every source under src/ maps to exactly one object under the build cache:

    <project>/src/net/socket.cc  ->  <project>/.build/net/socket.cc.o

The source suffix is kept so that foo.c and foo.cpp never share an object.
"""

import logging
from pathlib import Path

from .source_scanner import OBJECT_EXTENSION

logger = logging.getLogger(__name__)


def object_path_for(source: Path, src_dir: Path, build_cache_dir: Path) -> Path:
    """Derive the object path for a source file.

    Raises:
        ValueError: If source is not inside src_dir
    """
    relative = source.relative_to(src_dir)
    return build_cache_dir / relative.parent / f"{relative.name}{OBJECT_EXTENSION}"


def ensure_object_dir(object_path: Path) -> None:
    object_path.parent.mkdir(parents=True, exist_ok=True)


def needs_compile(source: Path, object_path: Path) -> bool:
    """Return False only when the object exists and is at least as new as the source.

    Headers included by the source are not considered.
    """
    try:
        object_mtime = object_path.stat().st_mtime
    except FileNotFoundError:
        return True
    if not object_path.is_file():
        return True
    return source.stat().st_mtime > object_mtime
