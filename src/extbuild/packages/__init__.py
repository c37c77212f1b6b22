"""External collaborators: the host runtime probe and the package resolver."""

from .host_runtime import HostRuntimeError, HostRuntimeInfo, HostRuntimeProbe
from .pkg_config import PackageFlags, PackageNotFoundError, PackageResolver

__all__ = [
    "HostRuntimeError",
    "HostRuntimeInfo",
    "HostRuntimeProbe",
    "PackageFlags",
    "PackageNotFoundError",
    "PackageResolver",
]
