"""Exception hierarchy for extbuild.

Configuration and filesystem errors are fatal and abort the run before any
compilation. Toolchain errors are reported by the orchestrator as boolean
failures and recorded, not raised.
"""


class ExtBuildError(Exception):
    """Base class for all extbuild errors."""

    pass


class ConfigError(ExtBuildError):
    """Raised when the project descriptor or host configuration is unusable."""

    pass


class FileSystemError(ExtBuildError):
    """Raised when the project layout is missing or has no sources."""

    pass


class ToolchainError(ExtBuildError):
    """A compile or link invocation exited with a non-zero status."""

    pass
