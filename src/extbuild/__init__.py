"""extbuild - incremental builder for native host-runtime extensions and binaries."""

__version__ = "0.1.0"
