"""
freshbox - macOS setup wizard

Walks through dev tools, apps, AI CLIs, MCP servers and system defaults,
then installs and configures everything in one sequential pass.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("freshbox")
except PackageNotFoundError:
    __version__ = "0.3.0"

__all__ = [
    "__version__",
]
