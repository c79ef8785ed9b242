"""
MCP server catalog.

All servers are launched through ``npx -y <package>@latest``.
"""

from pathlib import Path

from freshbox.config.schema import MCPServer


def _npx(name: str, package: str, description: str, *extra: str) -> MCPServer:
    return MCPServer(
        name=name,
        description=description,
        command="npx",
        args=("-y", f"{package}@latest", *extra),
    )


def available_mcp_servers(home: Path | None = None) -> list[MCPServer]:
    """
    Return the MCP servers offered by the wizard, in display order.

    Args:
        home: Root directory exposed to the Filesystem server. Defaults to ~.
    """
    home = home or Path.home()
    return [
        _npx("Playwright", "@playwright/mcp", "Browser automation", "--headless"),
        _npx("Context7", "@upstash/context7-mcp", "Up-to-date library docs"),
        _npx(
            "Filesystem",
            "@modelcontextprotocol/server-filesystem",
            "Read and write local files",
            str(home),
        ),
        _npx("GitHub", "@modelcontextprotocol/server-github", "GitHub repositories and issues"),
        _npx("Memory", "@modelcontextprotocol/server-memory", "Persistent knowledge graph"),
        _npx(
            "Sequential Thinking",
            "@modelcontextprotocol/server-sequential-thinking",
            "Step-by-step reasoning",
        ),
        _npx("Fetch", "@modelcontextprotocol/server-fetch", "Fetch web content"),
        _npx("Brave Search", "@modelcontextprotocol/server-brave-search", "Web search via Brave"),
        _npx("Slack", "@modelcontextprotocol/server-slack", "Slack workspace access"),
        _npx("Google Maps", "@modelcontextprotocol/server-google-maps", "Places and directions"),
        _npx("SQLite", "@modelcontextprotocol/server-sqlite", "Query SQLite databases"),
    ]
