"""
Catalog of everything the wizard can install.
"""

from dataclasses import dataclass, field

from freshbox.config.mcp import available_mcp_servers
from freshbox.config.schema import MCPServer

# Item names referenced by wizard guards and queue building.
HOMEBREW = "Homebrew"
JAVA = "Java (JDK)"
FNM = "fnm"
RUST = "Rust (rustup)"
CODEX = "Codex"
CLAUDE_CODE = "Claude Code"


@dataclass(frozen=True)
class CatalogItem:
    """
    One installable tool or app.

    Attributes:
        name: Display name and selection key.
        description: One-line description.
        command: Binary probed on the search path (or an absolute path).
        version_flag: Flag printing the version; empty to skip the query.
        category: ``dev``, ``app`` or ``ai``.
        brew_name: Homebrew formula or cask; empty if not installed via brew.
        cask: Install with ``brew install --cask``.
        app_bundle: ``/Applications/*.app`` path probed before the command.
    """

    name: str
    description: str
    command: str
    version_flag: str = "--version"
    category: str = "dev"
    brew_name: str = ""
    cask: bool = False
    app_bundle: str | None = None


def dev_tools() -> list[CatalogItem]:
    return [
        CatalogItem(HOMEBREW, "macOS package manager", "brew"),
        CatalogItem("Git", "Distributed version control system", "git", brew_name="git"),
        CatalogItem(JAVA, "Java development kit for JVM-based development", "java", brew_name="openjdk"),
        CatalogItem("Maven", "Java project build and dependency management", "mvn", brew_name="maven"),
        CatalogItem("Gradle", "Flexible build automation tool for JVM projects", "gradle", brew_name="gradle"),
        CatalogItem("Python", "General-purpose programming language", "python3", brew_name="python"),
        CatalogItem("uv", "Ultra-fast Python package manager by Astral", "uv", brew_name="uv"),
        CatalogItem(FNM, "Fast Node.js version manager written in Rust", "fnm", brew_name="fnm"),
        CatalogItem("pnpm", "Fast, disk-efficient package manager for Node.js", "pnpm", brew_name="pnpm"),
        CatalogItem("Bun", "All-in-one JavaScript runtime, bundler, and package manager", "bun", brew_name="bun"),
        CatalogItem(RUST, "Systems programming language with memory safety", "rustup", brew_name="rustup"),
        CatalogItem("Go", "Statically typed language by Google for scalable systems", "go", "version", brew_name="go"),
    ]


def apps() -> list[CatalogItem]:
    return [
        CatalogItem(
            "Google Chrome", "Web browser by Google",
            "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
            category="app", brew_name="google-chrome", cask=True,
            app_bundle="/Applications/Google Chrome.app",
        ),
        CatalogItem(
            "Zed", "High-performance code editor by the Atom creators",
            "/Applications/Zed.app/Contents/MacOS/cli",
            category="app", brew_name="zed", cask=True, app_bundle="/Applications/Zed.app",
        ),
        CatalogItem(
            "IINA", "Modern media player for macOS",
            "/Applications/IINA.app/Contents/MacOS/IINA", "",
            category="app", brew_name="iina", cask=True, app_bundle="/Applications/IINA.app",
        ),
        CatalogItem(
            "Kaku", "Lightweight terminal app built on WezTerm by tw93", "kaku",
            category="app", brew_name="tw93/tap/kakuku", cask=True,
            app_bundle="/Applications/Kaku.app",
        ),
        CatalogItem(
            "Karabiner-Elements", "Powerful keyboard customizer for macOS",
            "/Applications/Karabiner-Elements.app/Contents/MacOS/Karabiner-Elements", "",
            category="app", brew_name="karabiner-elements", cask=True,
            app_bundle="/Applications/Karabiner-Elements.app",
        ),
        CatalogItem(
            "Mole", "macOS system cleaner to free up disk space by tw93", "mo", "",
            category="app", brew_name="tw93/tap/mole",
        ),
        CatalogItem(
            "Tabby", "Modern open-source terminal with SSH and serial support",
            "/Applications/Tabby.app/Contents/MacOS/Tabby", "",
            category="app", brew_name="tabby", cask=True, app_bundle="/Applications/Tabby.app",
        ),
    ]


def ai_tools() -> list[CatalogItem]:
    return [
        CatalogItem(CODEX, "OpenAI's AI coding assistant CLI", "codex", category="ai"),
        CatalogItem(CLAUDE_CODE, "Anthropic's AI coding assistant CLI", "claude", category="ai"),
    ]


@dataclass(frozen=True)
class Catalog:
    """Everything offered by the wizard, grouped by page."""

    dev_tools: tuple[CatalogItem, ...] = field(default_factory=lambda: tuple(dev_tools()))
    apps: tuple[CatalogItem, ...] = field(default_factory=lambda: tuple(apps()))
    ai_tools: tuple[CatalogItem, ...] = field(default_factory=lambda: tuple(ai_tools()))
    mcp_servers: tuple[MCPServer, ...] = field(
        default_factory=lambda: tuple(available_mcp_servers())
    )

    @property
    def items(self) -> tuple[CatalogItem, ...]:
        """All probeable items."""
        return self.dev_tools + self.apps + self.ai_tools

    def find(self, name: str) -> CatalogItem | None:
        for item in self.items:
            if item.name == name:
                return item
        return None
