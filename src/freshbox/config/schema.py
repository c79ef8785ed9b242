"""
Pydantic models for freshbox.

``Settings`` is freshbox's own configuration (``~/.freshbox/config.yaml``).
``CodexConfig``, ``ClaudeConfig`` and ``MCPServer`` describe what freshbox
writes into the AI tools' config files.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Settings
# =============================================================================


class LoggingSettings(BaseModel):
    """Diagnostic logging (not the install log)."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_to_console: bool = False
    max_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    backup_count: int = Field(default=3, ge=0)


class InstallSettings(BaseModel):
    """Install run behaviour and progress view sizing."""

    history_limit: int = Field(default=10, ge=1)
    error_summary_length: int = Field(default=60, ge=10)
    upcoming_preview: int = Field(default=3, ge=0)
    task_delay: float = Field(default=0.08, ge=0.0)
    mcp_startup_timeout: int = Field(default=60, gt=0)


class WizardSettings(BaseModel):
    """Wizard defaults."""

    language: Literal["en", "zh"] | None = None
    preselect: bool = True
    preselect_mcp_count: int = Field(default=4, ge=0)
    node_version_limit: int = Field(default=30, ge=1)


class Settings(BaseModel):
    """Root settings model."""

    model_config = ConfigDict(extra="ignore")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    install: InstallSettings = Field(default_factory=InstallSettings)
    wizard: WizardSettings = Field(default_factory=WizardSettings)


# =============================================================================
# AI tool configuration
# =============================================================================


class CodexConfig(BaseModel):
    """Values collected on the Codex config page."""

    model_config = ConfigDict(frozen=True)

    model: str = ""
    thinking_level: str = ""
    base_url: str = ""
    api_key: str = ""

    def is_configured(self) -> bool:
        """A Codex config write is only queued once a key or URL is known."""
        return bool(self.api_key or self.base_url)


class ClaudeConfig(BaseModel):
    """Values collected on the Claude Code config page."""

    model_config = ConfigDict(frozen=True)

    model: str = ""
    base_url: str = ""
    api_key: str = ""

    def is_configured(self) -> bool:
        return bool(self.api_key or self.base_url)


class MCPServer(BaseModel):
    """An MCP server launched through a command line."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    command: str = "npx"
    args: tuple[str, ...] = ()

    @property
    def package(self) -> str | None:
        """npm package specifier for npx-launched servers (e.g. ``@scope/pkg@latest``)."""
        if self.command != "npx":
            return None
        for arg in self.args:
            if not arg.startswith("-"):
                return arg
        return None
