"""
Text forms for the Codex and Claude Code config pages.
"""

from dataclasses import dataclass, field

from freshbox.config.schema import ClaudeConfig, CodexConfig

CODEX_DEFAULTS = CodexConfig(
    model="o4-mini",
    thinking_level="medium",
    base_url="https://api.openai.com/v1",
    api_key="",
)

CLAUDE_DEFAULTS = ClaudeConfig(
    model="claude-sonnet-4-6",
    base_url="https://api.anthropic.com",
    api_key="",
)

MASK_CHAR = "•"


@dataclass
class ConfigField:
    """One labelled text field.

    Attributes:
        key: Name of the config attribute the value is written to.
        label: Text table key for the field label.
        placeholder: Hint shown while empty.
        value: Current value.
        secret: Never render the value in plain text.
    """

    key: str
    label: str
    placeholder: str
    value: str = ""
    secret: bool = False

    def display(self) -> str:
        if self.secret:
            return MASK_CHAR * len(self.value)
        return self.value


@dataclass
class ConfigForm:
    """Ordered fields with one focused field."""

    fields: list[ConfigField] = field(default_factory=list)
    focus: int = 0

    def focus_next(self) -> None:
        if self.fields:
            self.focus = (self.focus + 1) % len(self.fields)

    def focus_previous(self) -> None:
        if self.fields:
            self.focus = (self.focus - 1) % len(self.fields)

    @property
    def on_last_field(self) -> bool:
        return self.focus == len(self.fields) - 1

    def set_value(self, key: str, value: str) -> None:
        for f in self.fields:
            if f.key == key:
                f.value = value
                return
        raise KeyError(key)

    def values(self) -> dict[str, str]:
        return {f.key: f.value.strip() for f in self.fields}


def _prefill(current: str, default: str) -> str:
    return current if current else default


def codex_form(current: CodexConfig | None = None) -> ConfigForm:
    """Build the Codex form, prefilled from earlier answers or defaults."""
    current = current or CodexConfig()
    return ConfigForm(
        [
            ConfigField(
                "model", "cfg_model", "Model (e.g. o4-mini)",
                _prefill(current.model, CODEX_DEFAULTS.model),
            ),
            ConfigField(
                "thinking_level", "cfg_think_level", "Thinking level (low/medium/high)",
                _prefill(current.thinking_level, CODEX_DEFAULTS.thinking_level),
            ),
            ConfigField(
                "base_url", "cfg_base_url", "Base URL",
                _prefill(current.base_url, CODEX_DEFAULTS.base_url),
            ),
            ConfigField("api_key", "cfg_api_key", "API Key", current.api_key, secret=True),
        ]
    )


def claude_form(current: ClaudeConfig | None = None) -> ConfigForm:
    """Build the Claude Code form, prefilled from earlier answers or defaults."""
    current = current or ClaudeConfig()
    return ConfigForm(
        [
            ConfigField(
                "model", "cfg_model", "Model (e.g. claude-sonnet-4-6)",
                _prefill(current.model, CLAUDE_DEFAULTS.model),
            ),
            ConfigField(
                "base_url", "cfg_base_url", "Base URL",
                _prefill(current.base_url, CLAUDE_DEFAULTS.base_url),
            ),
            ConfigField("api_key", "cfg_api_key", "API Key", current.api_key, secret=True),
        ]
    )
