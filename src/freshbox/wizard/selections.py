"""
Selection values collected by the wizard.

A ``SelectionSet`` is immutable: toggling returns a new set. ``Selections``
bundles one set per category with the AI tool config values, and is what the
install queue is built from.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from freshbox.config.schema import ClaudeConfig, CodexConfig


class SystemDefault(str, Enum):
    """macOS default-handler toggles."""

    BROWSER_CHROME = "browser_chrome"
    EDITOR_ZED = "editor_zed"
    PLAYER_IINA = "player_iina"


class Extra(str, Enum):
    """Optional extra setup steps."""

    ZED_THEME = "zed_theme"
    KAKU_INIT = "kaku_init"
    KARABINER_KAKU = "karabiner_kaku"
    DEV_WORKSPACE = "dev_workspace"


def _key(value: str | Enum) -> str:
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class SelectionSet:
    """Selected keys of one category. Absent keys are unselected."""

    keys: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", frozenset(_key(k) for k in self.keys))

    @classmethod
    def of(cls, *keys: str | Enum) -> "SelectionSet":
        return cls(frozenset(_key(k) for k in keys))

    def __contains__(self, key: object) -> bool:
        if isinstance(key, Enum):
            key = key.value
        return key in self.keys

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.keys))

    def __len__(self) -> int:
        return len(self.keys)

    def toggle(self, key: str | Enum) -> "SelectionSet":
        key = _key(key)
        if key in self.keys:
            return SelectionSet(self.keys - {key})
        return SelectionSet(self.keys | {key})

    def select(self, keys: Iterable[str | Enum]) -> "SelectionSet":
        return SelectionSet(self.keys | {_key(k) for k in keys})

    def deselect(self, keys: Iterable[str | Enum]) -> "SelectionSet":
        return SelectionSet(self.keys - {_key(k) for k in keys})

    def ordered(self, candidates: Iterable[str | Enum]) -> list[str]:
        """Selected keys in the order given by ``candidates``."""
        return [_key(c) for c in candidates if _key(c) in self.keys]


@dataclass(frozen=True)
class Selections:
    """Snapshot of everything the user chose, passed by value to the queue builder."""

    tools: SelectionSet = field(default_factory=SelectionSet)
    apps: SelectionSet = field(default_factory=SelectionSet)
    ai_tools: SelectionSet = field(default_factory=SelectionSet)
    node_versions: SelectionSet = field(default_factory=SelectionSet)
    mcp_servers: SelectionSet = field(default_factory=SelectionSet)
    system_defaults: SelectionSet = field(default_factory=SelectionSet)
    extras: SelectionSet = field(default_factory=SelectionSet)
    codex: CodexConfig = field(default_factory=CodexConfig)
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
