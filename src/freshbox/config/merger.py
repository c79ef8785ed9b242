"""
Structural config merging for freshbox.

Two families of merge live here:

- Line-oriented merges for TOML-like files (``~/.codex/config.toml``). These
  work on raw lines so comments, ordering and sections written by the user or
  by the tool itself survive untouched.
- Nested document merges for JSON-like trees (``~/.claude/settings.json``,
  freshbox's own YAML settings).
"""

import copy
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


# =============================================================================
# Line-oriented documents
# =============================================================================


@dataclass(frozen=True)
class SectionRewrite:
    """Replacement block for one named section.

    Attributes:
        name: Section name without brackets, e.g. ``model_providers.freshbox``.
        body: Body lines written below the header.
    """

    name: str
    body: tuple[str, ...] = ()

    @property
    def header(self) -> str:
        return f"[{self.name}]"

    def render(self) -> list[str]:
        return [self.header, *self.body]


def split_lines(text: str) -> list[str]:
    """Split document text into raw lines (no trailing empty line)."""
    if not text:
        return []
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def render_lines(lines: list[str]) -> str:
    """Join merged lines into file content ending with one newline."""
    return "\n".join(lines) + "\n"


def is_section_header(line: str) -> bool:
    return line.strip().startswith("[")


def section_name(line: str) -> str:
    """Return the name inside a ``[name]`` header line."""
    stripped = line.strip()
    if stripped.startswith("[") and stripped.endswith("]"):
        return stripped[1:-1].strip()
    return stripped.lstrip("[")


def line_sets_key(line: str, key: str) -> bool:
    """Check whether a line assigns ``key`` (``key = ...`` or ``key=...``)."""
    stripped = line.strip()
    return stripped.startswith(key + " ") or stripped.startswith(key + "=")


def render_assignment(key: str, value: str) -> str:
    """Render a quoted string assignment line."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'{key} = "{escaped}"'


def _normalize(lines: list[str]) -> list[str]:
    """Collapse blank-line runs and trim the document."""
    collapsed: list[str] = []
    for line in lines:
        if not line.strip():
            if collapsed and collapsed[-1] == "":
                continue
            collapsed.append("")
        else:
            collapsed.append(line)

    text = "\n".join(collapsed).strip()
    return text.split("\n") if text else []


def merge_line_config(
    lines: list[str],
    updates: dict[str, str],
    section_rewrite: SectionRewrite | None = None,
) -> list[str]:
    """
    Merge top-level key updates (and optionally one section) into a document.

    Merge rules:
    - A top-level line (before the first section header) assigning a key in
      ``updates`` is replaced with the rendered update.
    - Lines inside sections are never touched, even if they use the same key.
    - If ``section_rewrite`` is given, any existing block for that section is
      removed and the replacement block is appended at the end.
    - Keys that were not found are prepended, in ``updates`` order.
    - Blank-line runs collapse to one and the document is trimmed.

    Applying the same merge twice yields the same lines as applying it once.

    Args:
        lines: Existing document lines.
        updates: Top-level key to value (rendered as quoted strings).
        section_rewrite: Optional section to replace wholesale.

    Returns:
        Merged document lines. Use ``render_lines`` to get file content.

    Examples:
        >>> merge_line_config(['model = "a"', "[x]", 'model = "b"'], {"model": "c"})
        ['model = "c"', '[x]', 'model = "b"']
    """
    applied: set[str] = set()
    merged: list[str] = []
    inside_any_section = False

    for line in lines:
        if is_section_header(line):
            inside_any_section = True
        if not inside_any_section:
            for key, value in updates.items():
                if line_sets_key(line, key):
                    line = render_assignment(key, value)
                    applied.add(key)
                    break
        merged.append(line)

    if section_rewrite is not None:
        merged = _drop_section(merged, section_rewrite.name)
        merged.append("")
        merged.extend(section_rewrite.render())

    missing = [render_assignment(k, v) for k, v in updates.items() if k not in applied]
    if missing:
        merged = missing + merged

    return _normalize(merged)


def _drop_section(lines: list[str], name: str) -> list[str]:
    """Remove every block whose header names exactly ``name``."""
    result: list[str] = []
    skipping = False
    for line in lines:
        if is_section_header(line):
            skipping = section_name(line) == name
        if not skipping:
            result.append(line)
    return result


def ensure_section_key(lines: list[str], section_prefix: str, key_line: str) -> list[str]:
    """
    Make sure every section whose name starts with a prefix sets a key.

    The key line is inserted directly after the header of each matching
    section unless that section's body already assigns the key. Calling this
    repeatedly never duplicates the key.

    Args:
        lines: Existing document lines.
        section_prefix: Section name prefix, e.g. ``mcp_servers.``.
        key_line: Full assignment line, e.g. ``startup_timeout_sec = 60``.

    Returns:
        New document lines.
    """
    key = key_line.split("=", 1)[0].strip()
    result: list[str] = []

    for index, line in enumerate(lines):
        result.append(line)
        if not is_section_header(line) or not section_name(line).startswith(section_prefix):
            continue

        present = False
        for body_line in lines[index + 1 :]:
            if is_section_header(body_line):
                break
            if line_sets_key(body_line, key):
                present = True
                break
        if not present:
            result.append(key_line)

    return result


# =============================================================================
# Nested documents
# =============================================================================


@dataclass(frozen=True)
class DocumentPatch:
    """Targeted update for a nested document.

    Attributes:
        fields: Top-level scalar fields; empty values are ignored.
        map_field: Name of a top-level map merged key by key.
        map_entries: Entries merged into ``map_field``; empty values are ignored.
    """

    fields: dict[str, str] = field(default_factory=dict)
    map_field: str | None = None
    map_entries: dict[str, str] = field(default_factory=dict)


def parse_document(text: str) -> dict[str, Any]:
    """
    Parse an existing JSON document for merging.

    Unparseable input and non-object roots are treated as an empty document.
    """
    if not text.strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.debug(f"Existing document is not valid JSON, starting empty: {e}")
        return {}
    if not isinstance(data, dict):
        logger.debug("Existing document root is not an object, starting empty")
        return {}
    return data


def strip_json_comments(text: str) -> str:
    """Remove ``//`` line comments and trailing commas from JSON-with-comments."""
    text = re.sub(r"^\s*//.*$", "", text, flags=re.MULTILINE)
    text = re.sub(r"(?<=[\]}\"\d\w])\s*//[^\"\n]*$", "", text, flags=re.MULTILINE)
    return re.sub(r",(\s*[}\]])", r"\1", text)


def dump_document(document: dict[str, Any], indent: int = 2) -> str:
    """Serialize a document with a trailing newline."""
    return json.dumps(document, indent=indent, ensure_ascii=False) + "\n"


def merge_document(existing: dict[str, Any], patch: DocumentPatch) -> dict[str, Any]:
    """
    Apply a targeted patch to a nested document.

    Merge rules:
    - Non-empty scalar fields overwrite the top-level key.
    - Empty fields leave the existing value alone.
    - The map field keeps every existing entry; non-empty patch entries
      overwrite or add. The merged map is stored only if it is non-empty.
    - Keys not targeted by the patch are preserved unchanged.

    Args:
        existing: Current document (not modified).
        patch: Fields and map entries to apply.

    Returns:
        The merged document.

    Examples:
        >>> merge_document({}, DocumentPatch({"model": "x"}, "env", {"K": "v"}))
        {'model': 'x', 'env': {'K': 'v'}}
    """
    result = copy.deepcopy(existing)

    for key, value in patch.fields.items():
        if value:
            result[key] = value

    if patch.map_field:
        current = result.get(patch.map_field)
        merged_map = dict(current) if isinstance(current, dict) else {}
        for key, value in patch.map_entries.items():
            if value:
                merged_map[key] = value
        if merged_map:
            result[patch.map_field] = merged_map

    return result


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Merge rules:
    - Scalar values and lists: override replaces base
    - Dicts: recursive deep merge
    - null/None value: remove key from result

    Args:
        base: Base dictionary.
        override: Override dictionary.

    Returns:
        Merged dictionary.
    """
    result = base.copy()

    for key, value in override.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def get_nested_value(config: dict[str, Any], key_path: str, default: Any = None) -> Any:
    """
    Get a nested value from a dictionary.

    Args:
        config: Dictionary to read.
        key_path: Dot-separated key path (e.g., "install.history_limit").
        default: Returned when the path does not exist.

    Returns:
        The value at the key path, or ``default`` if not found.
    """
    current: Any = config
    for key in key_path.split("."):
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default
    return current


def set_nested_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    """
    Set a nested value in a dictionary, creating intermediate dicts.

    Args:
        config: Dictionary to modify.
        key_path: Dot-separated key path (e.g., "wizard.language").
        value: Value to set.

    Returns:
        Modified dictionary.
    """
    keys = key_path.split(".")
    current = config

    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value
    return config
