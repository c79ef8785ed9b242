"""
Install task model.
"""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class InstallTask:
    """
    One unit of install or configuration work.

    Attributes:
        name: Display name, also used in the install log.
        action: Performs the work; raises on failure.
    """

    name: str
    action: Callable[[], object]


@dataclass(frozen=True)
class InstallOutcome:
    """
    Result of running one task.

    Attributes:
        name: Task name.
        success: Whether the action completed without raising.
        error: Full error text (written to the install log).
        error_summary: Shortened error text for the progress view.
    """

    name: str
    success: bool
    error: str | None = None
    error_summary: str | None = None


def summarize_error(message: str, limit: int = 60) -> str:
    """Collapse an error to one line of at most ``limit`` characters plus an ellipsis."""
    summary = " ".join(message.split())
    if len(summary) > limit:
        return summary[:limit] + "..."
    return summary
