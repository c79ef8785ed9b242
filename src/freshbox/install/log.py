"""
Durable install log.

Plain text, one timestamped line per task outcome, appended across runs. The
file is opened and closed for every record so a crash mid-run keeps
everything written so far.
"""

import logging
from collections import deque
from datetime import datetime
from pathlib import Path

from freshbox.install.models import InstallOutcome
from freshbox.storage.paths import get_install_log_path

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
ERROR_INDENT = " " * 7


class InstallLog:
    """Append-only install log file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or get_install_log_path()

    def _append(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            # Losing a log line must not stop the install run.
            logger.warning(f"Cannot write install log {self.path}: {e}")

    def _stamp(self, when: datetime | None = None) -> str:
        return (when or datetime.now()).strftime(TIMESTAMP_FORMAT)

    def write_header(self, total: int, when: datetime | None = None) -> None:
        self._append(f"\n{self._stamp(when)}  === freshbox install started ({total} tasks) ===\n")

    def record(self, outcome: InstallOutcome, when: datetime | None = None) -> None:
        """Append one outcome; failures get the full error, each line indented."""
        if outcome.success:
            line = f"{self._stamp(when)}  [ OK ] {outcome.name}\n"
        else:
            line = f"{self._stamp(when)}  [FAIL] {outcome.name}\n"
            error_lines = [text.rstrip() for text in (outcome.error or "").strip().splitlines()]
            for text in error_lines:
                line += f"{ERROR_INDENT}{text}\n" if text else "\n"
        self._append(line)

    def tail(self, lines: int = 20) -> list[str]:
        """Return the last ``lines`` lines of the log (empty if missing)."""
        try:
            with open(self.path, encoding="utf-8") as f:
                return [line.rstrip("\n") for line in deque(f, maxlen=lines)]
        except FileNotFoundError:
            return []
