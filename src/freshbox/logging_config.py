"""Centralized logging configuration for freshbox."""

import logging
import logging.handlers
from pathlib import Path

from freshbox.config.schema import LoggingSettings
from freshbox.storage.paths import get_app_log_path


def _file_handler(log_path: Path, cfg: LoggingSettings, level: int) -> logging.Handler:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    h = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=cfg.max_bytes, backupCount=cfg.backup_count, encoding="utf-8"
    )
    h.setLevel(level)
    return h


def _console_handler(level: int) -> logging.Handler:
    h = logging.StreamHandler()
    h.setLevel(level)
    return h


def setup_logging(cfg: LoggingSettings | None = None, log_path: Path | None = None) -> None:
    """Configure the root logger: file handler with optional console output.

    Logs only to file by default; the TUI owns the terminal.
    """
    cfg = cfg or LoggingSettings()
    level = getattr(logging, cfg.level.upper(), logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    root = logging.getLogger()
    root.setLevel(level)
    for h in root.handlers[:]:
        root.removeHandler(h)
    file_handler = _file_handler(log_path or get_app_log_path(), cfg, level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
    if cfg.log_to_console:
        console_handler = _console_handler(level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
