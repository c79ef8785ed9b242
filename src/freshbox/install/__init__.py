"""Install queue, orchestrator and durable log."""

from freshbox.install.log import InstallLog
from freshbox.install.models import InstallOutcome, InstallTask
from freshbox.install.orchestrator import InstallListener, Orchestrator, OrchestratorState
from freshbox.install.queue import build_queue

__all__ = [
    "InstallListener",
    "InstallLog",
    "InstallOutcome",
    "InstallTask",
    "Orchestrator",
    "OrchestratorState",
    "build_queue",
]
