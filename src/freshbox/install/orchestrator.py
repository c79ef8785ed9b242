"""
Sequential install orchestrator.

Runs a queue strictly one task at a time. Each blocking action runs in a
worker thread so the UI event loop stays responsive; the next task starts
only after the previous outcome has been logged and recorded. A failing task
never stops the queue.
"""

import asyncio
import logging
from enum import Enum
from typing import Protocol

from freshbox.install.log import InstallLog
from freshbox.install.models import InstallOutcome, InstallTask, summarize_error

logger = logging.getLogger(__name__)


class OrchestratorState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class InstallListener(Protocol):
    """Receives progress events. All methods are optional in practice."""

    def on_task_started(self, index: int, total: int, task: InstallTask) -> None: ...

    def on_task_finished(self, index: int, outcome: InstallOutcome) -> None: ...

    def on_install_done(self, outcomes: list[InstallOutcome]) -> None: ...


class Orchestrator:
    """
    Runs an install queue and keeps its outcomes.

    Attributes:
        queue: Tasks in execution order.
        outcomes: One outcome per finished task, in order.
        state: IDLE, RUNNING or DONE.
    """

    def __init__(
        self,
        queue: list[InstallTask],
        install_log: InstallLog | None = None,
        history_limit: int = 10,
        error_summary_length: int = 60,
        task_delay: float = 0.0,
    ) -> None:
        """
        Args:
            queue: Tasks to run.
            install_log: Durable log; None disables file logging.
            history_limit: Outcomes returned by ``recent_outcomes``.
            error_summary_length: Characters kept in on-screen error summaries.
            task_delay: Pause before each task so the UI can show it starting.
        """
        self.queue = list(queue)
        self.install_log = install_log
        self.history_limit = history_limit
        self.error_summary_length = error_summary_length
        self.task_delay = task_delay

        self.state = OrchestratorState.IDLE
        self.index = 0
        self.outcomes: list[InstallOutcome] = []

    # =========================================================================
    # Progress
    # =========================================================================

    @property
    def total(self) -> int:
        return len(self.queue)

    @property
    def current_task(self) -> InstallTask | None:
        if self.state is OrchestratorState.RUNNING and self.index < self.total:
            return self.queue[self.index]
        return None

    def upcoming(self, count: int = 3) -> list[InstallTask]:
        """Tasks after the current one."""
        return self.queue[self.index + 1 : self.index + 1 + count]

    def recent_outcomes(self) -> list[InstallOutcome]:
        return self.outcomes[-self.history_limit :]

    @property
    def hidden_outcomes(self) -> int:
        """Finished tasks not included in ``recent_outcomes``."""
        return max(len(self.outcomes) - self.history_limit, 0)

    @property
    def failures(self) -> list[InstallOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 1.0
        return len(self.outcomes) / self.total

    # =========================================================================
    # Execution
    # =========================================================================

    def start(self) -> None:
        """IDLE -> RUNNING; writes the run header to the install log unless the queue is empty."""
        if self.state is not OrchestratorState.IDLE:
            raise RuntimeError(f"Cannot start orchestrator in state {self.state.value}")
        self.state = OrchestratorState.RUNNING
        if self.install_log is not None and self.total > 0:
            self.install_log.write_header(self.total)
        logger.info(f"Install run started with {self.total} task(s)")

    def execute(self, task: InstallTask) -> InstallOutcome:
        """Run one task's action and turn the result into an outcome."""
        try:
            task.action()
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.warning(f"Task failed: {task.name}: {message}")
            return InstallOutcome(
                name=task.name,
                success=False,
                error=message,
                error_summary=summarize_error(message, self.error_summary_length),
            )
        logger.info(f"Task succeeded: {task.name}")
        return InstallOutcome(name=task.name, success=True)

    def record(self, outcome: InstallOutcome) -> None:
        """Log and store an outcome, then move to the next task."""
        if self.install_log is not None:
            self.install_log.record(outcome)
        self.outcomes.append(outcome)
        self.index += 1

    def finish(self) -> None:
        self.state = OrchestratorState.DONE
        logger.info(
            f"Install run finished: {len(self.outcomes) - len(self.failures)} ok, "
            f"{len(self.failures)} failed"
        )

    async def run(self, listener: InstallListener | None = None) -> list[InstallOutcome]:
        """
        Run every task in order.

        Args:
            listener: Receives started/finished/done events.

        Returns:
            All outcomes, one per task.
        """
        self.start()

        while self.index < self.total:
            task = self.queue[self.index]
            _notify(listener, "on_task_started", self.index, self.total, task)

            if self.task_delay:
                await asyncio.sleep(self.task_delay)
            outcome = await asyncio.to_thread(self.execute, task)

            index = self.index
            self.record(outcome)
            _notify(listener, "on_task_finished", index, outcome)

        self.finish()
        _notify(listener, "on_install_done", list(self.outcomes))
        return list(self.outcomes)


def _notify(listener: InstallListener | None, event: str, *args) -> None:
    if listener is None:
        return
    handler = getattr(listener, event, None)
    if handler is not None:
        handler(*args)
