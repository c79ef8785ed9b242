"""
Unit tests for the install orchestrator and the install log.
"""

from datetime import datetime

import pytest

from freshbox.install.log import InstallLog
from freshbox.install.models import InstallOutcome, InstallTask, summarize_error
from freshbox.install.orchestrator import Orchestrator, OrchestratorState
from freshbox.installer.exceptions import CommandError


class RecordingListener:
    """Collects progress events in arrival order."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def on_task_started(self, index, total, task):
        self.events.append(("started", index, total, task.name))

    def on_task_finished(self, index, outcome):
        self.events.append(("finished", index, outcome.name, outcome.success))

    def on_install_done(self, outcomes):
        self.events.append(("done", len(outcomes)))


def ok() -> None:
    pass


def fail() -> None:
    raise CommandError("brew", ("install", "nope"), 1, "Error: No available formula with the name \"nope\".")


# =============================================================================
# Orchestrator
# =============================================================================


class TestOrchestrator:
    """Tests for sequential task execution."""

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_queue(self, temp_dir):
        ran: list[str] = []
        queue = [
            InstallTask("first", lambda: ran.append("first")),
            InstallTask("broken", fail),
            InstallTask("third", lambda: ran.append("third")),
        ]
        orchestrator = Orchestrator(queue, InstallLog(temp_dir / "install.log"))

        outcomes = await orchestrator.run()

        assert ran == ["first", "third"]
        assert [o.success for o in outcomes] == [True, False, True]
        assert len(outcomes) == len(queue)
        assert orchestrator.state is OrchestratorState.DONE
        assert [o.name for o in orchestrator.failures] == ["broken"]

    @pytest.mark.asyncio
    async def test_listener_events(self):
        listener = RecordingListener()
        orchestrator = Orchestrator([InstallTask("a", ok), InstallTask("b", fail)])

        await orchestrator.run(listener)

        assert listener.events == [
            ("started", 0, 2, "a"),
            ("finished", 0, "a", True),
            ("started", 1, 2, "b"),
            ("finished", 1, "b", False),
            ("done", 2),
        ]

    @pytest.mark.asyncio
    async def test_empty_queue_finishes(self):
        listener = RecordingListener()
        orchestrator = Orchestrator([])

        outcomes = await orchestrator.run(listener)

        assert outcomes == []
        assert listener.events == [("done", 0)]
        assert orchestrator.progress == 1.0

    @pytest.mark.asyncio
    async def test_single_system_default_task(self):
        calls: list[str] = []
        orchestrator = Orchestrator([InstallTask("Set default editor → Zed", lambda: calls.append("zed"))])

        outcomes = await orchestrator.run()

        assert outcomes == [InstallOutcome("Set default editor → Zed", True)]
        assert calls == ["zed"]

    @pytest.mark.asyncio
    async def test_cannot_run_twice(self):
        orchestrator = Orchestrator([InstallTask("a", ok)])
        await orchestrator.run()
        with pytest.raises(RuntimeError):
            await orchestrator.run()

    @pytest.mark.asyncio
    async def test_listener_without_all_methods(self):
        class DoneOnly:
            finished = False

            def on_install_done(self, outcomes):
                self.finished = True

        listener = DoneOnly()
        await Orchestrator([InstallTask("a", ok)]).run(listener)
        assert listener.finished

    def test_error_summary_is_truncated(self):
        orchestrator = Orchestrator([], error_summary_length=20)
        outcome = orchestrator.execute(InstallTask("broken", fail))

        assert not outcome.success
        assert outcome.error.startswith("brew: exit status 1: Error")
        assert outcome.error_summary == outcome.error[:20] + "..."

    def test_exception_without_message(self):
        def bare() -> None:
            raise RuntimeError()

        outcome = Orchestrator([]).execute(InstallTask("bare", bare))
        assert outcome.error == "RuntimeError"

    def test_history_window(self):
        orchestrator = Orchestrator([InstallTask(str(i), ok) for i in range(15)], history_limit=10)
        orchestrator.start()
        for task in orchestrator.queue[:12]:
            orchestrator.record(orchestrator.execute(task))

        assert orchestrator.hidden_outcomes == 2
        assert [o.name for o in orchestrator.recent_outcomes()] == [str(i) for i in range(2, 12)]
        assert orchestrator.current_task.name == "12"
        assert [t.name for t in orchestrator.upcoming(3)] == ["13", "14"]


class TestSummarizeError:
    """Tests for on-screen error summaries."""

    def test_short_message_unchanged(self):
        assert summarize_error("boom") == "boom"

    def test_whitespace_collapsed(self):
        assert summarize_error("line one\n  line two") == "line one line two"

    def test_long_message_truncated(self):
        assert summarize_error("x" * 100, limit=60) == "x" * 60 + "..."


# =============================================================================
# Install log
# =============================================================================


class TestInstallLog:
    """Tests for the durable install log."""

    WHEN = datetime(2026, 3, 1, 9, 30, 0)

    def test_record_lines(self, temp_dir):
        log = InstallLog(temp_dir / "logs" / "install.log")
        log.write_header(2, self.WHEN)
        log.record(InstallOutcome("Git", True), self.WHEN)
        log.record(InstallOutcome("Go", False, "brew: exit status 1:\n  no formula", "x"), self.WHEN)

        assert log.path.read_text() == (
            "\n"
            "2026-03-01 09:30:00  === freshbox install started (2 tasks) ===\n"
            "2026-03-01 09:30:00  [ OK ] Git\n"
            "2026-03-01 09:30:00  [FAIL] Go\n"
            "       brew: exit status 1:\n"
            "         no formula\n"
        )

    def test_appends_across_runs(self, temp_dir):
        log = InstallLog(temp_dir / "install.log")
        log.record(InstallOutcome("a", True), self.WHEN)
        InstallLog(temp_dir / "install.log").record(InstallOutcome("b", True), self.WHEN)

        assert log.tail(5) == [
            "2026-03-01 09:30:00  [ OK ] a",
            "2026-03-01 09:30:00  [ OK ] b",
        ]

    def test_tail_missing_file(self, temp_dir):
        assert InstallLog(temp_dir / "missing.log").tail() == []

    def test_unwritable_log_does_not_raise(self, temp_dir, caplog):
        blocker = temp_dir / "blocker"
        blocker.write_text("")
        log = InstallLog(blocker / "install.log")

        log.record(InstallOutcome("a", True))
        assert "Cannot write install log" in caplog.text

    @pytest.mark.asyncio
    async def test_orchestrator_writes_one_line_per_task(self, temp_dir):
        log = InstallLog(temp_dir / "install.log")
        queue = [InstallTask("a", ok), InstallTask("b", fail), InstallTask("c", ok)]

        await Orchestrator(queue, log).run()

        lines = log.tail(20)
        assert sum("[ OK ]" in line for line in lines) == 2
        assert sum("[FAIL]" in line for line in lines) == 1
        assert "install started (3 tasks)" in lines[1]

    @pytest.mark.asyncio
    async def test_empty_queue_leaves_log_untouched(self, temp_dir):
        log = InstallLog(temp_dir / "install.log")

        await Orchestrator([], log).run()

        assert not log.path.exists()
