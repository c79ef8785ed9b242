"""
Process invocation for freshbox.

All external programs (brew, npm, fnm, git, defaults, ...) are run through
``run_command`` so callers get one result shape and tests can substitute a
fake runner.
"""

import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from freshbox.installer.exceptions import CommandError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of running an external command."""

    success: bool
    output: str = ""
    exit_code: int | None = None


CommandRunner = Callable[..., CommandResult]


def run_command(
    program: str,
    *args: str,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """
    Run a program and capture its combined stdout and stderr.

    Args:
        program: Executable name or path.
        *args: Arguments passed to the program.
        cwd: Working directory.
        env: Full environment for the child process (None inherits).

    Returns:
        CommandResult; a program that cannot be started yields success=False
        with the OS error as output.
    """
    logger.debug(f"Running: {program} {' '.join(args)}")
    try:
        completed = subprocess.run(
            [program, *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
            cwd=cwd,
            env=env,
        )
    except OSError as e:
        logger.debug(f"Could not start {program}: {e}")
        return CommandResult(success=False, output=str(e))

    return CommandResult(
        success=completed.returncode == 0,
        output=(completed.stdout or "").strip(),
        exit_code=completed.returncode,
    )


def run_checked(program: str, *args: str, runner: CommandRunner | None = None, **kwargs) -> str:
    """
    Run a program and raise if it fails.

    Returns:
        The command's trimmed output.

    Raises:
        CommandError: If the program exits non-zero or cannot be started.
    """
    result = (runner or run_command)(program, *args, **kwargs)
    if not result.success:
        raise CommandError(program, args, result.exit_code, result.output)
    return result.output
