"""
Install exceptions for freshbox.

Every install task action signals failure by raising one of these; the
orchestrator records the message and moves on to the next task.
"""


class InstallError(Exception):
    """Base exception for install and configuration failures."""

    pass


class CommandError(InstallError):
    """An external command exited unsuccessfully or could not be started."""

    def __init__(
        self,
        program: str,
        args: tuple[str, ...] = (),
        exit_code: int | None = None,
        output: str = "",
    ):
        self.program = program
        self.args_ = args
        self.exit_code = exit_code
        self.output = output
        status = f"exit status {exit_code}" if exit_code is not None else "could not start"
        message = f"{program}: {status}"
        if output:
            message = f"{message}: {output}"
        super().__init__(message)


class ConfigWriteError(InstallError):
    """A config file could not be read back or written."""

    pass


class McpRegistrationError(InstallError):
    """One or more MCP servers could not be registered."""

    def __init__(self, message: str, failed_servers: list[str]):
        super().__init__(message)
        self.failed_servers = failed_servers


class SetupError(InstallError):
    """An optional extra setup step failed."""

    pass
