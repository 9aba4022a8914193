from typing import List, Optional


class HotspotError(RuntimeError):
    """Base for every failure that should abort the run with a message."""

    exit_code = 1


class ConfigurationError(HotspotError):
    pass


class HostEnvironmentError(HotspotError):
    pass


class ProcessError(HotspotError):
    pass


class CommandError(ProcessError):
    def __init__(self, message: str, cmd: Optional[List[str]] = None, rc: Optional[int] = None, output: str = ""):
        super().__init__(message)
        self.cmd = list(cmd or [])
        self.rc = rc
        self.output = output
