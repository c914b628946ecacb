"""
Exception hierarchy for get-response.
"""

from typing import Optional


class GetResponseError(Exception):
    """Base class for all get-response errors."""


class GenerationError(GetResponseError):
    """The model call failed or returned nothing usable."""


class ContextError(GetResponseError):
    """A file, directory or PDF could not be turned into prompt context."""


class ExecutionError(GetResponseError):
    """A shell command reported a failure."""

    def __init__(self, command: str, message: str, return_code: Optional[int] = None):
        super().__init__(message)
        self.command = command
        self.message = message
        self.return_code = return_code

    def __str__(self) -> str:
        return self.message


class DirectoryChangeError(ExecutionError):
    """A `cd` target does not exist or is not a directory."""

    def __init__(self, command: str, directory: str, message: str):
        super().__init__(command, message)
        self.directory = directory
