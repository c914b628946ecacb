"""
Command approval pipeline for terminal mode.

The model answers a terminal-mode prompt with one shell command per line.
Each command is shown to the user, who decides to execute it, skip it or
abort the whole sequence. Commands run strictly one after another; an abort
or any execution failure stops everything that is still queued.
"""

import os
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger
from rich.console import Console
from rich.markup import escape

from get_response.core.errors import DirectoryChangeError, ExecutionError
from get_response.core.status import StatusReporter

CD_PREFIX = "cd "

EXECUTE_ANSWERS = {"yes", "y"}
SKIP_ANSWERS = {"skip", "s"}


class CommandDecision(Enum):
    EXECUTE = "execute"
    SKIP = "skip"
    ABORT = "abort"


def parse_decision(answer: str) -> CommandDecision:
    """
    Classify a free-text answer.

    Matching is case-insensitive and exact. Every answer that is not an
    accepted execute or skip token aborts, including empty input.
    """
    normalized = answer.lower()
    if normalized in EXECUTE_ANSWERS:
        return CommandDecision.EXECUTE
    if normalized in SKIP_ANSWERS:
        return CommandDecision.SKIP
    return CommandDecision.ABORT


def split_commands(text: str) -> Tuple[str, ...]:
    """Split model output into the command queue. Blank lines are kept."""
    return tuple(text.split("\n"))


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of running one command."""
    success: bool
    output: str = ""
    error: Optional[ExecutionError] = None
    directory: Optional[Path] = None  # set for directory changes

    @classmethod
    def ok(cls, output: str = "", directory: Optional[Path] = None) -> "ExecutionResult":
        return cls(success=True, output=output, directory=directory)

    @classmethod
    def failed(cls, error: ExecutionError) -> "ExecutionResult":
        return cls(success=False, error=error)


class PipelineOutcome(Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass
class PipelineReport:
    """What happened to a command queue."""
    outcome: PipelineOutcome = PipelineOutcome.COMPLETED
    executed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed_command: Optional[str] = None
    error: Optional[str] = None
    working_directory: Optional[Path] = None


class CommandPipeline:
    """
    Runs a command queue through the execute / skip / abort protocol.

    The working directory is pipeline state: ``cd`` commands update
    ``working_directory`` and every later command runs there. The process
    working directory is left untouched.

    Usage:
        pipeline = CommandPipeline(console=console)
        report = pipeline.run(split_commands(model_output))
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        ask: Optional[Callable[[str], str]] = None,
        working_directory: Optional[Path] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            console: Rich console for prompts and reports
            ask: Blocking prompt returning the user's answer (defaults to console input)
            working_directory: Where commands start; defaults to the process cwd
            timeout: Seconds before a command is killed; None waits forever
        """
        self.console = console or Console()
        self.status = StatusReporter(self.console)
        self.ask = ask or self._prompt
        self.working_directory = Path(working_directory or Path.cwd()).resolve()
        self.timeout = timeout

    def _prompt(self, question: str) -> str:
        return self.console.input(question)

    def print_legend(self) -> None:
        self.console.print(
            "[italic]Enter [green]yes / y[/green] to execute a particular command.\n"
            "Enter [magenta]skip / s[/magenta] to skip a command and move to the next one.\n"
            "Enter [red]no / n[/red] to terminate the process of command execution.[/italic]"
        )

    def _question(self, command: str) -> str:
        return (
            f"[blue]Do you want to execute the command[/blue] \"{escape(command)}\"? "
            "([green]yes[/green]/[magenta]skip[/magenta]/[red]no[/red]) "
        )

    def run(self, commands: Sequence[str]) -> PipelineReport:
        """
        Ask about and process each command in order.

        Args:
            commands: The command queue; consumed strictly in order

        Returns:
            PipelineReport describing how the queue ended
        """
        queue = tuple(commands)
        report = PipelineReport()
        self.print_legend()

        for command in queue:
            decision = parse_decision(self.ask(self._question(command)))

            if decision is CommandDecision.ABORT:
                logger.info(f"Pipeline aborted before: {command!r}")
                self.console.print("Terminating program.")
                report.outcome = PipelineOutcome.ABORTED
                break

            if decision is CommandDecision.SKIP:
                logger.debug(f"Skipped: {command!r}")
                self.console.print(f"[magenta]Skipping command: [/magenta]{escape(command)}")
                report.skipped.append(command)
                continue

            with self.status.spinner(f"Executing: {command}"):
                result = self.execute(command)

            if not result.success:
                error = result.error
                if isinstance(error, DirectoryChangeError):
                    self.status.error("Failed to change directory:", error.directory)
                self.status.error("Error executing command:", command)
                self.console.print(escape(error.message), highlight=False)
                logger.warning(f"Pipeline halted on {command!r}: {error.message}")
                report.outcome = PipelineOutcome.FAILED
                report.failed_command = command
                report.error = error.message
                break

            report.executed.append(command)
            if result.directory is not None:
                self.status.success("Changed directory to:", str(result.directory))
            else:
                self.status.success("Execution completed!!", result.output)

        report.working_directory = self.working_directory
        return report

    def execute(self, command: str) -> ExecutionResult:
        """Run one approved command, turning failures into a failed result."""
        try:
            if command.startswith(CD_PREFIX):
                directory = self._change_directory(command)
                return ExecutionResult.ok(directory=directory)
            return ExecutionResult.ok(output=self._run_shell(command))
        except ExecutionError as e:
            return ExecutionResult.failed(e)

    def _change_directory(self, command: str) -> Path:
        raw = command[len(CD_PREFIX):].strip()
        if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "\"'":
            raw = raw[1:-1]

        target = Path(os.path.expandvars(raw)).expanduser() if raw else Path.home()
        if not target.is_absolute():
            target = self.working_directory / target

        if not target.is_dir():
            raise DirectoryChangeError(
                command, raw, f"No such directory: {raw or target}"
            )

        self.working_directory = target.resolve()
        logger.debug(f"Working directory is now {self.working_directory}")
        return self.working_directory

    def _run_shell(self, command: str) -> str:
        logger.debug(f"Running {command!r} in {self.working_directory}")
        try:
            completed = subprocess.run(
                command,
                shell=True,
                cwd=self.working_directory,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionError(command, f"Command timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise ExecutionError(command, f"Failed to run command: {e}") from e

        stdout = completed.stdout.strip()
        stderr = completed.stderr.strip()

        if completed.returncode != 0:
            detail = stderr or stdout
            message = f"Command failed with exit code {completed.returncode}: {command}"
            if detail:
                message = f"{message}\n{detail}"
            raise ExecutionError(command, message, completed.returncode)

        return stdout or stderr
