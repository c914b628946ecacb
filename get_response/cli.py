"""
get-response Command-Line Interface
Main entry point for user interaction.
"""

import sys
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich import box
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from get_response import __version__
from get_response.core.assistant import Assistant
from get_response.core.chat import ChatSession
from get_response.core.config import config
from get_response.core.context import (
    attach_context,
    read_directory_context,
    read_file_context,
    read_pdf_context,
)
from get_response.core.errors import ContextError, GenerationError
from get_response.core.pipeline import CommandPipeline, PipelineOutcome, split_commands
from get_response.core.renderer import TerminalRenderer
from get_response.core.status import StatusReporter
from get_response.core.updates import fetch_latest_version, update_message
from get_response.core.utils import detect_os_name
from get_response.prompts import terminal_prompt

app = typer.Typer(
    name="get-response",
    help="get-response - a terminal-based AI chat-bot",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console(soft_wrap=True)

EXIT_WORDS = {"exit"}
HELP_WORDS = {"help"}


def safe_console_print(text="", **kwargs):
    console.print(text, **kwargs)
    sys.stdout.flush()


def _render_help() -> None:
    """Boxed usage summary, also shown by `help` inside chat mode."""
    help_text = (
        "[underline yellow]get-response : A terminal-based AI chat-bot[/underline yellow]\n\n"
        "[bold]Usage : [/bold]\n\n"
        "  [yellow]get-response \\[question] \\[flag(s)] \\[path][/yellow]\n\n"
        "[bold]Flags : [/bold]\n\n"
        "  [cyan]-h, --help[/cyan]          Show this help message and exit\n"
        "  [cyan]-v, --version[/cyan]       Show the version number and exit\n"
        "  [cyan]-f <file>[/cyan]           Provide a file path to include its content as context\n"
        "  [cyan]-d <directory>[/cyan]      Provide a directory path to include all files' content as context\n"
        "  [cyan]-p <pdf-file>[/cyan]       Provide a PDF file to include its content as context\n"
        "  [cyan]-c, --chat-mode[/cyan]     Starts a context-based interactive chat window (type \"exit\" to exit)\n"
        "  [cyan]-t, --terminal[/cyan]      Based on your prompt, generates commands that execute on your terminal\n"
        "  [cyan]-m, --model <name>[/cyan]  Model to use (gemini-2.0-flash, gpt-4o-mini, ...)\n"
        "  [cyan]--mock[/cyan]              Offline demo mode with canned answers\n\n"
        "[bold]Examples : [/bold]\n\n"
        "[dim]  get-response \"How is Python better than C++?\"\n"
        "  get-response \"What is the function is_rand() doing?\" -f context.py\n"
        "  get-response \"Who is the writer of this book?\" -p context.pdf\n"
        "  get-response \"How to import app.py within main.py?\" -d context_dir\n"
        "  get-response \"Create a React app named get-response\" -t\n"
        "  get-response -c\n"
        "  get-response -c -f context.txt\n"
        "  get-response -c -p context.pdf\n"
        "  get-response -c -d context_dir[/dim]"
    )
    safe_console_print(Panel(
        help_text,
        title="Welcome",
        title_align="center",
        box=box.DOUBLE,
        border_style="green",
        padding=1,
        expand=False,
    ))


def _version_callback(value: bool) -> None:
    if not value:
        return
    safe_console_print(
        f"[bold]Installed version of[/bold] [bold cyan]get-response[/bold cyan] "
        f"[bold]is:[/bold] [bold yellow]{__version__}[/bold yellow]\n\n"
        "To update to the latest version, run [cyan]pip install -U get-response[/cyan] in your terminal!!"
    )
    raise typer.Exit()


def _check_for_updates() -> None:
    if not config.check_updates:
        return
    message = update_message(__version__, fetch_latest_version())
    if message:
        safe_console_print(message)


def _gather_material(
    status: StatusReporter,
    file: Optional[Path],
    directory: Optional[Path],
    pdf: Optional[Path],
) -> str:
    """Read the context source chosen on the command line (PDF, then file, then directory)."""
    if pdf is not None:
        with status.spinner("Reading your file..."):
            content = read_pdf_context(pdf)
        status.success("File read successfully.")
        return content

    if file is not None:
        with status.spinner("Reading your file..."):
            content = read_file_context(file)
        status.success("File read successfully.")
        return content

    with status.spinner("Reading each file from your directory..."):
        content = read_directory_context(
            directory,
            on_skip=lambda path: status.warning("Cannot read this file, it is too large:", path.name),
            on_read=lambda path: status.success("Read this file successfully:", path.name),
        )
    status.success("Completed reading files from the directory")
    return content


def _ask(assistant: Assistant, question: str, status: StatusReporter, renderer: TerminalRenderer) -> None:
    if not question.strip():
        status.warning("Please ask a question to get an answer!!")
        raise typer.Exit(code=1)

    with status.spinner("Generating your answer..."):
        answer = assistant.generate(question)
    status.success("Here's your answer:")
    renderer.print(answer, console)
    safe_console_print()


def _terminal(assistant: Assistant, request: str, status: StatusReporter) -> None:
    if not request.strip():
        status.warning("Please ask a question to get an answer!!")
        raise typer.Exit(code=1)

    prompt = terminal_prompt(request, detect_os_name())
    with status.spinner("Fetching the terminal commands..."):
        answer = assistant.generate(prompt)
    status.success("Got the terminal commands")

    pipeline = CommandPipeline(console=console, timeout=config.command_timeout)
    report = pipeline.run(split_commands(answer))

    if report.outcome is PipelineOutcome.FAILED:
        safe_console_print(f"[red]Execution stopped due to {escape(report.error or 'an unknown error')}[/red]", highlight=False)
        raise typer.Exit(code=1)
    # an abort ends the sequence normally
    safe_console_print("[green]Command sequence completed[/green]")


def _read_chat_line(session: Optional[PromptSession]) -> str:
    if session is not None:
        return session.prompt(HTML("<ansicyan>Type your message: </ansicyan>"))
    return input("Type your message: ")


def _chat(assistant: Assistant, material: str, status: StatusReporter, renderer: TerminalRenderer) -> None:
    chat = ChatSession.start(assistant, material)
    safe_console_print(
        "[italic]Welcome to the interactive chat mode of [yellow]get-response[/yellow].\n"
        "You can type [yellow]help[/yellow] if you need any assistance, "
        "or type [yellow]exit[/yellow] to quit the chat mode.[/italic]"
    )

    use_prompt_toolkit = sys.stdin.isatty() and sys.stdout.isatty()
    session = PromptSession(history=InMemoryHistory()) if use_prompt_toolkit else None

    while True:
        try:
            line = _read_chat_line(session).strip()
        except (EOFError, KeyboardInterrupt):
            safe_console_print()
            break

        if not line:
            continue
        if line.lower() in EXIT_WORDS:
            break
        if line.lower() in HELP_WORDS:
            _render_help()
            continue

        safe_console_print()
        safe_console_print(Panel(
            Text(line, style="cyan"),
            title="You",
            title_align="left",
            border_style="cyan",
            padding=1,
            expand=False,
        ))

        with status.spinner("Generating your answer..."):
            answer = chat.ask(line)

        safe_console_print(Panel(
            Group(*renderer.renderables(answer)),
            title="AI",
            title_align="left",
            border_style="green",
            padding=1,
        ))

    safe_console_print("[red]Exiting chat mode.[/red]")


@app.command()
def respond(
    question: Optional[List[str]] = typer.Argument(
        None,
        help="Your question (or, with -t, what the terminal commands should do)"
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file", "-f",
        help="Include a file's content as context"
    ),
    directory: Optional[Path] = typer.Option(
        None,
        "--directory", "-d",
        help="Include every readable file below a directory as context"
    ),
    pdf: Optional[Path] = typer.Option(
        None,
        "--pdf", "-p",
        help="Include a PDF's text as context"
    ),
    chat_mode: bool = typer.Option(
        False,
        "--chat-mode", "-c",
        help="Start a context-based interactive chat (type \"exit\" to quit)"
    ),
    terminal: bool = typer.Option(
        False,
        "--terminal", "-t",
        help="Generate terminal commands and execute the ones you approve"
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model", "-m",
        help="LLM model to use (gemini-2.0-flash, gpt-4o-mini, etc.)"
    ),
    mock: bool = typer.Option(
        False,
        "--mock",
        help="Use built-in mock LLM responses (offline demo mode)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version", "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show the version number and exit"
    ),
):
    """
    Ask an AI model from your terminal.

    Examples:
        get-response "How is Python better than C++?"
        get-response "What does is_rand() do?" -f context.py
        get-response "Create a React app named demo" -t
        get-response -c -d context_dir
    """
    if verbose:
        config.setup_logging(console_level="DEBUG")

    _check_for_updates()

    status = StatusReporter(console)
    text = " ".join(question or [])
    has_context = file is not None or directory is not None or pdf is not None

    if not (has_context or chat_mode or text.strip()):
        safe_console_print("[red]Please provide a question or a valid flag to get a response!![/red]")
        raise typer.Exit(code=1)

    try:
        material = _gather_material(status, file, directory, pdf) if has_context else ""
    except ContextError as e:
        status.error(str(e))
        raise typer.Exit(code=1)

    try:
        assistant = Assistant.from_config(model=model, mock=mock)
        renderer = TerminalRenderer()

        if chat_mode:
            _chat(assistant, attach_context(text, material) if has_context else "", status, renderer)
        elif has_context:
            _ask(assistant, attach_context(text, material), status, renderer)
        elif terminal:
            _terminal(assistant, text, status)
        else:
            _ask(assistant, text, status, renderer)
    except GenerationError as e:
        logger.debug(f"Generation failed: {e}")
        status.error("Unexpected error while generating content", str(e))
        raise typer.Exit(code=1)


def run():
    """Main entry point."""
    app()


def main():
    """Console script entry point (typer app shim)."""
    run()


if __name__ == "__main__":
    run()
