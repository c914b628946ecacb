"""
End-to-end tests for the command line, driven through typer's CliRunner in mock mode.
"""

import sys

import pytest
from typer.testing import CliRunner

from get_response import __version__, cli
from get_response.core.errors import GenerationError

runner = CliRunner()


def invoke(*args, input=None):
    return runner.invoke(cli.app, list(args), input=input)


def test_version():
    result = invoke("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help():
    result = invoke("-h")
    assert result.exit_code == 0
    assert "--terminal" in result.output


def test_no_arguments():
    result = invoke()
    assert result.exit_code == 1
    assert "Please provide a question or a valid flag" in result.output


def test_ask():
    result = invoke("How", "is", "Python", "better", "than", "C++?", "--mock")
    assert result.exit_code == 0
    assert "Here's your answer:" in result.output
    assert "This is a mock answer generated offline." in result.output
    assert "You asked: How is Python better than C++?" in result.output
    assert "**" not in result.output


def test_ask_with_file_context(tmp_path):
    path = tmp_path / "context.py"
    path.write_text("def is_rand():\n    return 4\n")

    result = invoke("What does is_rand do?", "-f", str(path), "--mock")
    assert result.exit_code == 0
    assert "File read successfully." in result.output
    assert "You asked: What does is_rand do?" in result.output


def test_ask_with_directory_context(tmp_path):
    (tmp_path / "a.py").write_text("A = 1")
    (tmp_path / "server.log").write_text("noise")

    result = invoke("Explain", "-d", str(tmp_path), "--mock")
    assert result.exit_code == 0
    assert "Cannot read this file, it is too large: server.log" in result.output
    assert "Read this file successfully: a.py" in result.output
    assert "Completed reading files from the directory" in result.output


def test_missing_context_file(tmp_path):
    result = invoke("Explain", "-f", str(tmp_path / "missing.txt"), "--mock")
    assert result.exit_code == 1
    assert "Cannot access" in result.output


def test_generation_failure_exits_with_error(monkeypatch):
    def broken(*args, **kwargs):
        raise GenerationError("No Gemini API key found")

    monkeypatch.setattr(cli.Assistant, "from_config", broken)
    result = invoke("anything")
    assert result.exit_code == 1
    assert "Unexpected error while generating content" in result.output
    assert "No Gemini API key found" in result.output


@pytest.mark.skipif(sys.platform == "win32", reason="mock commands assume a POSIX shell")
class TestTerminalMode:
    def test_execute_all(self):
        result = invoke("say hello", "-t", "--mock", input="y\ny\n")
        assert result.exit_code == 0
        assert "Got the terminal commands" in result.output
        assert "Execution completed!! Hello from get-response" in result.output
        assert "Command sequence completed" in result.output

    def test_skip_all(self):
        result = invoke("say hello", "-t", "--mock", input="s\ns\n")
        assert result.exit_code == 0
        assert "Skipping command: pwd" in result.output
        assert "Execution completed!!" not in result.output

    def test_abort(self):
        result = invoke("say hello", "-t", "--mock", input="n\n")
        assert result.exit_code == 0
        assert "Terminating program." in result.output
        assert "Execution completed!!" not in result.output
        assert result.output.index("Terminating program.") < result.output.index("Command sequence completed")

    def test_failure_exits_with_error(self, monkeypatch):
        monkeypatch.setattr(cli, "split_commands", lambda text: ("false_command_xyz", "echo after"))
        result = invoke("break things", "-t", "--mock", input="y\ny\n")
        assert result.exit_code == 1
        assert "Error executing command: false_command_xyz" in result.output
        assert "Execution stopped due to" in result.output
        assert "after" not in result.output.split("Error executing command")[1]


class TestChatMode:
    def test_single_turn_then_exit(self):
        result = invoke("-c", "--mock", input="hello\nexit\n")
        assert result.exit_code == 0
        assert "Welcome to the interactive chat mode" in result.output
        assert "You asked: hello" in result.output
        assert "Exiting chat mode." in result.output

    def test_end_of_input_leaves_chat(self):
        result = invoke("-c", "--mock", input="")
        assert result.exit_code == 0
        assert "Exiting chat mode." in result.output

    def test_help_inside_chat(self):
        result = invoke("-c", "--mock", input="help\nexit\n")
        assert result.exit_code == 0
        assert "Welcome" in result.output
        assert "get-response -c -d context_dir" in result.output

    def test_chat_with_file_material(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("meeting at noon")
        result = invoke("-c", "-f", str(path), "--mock", input="when?\nexit\n")
        assert result.exit_code == 0
        assert "File read successfully." in result.output
        assert "You asked: when?" in result.output
