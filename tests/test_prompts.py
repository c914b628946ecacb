"""
Tests for prompt templates and OS detection.
"""

import pytest

from get_response.core.utils import detect_os_name
from get_response.prompts import (
    PromptLoader,
    chat_material,
    chat_memory,
    chat_prompt,
    context_prompt,
    load_prompt,
    terminal_prompt,
)


def test_terminal_prompt():
    assert terminal_prompt("list files", "Linux") == (
        "Write the terminal commands to list files, for Linux Operating System. "
        "Just write the commands in simple text, without any explanation, decoration or formatting."
    )


def test_context_prompt():
    assert context_prompt("Q?", "ctx") == "Q?\n\nContext of the question is:\nctx"


def test_chat_prompt():
    assert chat_prompt("Q?", "ctx") == "Q?\nThe context of the question was based on:\nctx"


def test_chat_memory():
    assert chat_memory("Q?", "ctx", "A.") == (
        "Previous question was: Q?\n"
        "The context of the question was based on:\n"
        "ctx\n\n"
        "The generated answer was:\n"
        "A."
    )


def test_chat_material():
    assert chat_material("files") == "All the necessary details read from the files is:\n\nfiles"


def test_header_comment_is_not_part_of_prompt():
    assert not load_prompt("terminal").startswith("<!--")
    assert load_prompt("terminal").startswith("Write the terminal commands")


def test_values_are_substituted_once():
    assert context_prompt("${CONTEXT}", "real") == "${CONTEXT}\n\nContext of the question is:\nreal"


def test_unknown_prompt():
    with pytest.raises(FileNotFoundError):
        PromptLoader.load("does_not_exist")


@pytest.mark.parametrize("system,expected", [
    ("Darwin", "Mac OS"),
    ("Windows", "Windows"),
    ("Linux", "Linux"),
    ("CYGWIN_NT-10.0", "Windows"),
    ("MINGW64_NT-10.0", "Windows"),
    ("FreeBSD", "FreeBSD"),
])
def test_detect_os_name(system, expected):
    assert detect_os_name(system) == expected


def test_detect_os_name_defaults_to_platform():
    assert detect_os_name()
