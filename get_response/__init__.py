"""
get-response - ask an AI model from your terminal

Renders markdown-ish answers with terminal styling, keeps a context-aware
chat, and turns requests into shell commands you approve one by one.
"""

__version__ = "1.9.0"
__license__ = "MIT"

from get_response.core.renderer import TerminalRenderer, render
from get_response.core.pipeline import CommandPipeline, CommandDecision, parse_decision

__all__ = [
    "TerminalRenderer",
    "render",
    "CommandPipeline",
    "CommandDecision",
    "parse_decision",
]
