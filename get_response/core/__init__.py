"""
Core modules: rendering, the command pipeline, context gathering and chat.
"""

from get_response.core.assistant import Assistant
from get_response.core.chat import ChatSession
from get_response.core.config import Config
from get_response.core.pipeline import CommandPipeline
from get_response.core.renderer import TerminalRenderer

__all__ = ["Assistant", "ChatSession", "Config", "CommandPipeline", "TerminalRenderer"]
