"""
Shared fixtures. Environment defaults are set before get_response is imported
so the global config never writes log files or calls PyPI during tests.
"""

import io
import os

os.environ.setdefault("FILE_LOGGING", "false")
os.environ.setdefault("CHECK_UPDATES", "false")
os.environ.setdefault("CONSOLE_LOG_LEVEL", "ERROR")

import pytest
from rich.console import Console

from get_response.config import ConfigLoader


@pytest.fixture
def console():
    """A non-interactive console whose output can be read back."""
    return Console(file=io.StringIO(), width=120, color_system=None, highlight=False)


@pytest.fixture
def console_output(console):
    return lambda: console.file.getvalue()


@pytest.fixture(autouse=True)
def fresh_config_loader():
    ConfigLoader._project_root = None
    ConfigLoader.reload()
    yield
    ConfigLoader._project_root = None
    ConfigLoader.reload()
