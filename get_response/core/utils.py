"""
Shared utilities for get-response.
"""

import platform
from typing import Dict, Optional

# platform.system() values to the names used in terminal prompts
OS_NAMES: Dict[str, str] = {
    "darwin": "Mac OS",
    "windows": "Windows",
    "linux": "Linux",
}


def detect_os_name(system: Optional[str] = None) -> str:
    """
    Name of the operating system commands should be written for.

    Args:
        system: Raw system name; defaults to platform.system()

    Returns:
        "Mac OS", "Windows", "Linux", or the raw system name for anything else
    """
    raw = system if system is not None else platform.system()
    key = raw.lower()
    if key.startswith(("cygwin", "msys", "mingw")):
        return "Windows"
    return OS_NAMES.get(key, raw or "Unknown")
