"""
Update check against PyPI.
"""

from typing import Optional

import requests
from loguru import logger

PYPI_URL = "https://pypi.org/pypi/{package}/json"


def fetch_latest_version(package: str = "get-response", timeout: float = 3.0) -> Optional[str]:
    """
    Return the latest released version of ``package``, or None if PyPI is unreachable.
    """
    try:
        response = requests.get(PYPI_URL.format(package=package), timeout=timeout)
        response.raise_for_status()
        return response.json()["info"]["version"]
    except (requests.RequestException, ValueError, KeyError) as e:
        logger.debug(f"Error checking for updates: {e}")
        return None


def update_message(current: str, latest: Optional[str], package: str = "get-response") -> Optional[str]:
    """Rich markup announcing a new version, or None when up to date or unknown."""
    if not latest or latest == current:
        return None
    return (
        f"A new version of {package} is available: [yellow]{latest}[/yellow]. "
        f"You are using version: [red]{current}[/red].\n\n"
        f"To update, run: [yellow]pip install -U {package}[/yellow]"
    )
