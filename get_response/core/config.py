"""
Configuration management for get-response.
Loads settings from environment variables and .env file.
"""

import os
import sys
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from loguru import logger

# User-level directory for logs and the fallback .env file
APP_DIR = Path.home() / ".get-response"

# Load environment variables from .env file
# Try the current directory first, then the user config directory
_possible_env_paths = [
    Path.cwd() / ".env",
    APP_DIR / ".env",
]
for _env_path in _possible_env_paths:
    if _env_path.exists():
        load_dotenv(_env_path)
        break
else:
    load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"true", "1", "yes"}


class Config:
    """Configuration manager for get-response."""

    def __init__(self):
        """Initialize configuration from environment variables."""

        # API Keys
        self.gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        self.openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")

        # Model Configuration
        self.default_model: str = os.getenv("DEFAULT_MODEL", "gemini-2.0-flash")
        self.temperature: float = float(os.getenv("TEMPERATURE", "0.7"))
        self.max_tokens: int = int(os.getenv("MAX_TOKENS", "4096"))

        # Mock / offline mode
        self.mock_mode: bool = _env_flag("MOCK_MODE", "false")

        # Startup banner
        self.check_updates: bool = _env_flag("CHECK_UPDATES", "true")

        # Terminal mode: unset means commands may run indefinitely
        timeout = os.getenv("COMMAND_TIMEOUT", "").strip()
        self.command_timeout: Optional[float] = float(timeout) if timeout else None

        # Context gathering
        self.max_context_file_size: int = int(
            os.getenv("MAX_CONTEXT_FILE_SIZE", str(3 * 1024 * 1024))
        )

        # Logging
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.console_log_level: str = os.getenv("CONSOLE_LOG_LEVEL", "WARNING")
        self.log_file: Path = Path(os.getenv("LOG_FILE", str(APP_DIR / "get-response.log")))
        self.console_logging: bool = _env_flag("CONSOLE_LOGGING", "true")
        self.file_logging: bool = _env_flag("FILE_LOGGING", "true")

        self.setup_logging()
        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        if not self.mock_mode and not self.gemini_api_key and not self.openai_api_key:
            logger.debug(
                "No API keys found. Set GEMINI_API_KEY or OPENAI_API_KEY in your .env file"
            )

        if self.command_timeout is not None and self.command_timeout <= 0:
            logger.warning(f"Ignoring non-positive COMMAND_TIMEOUT={self.command_timeout}")
            self.command_timeout = None

    def setup_logging(self, console_level: Optional[str] = None):
        """
        Configure loguru sinks.

        Args:
            console_level: Override for the console sink level (e.g. DEBUG for --verbose)
        """
        logger.remove()  # Remove default handler

        if self.console_logging:
            logger.add(
                sys.stderr,
                level=console_level or self.console_log_level,
                colorize=True,
                format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
            )

        if self.file_logging:
            try:
                logger.add(
                    self.log_file,
                    level=self.log_level,
                    rotation="10 MB",
                    retention="1 week",
                    format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"
                )
            except OSError as e:
                logger.warning(f"File logging disabled, cannot write {self.log_file}: {e}")

        if self.mock_mode:
            logger.info("Mock mode enabled (LLM responses will be simulated)")

    def get_api_key(self, model: Optional[str] = None) -> Optional[str]:
        """Get the appropriate API key for the specified model."""
        target_model = (model or self.default_model).lower()

        if "gemini" in target_model:
            return self.gemini_api_key
        elif "gpt" in target_model or target_model.startswith("o"):
            return self.openai_api_key

        return self.gemini_api_key or self.openai_api_key

    def __repr__(self) -> str:
        """String representation of config."""
        api_status = []
        if self.gemini_api_key:
            api_status.append("Gemini")
        if self.openai_api_key:
            api_status.append("OpenAI")

        return (
            f"Config(model={self.default_model}, "
            f"apis=[{', '.join(api_status)}], "
            f"mock={self.mock_mode})"
        )


# Global config instance
config = Config()
