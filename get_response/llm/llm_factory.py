"""
Picks the client for a model name.

Mock mode wins over everything; names that look like OpenAI models go to
OpenAI; everything else is sent to Gemini, the default provider.
"""

from typing import Optional

from loguru import logger

from get_response.core.config import Config
from get_response.llm.base_client import BaseLLMClient
from get_response.llm.gemini_client import GeminiClient
from get_response.llm.mock_client import MockLLMClient
from get_response.llm.openai_client import OpenAIClient

OPENAI_PREFIXES = ("o1", "o3", "o4")


def is_openai_model(model: str) -> bool:
    name = model.lower()
    return "gpt" in name or name.startswith(OPENAI_PREFIXES)


def is_mock_model(model: str) -> bool:
    return "mock" in model.lower()


class LLMFactory:
    """Builds provider clients from a model name and the active Config."""

    @staticmethod
    def create_client(
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        config: Optional[Config] = None,
        temperature: Optional[float] = None,
        mock: bool = False
    ) -> BaseLLMClient:
        """
        Create the client for ``model``.

        Args:
            model: Model identifier; defaults to ``config.default_model``
            api_key: Explicit key, otherwise the provider key from config
            config: Configuration; defaults to the global config
            temperature: Sampling temperature; defaults to ``config.temperature``
            mock: Force the offline mock client

        Raises:
            ValueError: If the selected provider has no API key
        """
        from get_response.core.config import config as default_config

        config = config or default_config
        model = model or config.default_model
        if temperature is None:
            temperature = config.temperature

        if mock or config.mock_mode or is_mock_model(model):
            logger.info("Mock mode active, answers are generated offline")
            return MockLLMClient(temperature=temperature)

        if is_openai_model(model):
            provider, client_cls, key, env_name = OpenAIClient.provider, OpenAIClient, config.openai_api_key, "OPENAI_API_KEY"
        else:
            if "gemini" not in model.lower():
                logger.warning(f"Unknown model '{model}', trying it with Gemini")
            provider, client_cls, key, env_name = GeminiClient.provider, GeminiClient, config.gemini_api_key, "GEMINI_API_KEY"

        key = api_key or key
        if not key:
            raise ValueError(f"No {provider} API key found. Set {env_name} in your .env file")

        logger.info(f"Creating {provider} client for model: {model}")
        return client_cls(api_key=key, model=model, temperature=temperature, max_tokens=config.max_tokens)


def create_llm_client(
    model: Optional[str] = None,
    config: Optional[Config] = None,
    mock: bool = False
) -> BaseLLMClient:
    """Shortcut for ``LLMFactory.create_client`` with the config-provided key and temperature."""
    return LLMFactory.create_client(model=model, config=config, mock=mock)
