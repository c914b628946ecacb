"""
The single seam between the CLI flows and the model: prompt in, text out.
"""

from typing import Optional

from loguru import logger

from get_response.core.config import Config
from get_response.core.errors import GenerationError
from get_response.llm.base_client import BaseLLMClient
from get_response.llm.llm_factory import create_llm_client


class Assistant:
    """Wraps an LLM client so every failure surfaces as GenerationError."""

    def __init__(self, client: BaseLLMClient):
        self.client = client

    @classmethod
    def from_config(
        cls,
        model: Optional[str] = None,
        config: Optional[Config] = None,
        mock: bool = False,
    ) -> "Assistant":
        """
        Build an assistant for ``model``.

        Raises:
            GenerationError: If no client can be created (e.g. missing API key)
        """
        try:
            client = create_llm_client(model=model, config=config, mock=mock)
        except ValueError as e:
            raise GenerationError(str(e)) from e
        return cls(client)

    @property
    def model(self) -> str:
        return self.client.model

    def generate(self, prompt: str, system_message: Optional[str] = None) -> str:
        """
        Send ``prompt`` to the model and return its text.

        Raises:
            GenerationError: On transport/API errors or an empty answer
        """
        logger.debug(f"Generating with {self.client!r} ({len(prompt)} chars)")
        try:
            response = self.client.complete(prompt, system_message=system_message)
        except Exception as e:
            logger.error(f"Generation failed: {e}")
            raise GenerationError(f"Unexpected error while generating content: {e}") from e

        if response.is_empty:
            raise GenerationError(
                f"The model returned an empty answer (finish reason: {response.finish_reason})"
            )

        logger.debug(f"Received {len(response.content)} chars, {response.tokens_used} tokens")
        return response.content
