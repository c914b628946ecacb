"""
Google Gemini LLM client implementation.
Supports gemini-2.0-flash, gemini-1.5-pro, etc.
"""

from typing import List, Optional

from loguru import logger
from google import genai
from google.genai import types

from get_response.llm.base_client import BaseLLMClient, LLMResponse, Message

# OpenAI-style roles to Gemini content roles
_ROLE_MAP = {"user": "user", "assistant": "model", "model": "model"}


class GeminiClient(BaseLLMClient):
    """Gemini client built on the google-genai SDK."""

    provider = "gemini"

    def __init__(self, api_key: str, model: str = "gemini-2.0-flash", temperature: float = 0.7,
                 max_tokens: int = 4096):
        """
        Initialize Gemini client.

        Args:
            api_key: Google AI Studio API key
            model: Model name
            temperature: Sampling temperature
            max_tokens: Default output token limit
        """
        super().__init__(api_key, model, temperature)
        self.max_tokens = max_tokens
        self.client = genai.Client(api_key=api_key)
        logger.info(f"Gemini client initialized: {model}")

    def chat(
        self,
        messages: List[Message],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> LLMResponse:
        """
        Generate a completion from an OpenAI-style message list.

        System messages become the system instruction; the rest map onto
        user/model contents.
        """
        system_parts = [m["content"] for m in messages if m["role"] == "system"]
        contents = [
            types.Content(
                role=_ROLE_MAP.get(m["role"], "user"),
                parts=[types.Part(text=m["content"])]
            )
            for m in messages
            if m["role"] != "system"
        ]

        generation_config = types.GenerateContentConfig(
            system_instruction="\n\n".join(system_parts) if system_parts else None,
            temperature=temperature if temperature is not None else self.temperature,
            max_output_tokens=max_tokens or self.max_tokens,
        )

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=contents,
                config=generation_config,
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise

        usage = response.usage_metadata
        tokens_used = (usage.total_token_count or 0) if usage else 0
        finish_reason = "stop"
        if response.candidates and response.candidates[0].finish_reason:
            finish_reason = str(response.candidates[0].finish_reason)

        logger.debug(f"Gemini response: {tokens_used} tokens")

        return LLMResponse(
            content=response.text or "",
            model=self.model,
            tokens_used=tokens_used,
            finish_reason=finish_reason,
            metadata={
                "prompt_tokens": (usage.prompt_token_count or 0) if usage else 0,
                "completion_tokens": (usage.candidates_token_count or 0) if usage else 0
            }
        )

    def is_available(self) -> bool:
        """Check if the Gemini API answers a model lookup."""
        try:
            self.client.models.get(model=self.model)
            return True
        except Exception as e:
            logger.warning(f"Gemini not available: {e}")
            return False
