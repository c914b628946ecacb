"""
OpenAI client for get-response (gpt-4o-mini, gpt-4o, o3-mini, ...).
"""

from typing import List, Optional

from loguru import logger
from openai import OpenAI

from get_response.llm.base_client import BaseLLMClient, LLMResponse, Message


class OpenAIClient(BaseLLMClient):
    """Chat completions over the openai SDK."""

    provider = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", temperature: float = 0.7,
                 max_tokens: int = 4096, timeout: float = 60.0):
        super().__init__(api_key, model, temperature)
        self.max_tokens = max_tokens
        self.client = OpenAI(api_key=api_key, timeout=timeout)
        logger.info(f"OpenAI client initialized: {model}")

    def chat(
        self,
        messages: List[Message],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> LLMResponse:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature if temperature is not None else self.temperature,
                max_tokens=max_tokens or self.max_tokens
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise

        choice = response.choices[0]
        usage = response.usage
        logger.debug(f"OpenAI answered with {usage.total_tokens if usage else 0} tokens")

        return LLMResponse(
            content=choice.message.content or "",
            model=response.model or self.model,
            tokens_used=usage.total_tokens if usage else 0,
            finish_reason=choice.finish_reason or "stop",
            metadata={
                "prompt_tokens": usage.prompt_tokens if usage else 0,
                "completion_tokens": usage.completion_tokens if usage else 0
            }
        )

    def is_available(self) -> bool:
        try:
            self.client.models.retrieve(self.model)
            return True
        except Exception as e:
            logger.warning(f"OpenAI not available: {e}")
            return False
