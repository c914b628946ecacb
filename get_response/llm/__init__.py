"""
LLM integration layer for get-response.
Provides unified interface for different LLM providers.
"""

from get_response.llm.base_client import BaseLLMClient, LLMResponse
from get_response.llm.gemini_client import GeminiClient
from get_response.llm.openai_client import OpenAIClient
from get_response.llm.mock_client import MockLLMClient
from get_response.llm.llm_factory import LLMFactory, create_llm_client

__all__ = [
    "BaseLLMClient",
    "LLMResponse",
    "GeminiClient",
    "OpenAIClient",
    "MockLLMClient",
    "LLMFactory",
    "create_llm_client",
]
