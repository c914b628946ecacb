"""
Provider-neutral client interface.

get-response only ever sends one prompt and reads one answer back, so a
client needs ``chat()`` over OpenAI-style messages; ``complete()`` builds
those messages from a prompt and an optional system message.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

Message = Dict[str, str]


@dataclass
class LLMResponse:
    """Text returned by a provider plus what it reported about the call."""
    content: str
    model: str
    tokens_used: int = 0
    finish_reason: str = "stop"
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()


def build_messages(prompt: str, system_message: Optional[str] = None) -> List[Message]:
    messages: List[Message] = []
    if system_message:
        messages.append({"role": "system", "content": system_message})
    messages.append({"role": "user", "content": prompt})
    return messages


class BaseLLMClient(ABC):
    """Common state and the prompt-to-messages step shared by every provider."""

    provider = "base"

    def __init__(self, api_key: str, model: str, temperature: float = 0.7):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature

    def complete(
        self,
        prompt: str,
        system_message: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> LLMResponse:
        """
        Answer a single prompt.

        Args:
            prompt: The full prompt text (question plus any context)
            system_message: Optional instruction sent ahead of the prompt
            max_tokens: Output limit for this call
            temperature: Override the client temperature for this call
        """
        return self.chat(build_messages(prompt, system_message), max_tokens, temperature)

    @abstractmethod
    def chat(
        self,
        messages: List[Message],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> LLMResponse:
        """Send ``messages`` (dicts with ``role`` and ``content``) and return the reply."""

    @abstractmethod
    def is_available(self) -> bool:
        """True if the provider answers a cheap request with this client's credentials."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider}, model={self.model})"
