"""
Offline client behind ``--mock`` and ``MOCK_MODE=true``.

Answers are canned but shaped like real ones: terminal-mode prompts get two
harmless shell commands, everything else gets a short markdown answer that
exercises the renderer (emphasis, bullets and a fenced code block).
"""

from typing import List, Optional

from get_response.llm.base_client import BaseLLMClient, LLMResponse, Message

TERMINAL_REQUEST_MARKER = "Write the terminal commands to"

MOCK_COMMANDS = 'echo "Hello from get-response"\npwd'

MOCK_ANSWER = (
    "This is a **mock answer** generated offline.\n\n"
    "You asked: {question}\n\n"
    "* Set GEMINI_API_KEY or OPENAI_API_KEY for real answers\n"
    "* Run without --mock to use the configured model\n\n"
    "```python\n"
    "print(\"Hello from get-response\")\n"
    "```\n"
)


def _headline(prompt: str, limit: int = 80) -> str:
    lines = prompt.strip().splitlines()
    if not lines:
        return "(empty question)"
    first = lines[0]
    return first if len(first) <= limit else first[:limit - 3] + "..."


class MockLLMClient(BaseLLMClient):
    """Deterministic stand-in for a provider; keeps every prompt it was sent."""

    provider = "mock"

    def __init__(self, model: str = "mock-llm", temperature: float = 0.1):
        super().__init__(api_key="mock", model=model, temperature=temperature)
        self.prompts: List[str] = []

    def chat(
        self,
        messages: List[Message],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> LLMResponse:
        user_messages = [m["content"] for m in messages if m["role"] == "user"]
        prompt = user_messages[-1] if user_messages else ""
        self.prompts.append(prompt)

        if TERMINAL_REQUEST_MARKER in prompt:
            content = MOCK_COMMANDS
        else:
            content = MOCK_ANSWER.format(question=_headline(prompt))

        return LLMResponse(
            content=content,
            model=self.model,
            tokens_used=len(content.split()),
            metadata={"mock": True, "call": len(self.prompts)}
        )

    def is_available(self) -> bool:
        return True
