"""
Chat session: keeps the running context that every chat turn is answered against.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from loguru import logger

from get_response.core.assistant import Assistant
from get_response.prompts import chat_material, chat_memory, chat_prompt


@dataclass
class ChatSession:
    """
    In-memory chat state.

    The context starts from any gathered file material and is replaced after
    each answered turn by a summary of that turn. Nothing is written to disk.
    """
    assistant: Assistant
    context: str = ""
    turns: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def start(cls, assistant: Assistant, material: str = "") -> "ChatSession":
        context = chat_material(material) if material else ""
        return cls(assistant=assistant, context=context)

    def ask(self, question: str) -> str:
        """
        Answer ``question`` against the current context.

        Raises:
            GenerationError: If the model call fails; the context is left unchanged
        """
        answer = self.assistant.generate(chat_prompt(question, self.context))
        self.context = chat_memory(question, self.context, answer)
        self.turns.append((question, answer))
        logger.debug(f"Chat turn {len(self.turns)} answered, context is {len(self.context)} chars")
        return answer
