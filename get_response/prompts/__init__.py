"""
Prompt templates sent to the model.

Each template is a markdown file in this directory using ``${NAME}``
placeholders. A leading ``<!-- ... -->`` comment is a note for maintainers
and is stripped before the template is used.
"""

from pathlib import Path
from string import Template
from typing import Dict

PROMPTS_DIR = Path(__file__).parent

HEADER_START = "<!--"
HEADER_END = "-->"


def _strip_header(content: str) -> str:
    if content.startswith(HEADER_START):
        end = content.find(HEADER_END)
        if end != -1:
            content = content[end + len(HEADER_END):]
    return content.strip()


class PromptLoader:
    """Reads templates once per process and fills them in."""

    _cache: Dict[str, Template] = {}

    @classmethod
    def template(cls, name: str) -> Template:
        if name not in cls._cache:
            path = PROMPTS_DIR / f"{name}.md"
            if not path.is_file():
                raise FileNotFoundError(f"Prompt not found: {path}")
            cls._cache[name] = Template(_strip_header(path.read_text(encoding="utf-8")))
        return cls._cache[name]

    @classmethod
    def load(cls, name: str) -> str:
        """Template text with placeholders left in place."""
        return cls.template(name).template

    @classmethod
    def load_with_vars(cls, name: str, variables: Dict[str, str]) -> str:
        """
        Fill in ``variables``.

        Substitution is a single pass: a value that itself contains
        ``${...}`` is inserted as is. Unknown placeholders are left alone.
        """
        return cls.template(name).safe_substitute({k: str(v) for k, v in variables.items()})

    @classmethod
    def clear_cache(cls):
        cls._cache.clear()


def load_prompt(name: str, **variables) -> str:
    if variables:
        return PromptLoader.load_with_vars(name, variables)
    return PromptLoader.load(name)


def terminal_prompt(request: str, os_name: str) -> str:
    """Ask for bare shell commands, one per line, for ``os_name``."""
    return load_prompt("terminal", REQUEST=request, OS=os_name)


def context_prompt(question: str, context: str) -> str:
    return load_prompt("context", QUESTION=question, CONTEXT=context)


def chat_prompt(question: str, context: str) -> str:
    return load_prompt("chat", QUESTION=question, CONTEXT=context)


def chat_memory(question: str, context: str, answer: str) -> str:
    """The context carried into the next chat turn."""
    return load_prompt("chat_memory", QUESTION=question, CONTEXT=context, ANSWER=answer)


def chat_material(material: str) -> str:
    return load_prompt("chat_material", MATERIAL=material)
