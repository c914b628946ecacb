"""
Terminal renderer for model answers.

Turns the markdown subset the model speaks (fenced code blocks, ``**`` emphasis
toggles and ``* `` list bullets) into styled terminal output. Scanning and
styling are separate steps: ``scan()`` is a pure state machine producing
fragments, ``TerminalRenderer`` turns fragments into rich renderables.
"""

import io
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from rich import box
from rich.box import Box
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.text import Text

from get_response.config import load_config

FENCE = "```"
BOLD = "**"
BULLET = "* "


class Emphasis(Enum):
    """Prose style level, flipped by every bold marker."""

    PRIMARY = "primary"
    SECONDARY = "secondary"

    def toggled(self) -> "Emphasis":
        return Emphasis.SECONDARY if self is Emphasis.PRIMARY else Emphasis.PRIMARY


class Marker(Enum):
    FENCE = "fence"
    BOLD = "bold"
    BULLET = "bullet"


@dataclass(frozen=True)
class ProseFragment:
    """A run of prose characters sharing one emphasis level."""
    text: str
    emphasis: Emphasis


@dataclass(frozen=True)
class BulletFragment:
    """A list bullet replacing the asterisk of ``* ``."""
    emphasis: Emphasis


@dataclass(frozen=True)
class CodeBlock:
    """The exact characters between an opening label line and a closing fence."""
    code: str
    language: str = ""


Fragment = Union[ProseFragment, BulletFragment, CodeBlock]


@dataclass
class RenderState:
    """Transient scan state for one render call."""
    in_code_block: bool = False
    code_buffer: str = ""
    code_language: str = ""
    emphasis: Emphasis = Emphasis.PRIMARY
    at_line_start: bool = True

    def open_code_block(self, language: str) -> None:
        self.in_code_block = True
        self.code_buffer = ""
        self.code_language = language

    def close_code_block(self) -> CodeBlock:
        block = CodeBlock(code=self.code_buffer, language=self.code_language)
        self.in_code_block = False
        self.code_buffer = ""
        self.code_language = ""
        self.at_line_start = True
        return block


def detect_marker(text: str, pos: int, state: RenderState) -> Optional[Marker]:
    """
    Return the marker starting at ``pos`` given the current state.

    Inside a code block only a fence counts. In prose a fence wins over bold,
    and a bullet is only recognised at the start of a list item.
    """
    if text.startswith(FENCE, pos):
        return Marker.FENCE
    if state.in_code_block:
        return None
    if text.startswith(BOLD, pos):
        return Marker.BOLD
    if state.at_line_start and text.startswith(BULLET, pos):
        return Marker.BULLET
    return None


def scan(text: str) -> List[Fragment]:
    """
    Split raw model text into prose runs, bullets and closed code blocks.

    Single left-to-right pass. An unterminated code block is dropped.
    """
    state = RenderState()
    fragments: List[Fragment] = []
    run: List[str] = []

    def flush() -> None:
        if run:
            fragments.append(ProseFragment("".join(run), state.emphasis))
            run.clear()

    pos = 0
    length = len(text)
    while pos < length:
        marker = detect_marker(text, pos, state)

        if marker is Marker.FENCE:
            pos += len(FENCE)
            if state.in_code_block:
                fragments.append(state.close_code_block())
                if text.startswith("\n", pos):
                    pos += 1
            else:
                flush()
                end = text.find("\n", pos)
                if end == -1:
                    end = length
                state.open_code_block(text[pos:end])
                pos = end + 1
            continue

        if state.in_code_block:
            end = text.find(FENCE, pos)
            if end == -1:
                end = length
            state.code_buffer += text[pos:end]
            pos = end
            continue

        if marker is Marker.BOLD:
            flush()
            state.emphasis = state.emphasis.toggled()
            pos += len(BOLD)
            continue

        if marker is Marker.BULLET:
            flush()
            fragments.append(BulletFragment(state.emphasis))
            state.at_line_start = False
            pos += 1  # the space is emitted as prose
            continue

        char = text[pos]
        run.append(char)
        if char == "\n":
            state.at_line_start = True
        elif char not in " \t":
            state.at_line_start = False
        pos += 1

    flush()

    if state.in_code_block:
        logger.debug(
            f"Dropping unterminated code block ({len(state.code_buffer)} chars, "
            f"language={state.code_language!r})"
        )

    return fragments


@dataclass
class RenderTheme:
    """rich styles used by the renderer."""
    primary_style: str = "italic cyan"
    secondary_style: str = "yellow"
    bullet: str = "•"
    bullet_style: str = "green"
    code_style: str = "green"
    border_style: str = "cyan"
    box: str = "double"
    padding: int = 1

    @classmethod
    def from_config(cls, data: Optional[Dict[str, Any]] = None) -> "RenderTheme":
        """Build a theme from the ``theme`` config, ignoring unknown keys."""
        if data is None:
            data = load_config("theme")
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown theme keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def style_for(self, emphasis: Emphasis) -> str:
        return self.primary_style if emphasis is Emphasis.PRIMARY else self.secondary_style

    def panel_box(self) -> Box:
        return getattr(box, self.box.upper(), box.DOUBLE)


@dataclass
class TerminalRenderer:
    """
    Styles scanned fragments for the terminal.

    Usage:
        renderer = TerminalRenderer()
        print(renderer.render(answer))      # ANSI string
        renderer.print(answer, console)     # straight to a rich console
    """
    theme: RenderTheme = field(default_factory=RenderTheme.from_config)
    width: Optional[int] = None
    color_system: Optional[str] = "standard"

    def code_panel(self, block: CodeBlock) -> Panel:
        code = block.code[:-1] if block.code.endswith("\n") else block.code
        title = Text(block.language.strip()) if block.language.strip() else None
        return Panel(
            Text(code, style=self.theme.code_style),
            title=title,
            box=self.theme.panel_box(),
            border_style=self.theme.border_style,
            padding=self.theme.padding,
            expand=False,
        )

    def renderables(self, text: str) -> List[RenderableType]:
        """Scan ``text`` and group fragments into Text runs and code panels."""
        items: List[RenderableType] = []
        current: Optional[Text] = None

        for fragment in scan(text):
            if isinstance(fragment, CodeBlock):
                if current is not None:
                    items.append(current)
                    current = None
                items.append(self.code_panel(fragment))
                continue

            if current is None:
                current = Text()
            if isinstance(fragment, BulletFragment):
                current.append(self.theme.bullet, style=self.theme.bullet_style)
            else:
                current.append(fragment.text, style=self.theme.style_for(fragment.emphasis))

        if current is not None:
            items.append(current)
        return items

    def print(self, text: str, console: Console) -> None:
        """Write the rendered answer to ``console``."""
        for item in self.renderables(text):
            if isinstance(item, Text):
                console.print(item, end="", soft_wrap=True)
            else:
                console.print(item)

    def render(self, text: str) -> str:
        """Return the rendered answer as a string with ANSI styling."""
        buffer = io.StringIO()
        console = Console(
            file=buffer,
            force_terminal=True,
            color_system=self.color_system,
            width=self.width,
            highlight=False,
        )
        self.print(text, console)
        return buffer.getvalue()


def render(text: str) -> str:
    """Render ``text`` with the configured theme."""
    return TerminalRenderer().render(text)
