"""
Tests for the answer renderer: the scanner state machine and the rich styling.
"""

import re

import pytest
from rich import box

from get_response.core.renderer import (
    BulletFragment,
    CodeBlock,
    Emphasis,
    Marker,
    ProseFragment,
    RenderState,
    RenderTheme,
    TerminalRenderer,
    detect_marker,
    render,
    scan,
)

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def plain(text: str) -> str:
    return ANSI_RE.sub("", text)


@pytest.fixture
def renderer():
    return TerminalRenderer(theme=RenderTheme(), width=60, color_system="standard")


class TestDetectMarker:
    def test_fence_in_prose(self):
        assert detect_marker("```py", 0, RenderState()) is Marker.FENCE

    def test_bold_in_prose(self):
        assert detect_marker("**x", 0, RenderState()) is Marker.BOLD

    def test_bold_wins_over_bullet(self):
        assert detect_marker("** x", 0, RenderState(at_line_start=True)) is Marker.BOLD

    def test_only_fence_counts_in_code_block(self):
        state = RenderState(in_code_block=True)
        assert detect_marker("**x", 0, state) is None
        assert detect_marker("* x", 0, state) is None
        assert detect_marker("```", 0, state) is Marker.FENCE

    def test_bullet_needs_line_start(self):
        assert detect_marker("* item", 0, RenderState(at_line_start=True)) is Marker.BULLET
        assert detect_marker("* item", 0, RenderState(at_line_start=False)) is None

    def test_plain_character(self):
        assert detect_marker("abc", 1, RenderState()) is None


class TestScanProse:
    def test_plain_text_is_one_primary_run(self):
        assert scan("plain text") == [ProseFragment("plain text", Emphasis.PRIMARY)]

    def test_empty_input(self):
        assert scan("") == []

    def test_bold_markers_toggle_and_are_dropped(self):
        assert scan("a **b** c") == [
            ProseFragment("a ", Emphasis.PRIMARY),
            ProseFragment("b", Emphasis.SECONDARY),
            ProseFragment(" c", Emphasis.PRIMARY),
        ]

    def test_even_number_of_markers_returns_to_primary(self):
        fragments = scan("**a****b**c")
        assert "".join(f.text for f in fragments) == "abc"
        assert fragments[-1] == ProseFragment("c", Emphasis.PRIMARY)

    def test_odd_number_of_markers_stays_secondary(self):
        assert scan("**open ended")[-1].emphasis is Emphasis.SECONDARY

    def test_bullets_at_line_start(self):
        assert scan("* one\n* two") == [
            BulletFragment(Emphasis.PRIMARY),
            ProseFragment(" one\n", Emphasis.PRIMARY),
            BulletFragment(Emphasis.PRIMARY),
            ProseFragment(" two", Emphasis.PRIMARY),
        ]

    def test_indented_bullet(self):
        assert scan("  * nested") == [
            ProseFragment("  ", Emphasis.PRIMARY),
            BulletFragment(Emphasis.PRIMARY),
            ProseFragment(" nested", Emphasis.PRIMARY),
        ]

    def test_asterisk_inside_a_line_is_kept(self):
        assert scan("2 * 3") == [ProseFragment("2 * 3", Emphasis.PRIMARY)]

    def test_bullet_inside_bold_section(self):
        fragments = scan("**Tips**\n* first")
        assert BulletFragment(Emphasis.PRIMARY) in fragments


class TestScanCodeBlocks:
    def test_fenced_block_with_language(self):
        assert scan("Intro\n```python\nprint('hi')\n```\nAfter") == [
            ProseFragment("Intro\n", Emphasis.PRIMARY),
            CodeBlock("print('hi')\n", "python"),
            ProseFragment("After", Emphasis.PRIMARY),
        ]

    def test_empty_language_label(self):
        assert scan("```\nls -la\n```") == [CodeBlock("ls -la\n", "")]

    def test_code_is_kept_verbatim(self):
        assert scan("```\n**x** * y\n```") == [CodeBlock("**x** * y\n", "")]

    def test_one_block_per_fence_pair(self):
        text = "```sh\necho 1\n```\nthen\n```js\nconsole.log(2)\n```\n"
        blocks = [f for f in scan(text) if isinstance(f, CodeBlock)]
        assert blocks == [CodeBlock("echo 1\n", "sh"), CodeBlock("console.log(2)\n", "js")]

    def test_unterminated_block_is_dropped(self):
        assert scan("text\n```sh\nls\n") == [ProseFragment("text\n", Emphasis.PRIMARY)]

    def test_fence_inside_code_always_closes(self):
        assert scan("```\na```b```\nlost") == [
            CodeBlock("a", ""),
            ProseFragment("b", Emphasis.PRIMARY),
        ]

    def test_emphasis_survives_code_block(self):
        fragments = scan("**bold\n```\ncode\n```\nstill bold")
        assert fragments[-1] == ProseFragment("still bold", Emphasis.SECONDARY)


class TestRenderTheme:
    def test_defaults_come_from_theme_yaml(self):
        theme = RenderTheme.from_config()
        assert theme.primary_style == "italic cyan"
        assert theme.secondary_style == "yellow"
        assert theme.box == "double"

    def test_unknown_keys_are_ignored(self):
        theme = RenderTheme.from_config({"primary_style": "bold red", "sparkles": True})
        assert theme.primary_style == "bold red"
        assert theme.code_style == "green"

    def test_panel_box(self):
        assert RenderTheme().panel_box() is box.DOUBLE
        assert RenderTheme(box="rounded").panel_box() is box.ROUNDED
        assert RenderTheme(box="no-such-box").panel_box() is box.DOUBLE

    def test_style_for(self):
        theme = RenderTheme()
        assert theme.style_for(Emphasis.PRIMARY) == "italic cyan"
        assert theme.style_for(Emphasis.SECONDARY) == "yellow"


class TestTerminalRenderer:
    def test_plain_text_characters_in_order(self, renderer):
        assert plain(renderer.render("plain text")) == "plain text"

    def test_primary_and_secondary_styles(self, renderer):
        output = renderer.render("calm **loud**")
        assert "\x1b[3;36m" in output
        assert "\x1b[33m" in output
        assert "**" not in plain(output)

    def test_bullet_glyph(self, renderer):
        assert plain(renderer.render("* item")) == "• item"

    def test_code_panel(self, renderer):
        output = plain(renderer.render("Look:\n```python\nprint('hi')\n```\n"))
        assert output.startswith("Look:\n")
        assert "╔" in output and "╝" in output
        assert "python" in output
        assert "print('hi')" in output
        assert output.endswith("\n")

    def test_panel_per_block(self, renderer):
        output = plain(renderer.render("```\none\n```\n```\ntwo\n```\n"))
        assert output.count("╔") == 2

    def test_unterminated_block_not_rendered(self, renderer):
        output = plain(renderer.render("before\n```\nnever shown"))
        assert output == "before\n"

    def test_print_writes_to_console(self, renderer, console, console_output):
        renderer.print("hello **world**", console)
        assert console_output() == "hello world"

    def test_module_level_render(self):
        assert "plain text" in plain(render("plain text"))
