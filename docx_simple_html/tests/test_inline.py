"""Tests for inline run formatting."""
import itertools
import re
import unittest

from docx_simple_html.model.elements import Hyperlink, Run, RunAtom
from docx_simple_html.renderer.inline import FormatState, InlineFormatter, close_for, format_inline, open_for

_EMPHASIS_TAG = re.compile(r"<(/?)([bi])>")

EMPHASIS = {
    "neither": (False, False),
    "bold": (True, False),
    "italic": (False, True),
    "both": (True, True),
}


def text_run(text: str, bold: bool = False, italic: bool = False) -> Run:
    return Run(atoms=[RunAtom.text(text)], bold=bold, italic=italic)


class InlineFormatterTest(unittest.TestCase):
    """Emphasis nesting and atom rendering."""

    def assert_well_nested(self, markup: str) -> None:
        stack = []
        for closing, tag in _EMPHASIS_TAG.findall(markup):
            if closing:
                self.assertTrue(stack, f"unexpected </{tag}> in {markup}")
                self.assertEqual(stack.pop(), tag, markup)
            else:
                self.assertNotIn(tag, stack, markup)
                stack.append(tag)
        self.assertEqual(stack, [], markup)

    def test_every_emphasis_sequence_is_well_nested(self) -> None:
        for length in range(1, 5):
            for combo in itertools.product(EMPHASIS, repeat=length):
                runs = [text_run(name, *EMPHASIS[name]) for name in combo]
                with self.subTest(combo=combo):
                    self.assert_well_nested(format_inline(runs))

    def test_bold_then_both_then_italic(self) -> None:
        markup = format_inline([text_run("a", bold=True), text_run("b", True, True), text_run("c", italic=True)])
        self.assertEqual(markup, "<b>a<i>b</i></b><i>c</i>")

    def test_italic_opened_first_closes_last(self) -> None:
        markup = format_inline([text_run("a", italic=True), text_run("b", True, True), text_run("c")])
        self.assertEqual(markup, "<i>a<b>b</b></i>c")

    def test_atoms(self) -> None:
        run = Run(atoms=[RunAtom.text("a<b"), RunAtom.tab(), RunAtom.line_break(), RunAtom.image("pic 1.png")])
        self.assertEqual(format_inline([run]), 'a&lt;b&nbsp;&nbsp;&nbsp;&nbsp;<br/><img src="pic 1.png" />')

    def test_empty_runs_do_not_toggle_emphasis(self) -> None:
        markup = format_inline([text_run("x", bold=True), Run(atoms=[]), text_run("y", bold=True)])
        self.assertEqual(markup, "<b>xy</b>")

    def test_hyperlink_closes_open_emphasis(self) -> None:
        link = Hyperlink(href="https://example.com", runs=[text_run("site", italic=True)])
        markup = InlineFormatter().format([text_run("see ", bold=True), link])
        self.assertEqual(markup, '<b>see </b><a href="https://example.com" target="_blank"><i>site</i></a>')

    def test_state_helpers(self) -> None:
        out = []
        state = open_for(FormatState.CLOSED, True, True, out)
        self.assertIs(state, FormatState.BOLD_ITALIC)
        state = close_for(state, True, False, out)
        self.assertIs(state, FormatState.CLOSED)
        self.assertEqual("".join(out), "<b><i></i></b>")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
