"""Tests for hyperlink anchors and title lookup."""
import unittest
from unittest.mock import Mock

from docx_simple_html.model.elements import Hyperlink, Run, RunAtom
from docx_simple_html.renderer.hyperlinks import (
    HyperlinkRenderer,
    LinkKind,
    classify_href,
    first_heading_text,
    title_case_words,
)


def link(href: str, text: str = "text", anchor=None) -> Hyperlink:
    return Hyperlink(href=href, runs=[Run(atoms=[RunAtom.text(text)])], anchor=anchor)


class ClassifyHrefTest(unittest.TestCase):
    def test_kinds(self) -> None:
        cases = [
            ("", LinkKind.IN_PAGE),
            ("mailto:help@example.com", LinkKind.MAILTO),
            ("help@example.com", LinkKind.MAILTO),
            ("https://example.com", LinkKind.ABSOLUTE),
            ("HTTP://example.com", LinkKind.ABSOLUTE),
            ("//cdn.example.com/x", LinkKind.ABSOLUTE),
            ("rules.html", LinkKind.INTERNAL),
        ]
        for href, expected in cases:
            with self.subTest(href=href):
                self.assertIs(classify_href(href), expected)


class HyperlinkRendererTest(unittest.TestCase):
    """Anchor attributes per link kind."""

    def test_mailto(self) -> None:
        renderer = HyperlinkRenderer()
        for href in ("mailto:help@example.com", "help@example.com"):
            with self.subTest(href=href):
                markup = renderer.render(link(href, anchor="ignored"), "mail us")
                self.assertEqual(markup, '<a href="mailto:help@example.com">mail us</a>')

    def test_absolute_opens_new_window(self) -> None:
        markup = HyperlinkRenderer().render(link("https://example.com/x", anchor="part"), "x")
        self.assertEqual(markup, '<a href="https://example.com/x#part" target="_blank">x</a>')

    def test_in_page_anchor(self) -> None:
        markup = HyperlinkRenderer().render(link("", anchor="top"), "up")
        self.assertEqual(markup, '<a href="#top">up</a>')

    def test_internal_title_from_sibling_heading(self) -> None:
        read_sibling = Mock(return_value="<html><body><h1 class='title'>Game  Rules</h1><h1>Other</h1></body></html>")
        markup = HyperlinkRenderer(read_sibling).render(link("rules.html", "the rules"), "the rules")

        read_sibling.assert_called_once_with("rules.html")
        self.assertEqual(markup, '<a href="rules.html" data-title="Game Rules">the rules</a>')

    def test_internal_title_falls_back_to_link_text(self) -> None:
        for read_sibling in (None, Mock(return_value=None), Mock(return_value="<p>no heading</p>")):
            with self.subTest(read_sibling=read_sibling):
                markup = HyperlinkRenderer(read_sibling).render(link("play.html", "how to play"), "how to play")
                self.assertIn('data-title="How To Play"', markup)

    def test_unreadable_sibling_falls_back(self) -> None:
        read_sibling = Mock(side_effect=OSError("permission denied"))
        title = HyperlinkRenderer(read_sibling).lookup_title("play.html", "don't stop")
        self.assertEqual(title, "Don't Stop")

    def test_attributes_are_escaped(self) -> None:
        read_sibling = Mock(return_value='<h1>Tips &amp; "Tricks"</h1>')
        markup = HyperlinkRenderer(read_sibling).render(link("tips.html?a=1&b=2"), "tips")
        self.assertIn('href="tips.html?a=1&amp;b=2"', markup)
        self.assertIn('data-title="Tips &amp; &quot;Tricks&quot;"', markup)


class HelperTest(unittest.TestCase):
    def test_title_case_words(self) -> None:
        self.assertEqual(title_case_words("the rules of hearts"), "The Rules Of Hearts")
        self.assertEqual(title_case_words("iPhone setup"), "IPhone Setup")
        self.assertEqual(title_case_words("don’t panic"), "Don’t Panic")

    def test_first_heading_text(self) -> None:
        self.assertEqual(first_heading_text("<p>x</p><h1>\n  Hello\n world </h1>"), "Hello world")
        self.assertIsNone(first_heading_text("<p>x</p>"))
        self.assertIsNone(first_heading_text("<h1> </h1>"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
