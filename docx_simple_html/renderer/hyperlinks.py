"""Anchor rendering for hyperlinks found in the document body."""
from __future__ import annotations

import html
import re
from enum import Enum
from typing import Callable, Optional

from bs4 import BeautifulSoup

from docx_simple_html.model.elements import Hyperlink
from docx_simple_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

# href -> text of the sibling output file, or None when it does not exist
SiblingReader = Callable[[str], Optional[str]]

_ABSOLUTE_URL = re.compile(r"^(?:https?:)?//", re.IGNORECASE)
_LEADING_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*:(?://)?", re.IGNORECASE)
_WORD_START = re.compile(r"(?<![\w'’])[a-z]")


class LinkKind(str, Enum):
    """How an anchor is emitted."""

    MAILTO = "mailto"
    ABSOLUTE = "absolute"
    INTERNAL = "internal"
    IN_PAGE = "in_page"


def classify_href(href: str) -> LinkKind:
    """Classify a resolved hyperlink target."""
    if not href:
        return LinkKind.IN_PAGE
    if "@" in href:
        return LinkKind.MAILTO
    if _ABSOLUTE_URL.match(href):
        return LinkKind.ABSOLUTE
    return LinkKind.INTERNAL


def title_case_words(text: str) -> str:
    """Capitalize the first letter of every word, leaving the rest untouched."""
    return _WORD_START.sub(lambda match: match.group(0).upper(), text)


def first_heading_text(markup: str) -> Optional[str]:
    """Return the text of the first ``<h1>`` in an HTML document, if any."""
    heading = BeautifulSoup(markup, "html.parser").find("h1")
    if heading is None:
        return None
    text = " ".join(heading.get_text().split())
    return text or None


class HyperlinkRenderer:
    """Turns a :class:`Hyperlink` plus its formatted inner HTML into an anchor tag."""

    def __init__(self, read_sibling: Optional[SiblingReader] = None) -> None:
        self._read_sibling = read_sibling

    def render(self, link: Hyperlink, inner_html: str) -> str:
        kind = classify_href(link.href)
        attributes = []

        if kind is LinkKind.MAILTO:
            href = "mailto:" + _LEADING_SCHEME.sub("", link.href, count=1)
        else:
            href = link.href + (f"#{link.anchor}" if link.anchor else "")

        if kind is LinkKind.ABSOLUTE:
            attributes.append(' target="_blank"')
        elif kind is LinkKind.INTERNAL:
            title = self.lookup_title(link.href, link.plain_text)
            attributes.append(f' data-title="{html.escape(title)}"')

        return f'<a href="{html.escape(href)}"{"".join(attributes)}>{inner_html}</a>'

    def lookup_title(self, href: str, visible_text: str) -> str:
        """Title of the page an internal link points at, falling back to the link text."""
        markup = self._read_sibling_markup(href)
        if markup is not None:
            title = first_heading_text(markup)
            if title:
                return title
        return title_case_words(visible_text)

    def _read_sibling_markup(self, href: str) -> Optional[str]:
        if self._read_sibling is None:
            return None
        try:
            return self._read_sibling(href)
        except OSError as exc:
            LOGGER.debug("Sibling page %s unavailable for title lookup: %s", href, exc)
            return None
