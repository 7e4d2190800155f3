"""Inline run formatting with well-nested bold/italic tags."""
from __future__ import annotations

import html
from enum import Enum
from typing import List, Optional, Sequence

from docx_simple_html.model.elements import AtomKind, Hyperlink, InlineItem, Run, RunAtom
from docx_simple_html.renderer.hyperlinks import HyperlinkRenderer

TAB_HTML = "&nbsp;" * 4
BREAK_HTML = "<br/>"


class FormatState(Enum):
    """Which emphasis tags are currently open, and in which order they opened."""

    CLOSED = "closed"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"  # <b><i>
    ITALIC_BOLD = "italic_bold"  # <i><b>

    @property
    def bold(self) -> bool:
        return self in (FormatState.BOLD, FormatState.BOLD_ITALIC, FormatState.ITALIC_BOLD)

    @property
    def italic(self) -> bool:
        return self in (FormatState.ITALIC, FormatState.BOLD_ITALIC, FormatState.ITALIC_BOLD)

    @property
    def both(self) -> bool:
        return self in (FormatState.BOLD_ITALIC, FormatState.ITALIC_BOLD)


# The tag opened later closes first.
_CLOSE_TAGS = {
    FormatState.CLOSED: "",
    FormatState.BOLD: "</b>",
    FormatState.ITALIC: "</i>",
    FormatState.BOLD_ITALIC: "</i></b>",
    FormatState.ITALIC_BOLD: "</b></i>",
}


def close_for(state: FormatState, bold: bool, italic: bool, out: List[str]) -> FormatState:
    """Close whatever the next item does not continue; returns the remaining state."""
    if state.both and not (bold and italic):
        out.append(_CLOSE_TAGS[state])
        return FormatState.CLOSED
    if state.italic and not italic:
        out.append("</i>")
        return FormatState.CLOSED
    if state.bold and not bold:
        out.append("</b>")
        return FormatState.CLOSED
    return state


def open_for(state: FormatState, bold: bool, italic: bool, out: List[str]) -> FormatState:
    """Open the tags the next item needs; bold always opens before italic."""
    if bold and not state.bold:
        out.append("<b>")
        state = FormatState.ITALIC_BOLD if state.italic else FormatState.BOLD
    if italic and not state.italic:
        out.append("<i>")
        state = FormatState.BOLD_ITALIC if state.bold else FormatState.ITALIC
    return state


def render_atom(atom: RunAtom) -> str:
    if atom.kind is AtomKind.BREAK:
        return BREAK_HTML
    if atom.kind is AtomKind.TAB:
        return TAB_HTML
    if atom.kind is AtomKind.IMAGE:
        return f'<img src="{html.escape(atom.value)}" />'
    return html.escape(atom.value, quote=False)


class InlineFormatter:
    """Formats a sequence of runs and hyperlinks as inline HTML."""

    def __init__(self, hyperlinks: Optional[HyperlinkRenderer] = None) -> None:
        self._hyperlinks = hyperlinks or HyperlinkRenderer()

    def format(self, items: Sequence[InlineItem]) -> str:
        out: List[str] = []
        state = FormatState.CLOSED

        for item in items:
            # Runs without content (property-only runs) must not toggle emphasis.
            if isinstance(item, Run) and not item.atoms:
                continue

            state = close_for(state, item.bold, item.italic, out)
            state = open_for(state, item.bold, item.italic, out)

            if isinstance(item, Hyperlink):
                out.append(self._hyperlinks.render(item, self.format(item.runs)))
            else:
                out.extend(render_atom(atom) for atom in item.atoms)

        out.append(_CLOSE_TAGS[state])
        return "".join(out)


def format_inline(items: Sequence[InlineItem], hyperlinks: Optional[HyperlinkRenderer] = None) -> str:
    """Convenience wrapper around :class:`InlineFormatter`."""
    return InlineFormatter(hyperlinks).format(items)
