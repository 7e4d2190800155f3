"""Assemble paragraphs and tables into headings, lists and plain blocks."""
from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from docx_simple_html.model.elements import Block, Paragraph, Table
from docx_simple_html.model.options import DEFAULT_LIST_STYLES, DEFAULT_PLAIN_STYLES
from docx_simple_html.renderer.inline import InlineFormatter
from docx_simple_html.renderer.tables import render_table

_HEADING_STYLE = re.compile(r"^Heading(?P<level>[1-9])$")

LIST_WRAPPER_TAG = "ul"
LIST_ITEM_TAG = "li"


@dataclass(frozen=True)
class BlockRole:
    """Output tag and optional class chosen for a paragraph style."""

    tag: str
    css_class: Optional[str] = None

    @property
    def is_list_item(self) -> bool:
        return self.tag == LIST_ITEM_TAG

    def open_tag(self) -> str:
        if self.css_class:
            return f'<{self.tag} class="{html.escape(self.css_class)}">'
        return f"<{self.tag}>"

    def close_tag(self) -> str:
        return f"</{self.tag}>"


PLAIN = BlockRole("p")


class BlockAssembler:
    """Scans a block sequence once, tracking whether a list wrapper is open."""

    def __init__(
        self,
        formatter: InlineFormatter,
        list_styles: Sequence[str] = DEFAULT_LIST_STYLES,
        plain_styles: Sequence[str] = DEFAULT_PLAIN_STYLES,
    ) -> None:
        self._formatter = formatter
        self._list_styles = frozenset(list_styles)
        self._plain_styles = frozenset(plain_styles)

    def classify(self, style: Optional[str]) -> BlockRole:
        if not style or "Normal" in style or style in self._plain_styles:
            return PLAIN
        if style in self._list_styles:
            return BlockRole(LIST_ITEM_TAG)
        heading = _HEADING_STYLE.match(style)
        if heading:
            return BlockRole(f"h{heading.group('level')}")
        return BlockRole("p", style)

    def assemble(self, blocks: Sequence[Block]) -> str:
        out: List[str] = []
        in_list = False

        for block in blocks:
            if isinstance(block, Table):
                # Tables travel inside a plain paragraph; cleanup turns it into a wrapper div.
                role = PLAIN
                content = render_table(block, self.assemble)
            else:
                if block.is_empty:
                    continue
                role = self.classify(block.style)
                content = None

            if role.is_list_item and not in_list:
                out.append(f"<{LIST_WRAPPER_TAG}>\n")
                in_list = True
            elif not role.is_list_item and in_list:
                out.append(f"</{LIST_WRAPPER_TAG}>\n")
                in_list = False

            if content is None:
                content = self._render_paragraph(block)
            if not content:
                continue

            out.append(f"{role.open_tag()}{content}{role.close_tag()}\n")

        if in_list:
            out.append(f"</{LIST_WRAPPER_TAG}>\n")

        return "".join(out)

    def _render_paragraph(self, paragraph: Paragraph) -> str:
        return self._formatter.format(paragraph.items)
