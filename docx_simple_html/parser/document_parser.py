"""Parse the WordprocessingML body into paragraphs, runs and tables.

Drawings and hyperlinks are substituted while the tree is walked: a drawing
becomes an image atom of the run that holds it, a hyperlink becomes an inline
item carrying its own runs. Relationship ids are resolved through the
conversion's :class:`RelationshipTable`.
"""
from __future__ import annotations

from typing import List, Optional, Union
from xml.etree import ElementTree as ET

from docx_simple_html.model.elements import (
    Block,
    DocumentBody,
    Hyperlink,
    InlineItem,
    Paragraph,
    Run,
    RunAtom,
    Table,
    TableCell,
    TableRow,
)
from docx_simple_html.parser.rels_parser import RelationshipTable
from docx_simple_html.utils.logger import get_logger
from docx_simple_html.utils.xml_utils import Namespaces, get_attr, is_toggle_on, local_name, parse_xml

LOGGER = get_logger(__name__)

DRAWING_PLACEHOLDER = "[Word Drawing Removed]"

# Wrappers whose children belong to the surrounding block or paragraph.
_TRANSPARENT_BLOCK_TAGS = {"customXml"}
_TRANSPARENT_INLINE_TAGS = {"ins", "smartTag", "customXml", "fldSimple", "moveTo", "dir", "bdo"}

_IGNORED_BLOCK_TAGS = {
    "sectPr", "tcPr", "tblPr", "tblGrid", "bookmarkStart", "bookmarkEnd", "proofErr", "permStart", "permEnd",
}
_IGNORED_INLINE_TAGS = {
    "pPr", "del", "moveFrom", "bookmarkStart", "bookmarkEnd", "proofErr", "commentRangeStart", "commentRangeEnd",
    "permStart", "permEnd",
}
_IGNORED_RUN_TAGS = {
    "rPr", "lastRenderedPageBreak", "noBreakHyphen", "softHyphen", "fldChar", "instrText", "delText",
    "footnoteReference", "endnoteReference", "commentReference",
}


def locate_body(markup: Union[str, bytes]) -> Optional[ET.Element]:
    """Return the ``w:body`` element of ``document.xml`` markup, or None if there is none."""
    try:
        root = parse_xml(markup).getroot()
    except ET.ParseError as exc:
        LOGGER.warning("Document markup is not well-formed XML: %s", exc)
        return None

    if local_name(root.tag) == "body":
        return root
    body = root.find(".//w:body", Namespaces.WORD)
    if body is None:
        LOGGER.warning("document.xml missing body element")
    return body


class DocumentParser:
    """Transforms Word body XML into model elements."""

    def __init__(self, relationships: RelationshipTable) -> None:
        self._relationships = relationships

    def parse(self, markup: Union[str, bytes]) -> Optional[DocumentBody]:
        """Parse complete ``document.xml`` markup; None when the body is missing."""
        body = locate_body(markup)
        if body is None:
            return None
        return self.parse_body(body)

    def parse_body(self, body: ET.Element) -> DocumentBody:
        return DocumentBody(blocks=self._parse_blocks(body))

    # ------------------------------------------------------------------
    # Blocks

    def _parse_blocks(self, container: ET.Element) -> List[Block]:
        blocks: List[Block] = []
        for child in list(container):
            tag = local_name(child.tag)
            if tag == "p":
                blocks.append(self._parse_paragraph(child))
            elif tag == "tbl":
                blocks.append(self._parse_table(child))
            elif tag == "sdt":
                content = child.find("w:sdtContent", Namespaces.WORD)
                if content is not None:
                    blocks.extend(self._parse_blocks(content))
            elif tag in _TRANSPARENT_BLOCK_TAGS:
                blocks.extend(self._parse_blocks(child))
            elif tag not in _IGNORED_BLOCK_TAGS:
                LOGGER.debug("Skipping block element: %s", tag)
        return blocks

    def _parse_paragraph(self, paragraph_el: ET.Element) -> Paragraph:
        style_el = paragraph_el.find("w:pPr/w:pStyle", Namespaces.WORD)
        return Paragraph(items=self._parse_inline(paragraph_el), style=get_attr(style_el, "w:val"))

    def _parse_table(self, table_el: ET.Element) -> Table:
        style_el = table_el.find("w:tblPr/w:tblStyle", Namespaces.WORD)
        rows: List[TableRow] = []
        for row_el in table_el.findall("w:tr", Namespaces.WORD):
            cells = [
                TableCell(blocks=self._parse_blocks(cell_el), col_span=self._grid_span(cell_el))
                for cell_el in row_el.findall("w:tc", Namespaces.WORD)
            ]
            rows.append(TableRow(cells=cells))
        return Table(rows=rows, style=get_attr(style_el, "w:val"))

    @staticmethod
    def _grid_span(cell_el: ET.Element) -> Optional[int]:
        value = get_attr(cell_el.find("w:tcPr/w:gridSpan", Namespaces.WORD), "w:val")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            LOGGER.debug("Ignoring non-numeric gridSpan %r", value)
            return None

    # ------------------------------------------------------------------
    # Inline content

    def _parse_inline(self, container: ET.Element) -> List[InlineItem]:
        items: List[InlineItem] = []
        for child in list(container):
            tag = local_name(child.tag)
            if tag == "r":
                items.append(self._parse_run(child))
            elif tag == "hyperlink":
                items.extend(self._parse_hyperlink(child))
            elif tag == "sdt":
                content = child.find("w:sdtContent", Namespaces.WORD)
                if content is not None:
                    items.extend(self._parse_inline(content))
            elif tag in _TRANSPARENT_INLINE_TAGS:
                items.extend(self._parse_inline(child))
            elif tag not in _IGNORED_INLINE_TAGS:
                LOGGER.debug("Skipping paragraph child element: %s", tag)
        return items

    def _parse_run(self, run_el: ET.Element) -> Run:
        rpr = run_el.find("w:rPr", Namespaces.WORD)
        bold = rpr is not None and is_toggle_on(rpr.find("w:b", Namespaces.WORD))
        italic = rpr is not None and is_toggle_on(rpr.find("w:i", Namespaces.WORD))

        atoms: List[RunAtom] = []
        for child in list(run_el):
            tag = local_name(child.tag)
            if tag == "t":
                if child.text:
                    atoms.append(RunAtom.text(child.text))
            elif tag == "br":
                # Page and column breaks carry layout only.
                if get_attr(child, "w:type") in (None, "textWrapping"):
                    atoms.append(RunAtom.line_break())
            elif tag == "cr":
                atoms.append(RunAtom.line_break())
            elif tag == "tab":
                atoms.append(RunAtom.tab())
            elif tag == "drawing":
                atoms.append(self._substitute_drawing(child))
            elif tag == "AlternateContent":
                drawing = child.find(".//w:drawing", Namespaces.WORD)
                if drawing is not None:
                    atoms.append(self._substitute_drawing(drawing))
            elif tag not in _IGNORED_RUN_TAGS:
                LOGGER.debug("Skipping run child element: %s", tag)

        return Run(atoms=atoms, bold=bold, italic=italic)

    def _substitute_drawing(self, drawing_el: ET.Element) -> RunAtom:
        blip = drawing_el.find(".//a:blip", Namespaces.DRAWING)
        r_id = get_attr(blip, "r:embed") or get_attr(blip, "r:link")
        if not r_id:
            return RunAtom.text(DRAWING_PLACEHOLDER)
        # Embedded and linked images alike point at whatever the table resolved.
        return RunAtom.image(self._relationships.resolve(r_id))

    def _parse_hyperlink(self, hyperlink_el: ET.Element) -> List[InlineItem]:
        r_id = get_attr(hyperlink_el, "r:id")
        anchor = get_attr(hyperlink_el, "w:anchor")
        runs = [item for item in self._parse_inline(hyperlink_el) if isinstance(item, Run)]

        if r_id:
            href = self._relationships.resolve(r_id)
        elif anchor:
            href = ""
        else:
            return list(runs)

        return [Hyperlink(href=href, runs=runs, anchor=anchor)]
