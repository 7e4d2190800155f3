"""Render Word tables as HTML tables."""
from __future__ import annotations

import html
from typing import Callable, List, Sequence

from docx_simple_html.model.elements import Block, Table, TableCell

# Renders a cell's block sequence; supplied by the block assembler so nested
# tables recurse through it.
CellRenderer = Callable[[Sequence[Block]], str]


def render_table(table: Table, render_cell: CellRenderer) -> str:
    """Return ``<table>`` markup for ``table``; cell content goes through ``render_cell``."""
    class_attr = f' class="{html.escape(table.style)}"' if table.style else ""
    parts: List[str] = [f"<table{class_attr}>\n"]
    for row in table.rows:
        parts.append("<tr>")
        for cell in row.cells:
            parts.append(f"<td{_colspan_attr(cell)}>")
            parts.append(render_cell(cell.blocks))
            parts.append("</td>\n")
        parts.append("</tr>\n")
    parts.append("</table>")
    return "".join(parts)


def _colspan_attr(cell: TableCell) -> str:
    if cell.col_span is None:
        return ""
    return f' colspan="{cell.col_span}"'
