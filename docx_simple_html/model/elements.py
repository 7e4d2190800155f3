"""In-memory representation of the parsed document body."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class AtomKind(str, Enum):
    """Kinds of inline content a run can carry."""

    TEXT = "text"
    BREAK = "break"
    TAB = "tab"
    IMAGE = "image"


@dataclass(frozen=True, slots=True)
class RunAtom:
    """Smallest renderable piece of a run: text, a break, a tab or an image."""

    kind: AtomKind
    value: str = ""

    @classmethod
    def text(cls, value: str) -> "RunAtom":
        return cls(AtomKind.TEXT, value)

    @classmethod
    def line_break(cls) -> "RunAtom":
        return cls(AtomKind.BREAK)

    @classmethod
    def tab(cls) -> "RunAtom":
        return cls(AtomKind.TAB)

    @classmethod
    def image(cls, src: str) -> "RunAtom":
        return cls(AtomKind.IMAGE, src)


@dataclass(slots=True)
class Run:
    """A contiguous run of inline content sharing bold/italic emphasis."""

    atoms: List[RunAtom] = field(default_factory=list)
    bold: bool = False
    italic: bool = False

    @property
    def plain_text(self) -> str:
        return "".join(atom.value for atom in self.atoms if atom.kind is AtomKind.TEXT)


@dataclass(slots=True)
class Hyperlink:
    """Inline hyperlink; its runs are formatted exactly like paragraph runs."""

    href: str
    runs: List[Run] = field(default_factory=list)
    anchor: Optional[str] = None

    # Hyperlinks sit between runs without emphasis of their own.
    bold = False
    italic = False

    @property
    def plain_text(self) -> str:
        return "".join(run.plain_text for run in self.runs)


InlineItem = Run | Hyperlink


@dataclass(slots=True)
class Paragraph:
    """Paragraph block with an optional style name and inline content."""

    items: List[InlineItem] = field(default_factory=list)
    style: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """True when no run carries content and there is no hyperlink."""
        return not any(isinstance(item, Hyperlink) or item.atoms for item in self.items)


@dataclass(slots=True)
class TableCell:
    """Single table cell container."""

    blocks: List["Block"] = field(default_factory=list)
    col_span: Optional[int] = None


@dataclass(slots=True)
class TableRow:
    """Row with a sequence of cells."""

    cells: List[TableCell] = field(default_factory=list)


@dataclass(slots=True)
class Table:
    """Tabular structure extracted from Word tables."""

    rows: List[TableRow] = field(default_factory=list)
    style: Optional[str] = None


Block = Paragraph | Table


@dataclass(slots=True)
class DocumentBody:
    """Ordered block sequence of a ``w:body`` element."""

    blocks: List[Block] = field(default_factory=list)
