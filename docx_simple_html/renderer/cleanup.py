"""Final cleanup passes over the assembled HTML fragment.

Each pass works on a parsed tree and is idempotent; the passes run in a fixed
order because later ones rely on what earlier ones removed. Running the whole
pipeline on its own output changes nothing.
"""
from __future__ import annotations

import re
from typing import Callable, Iterable, List, NamedTuple, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, PageElement, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from docx_simple_html.model.options import ConversionOptions
from docx_simple_html.renderer.accordion import build_accordion
from docx_simple_html.utils.logger import get_logger
from docx_simple_html.utils.text_normalizer import VocabularyNormalizer

LOGGER = get_logger(__name__)

TABLE_WRAPPER_CLASS = "table-wrapper"
CAPTIONED_IMAGE_CLASS = "img-in-p"
TITLE_STYLE_CLASS = "Title"
TITLE_HEADING_CLASS = "title"
LIST_INTRO_CLASS = "list-intro"
LIST_AFTER_INTRO_CLASS = "list-after-intro"

_EMPHASIS_TAGS = ["b", "i"]
_ABSOLUTE_SRC = re.compile(r"^(?:[a-z][a-z0-9+.-]*:)?//|^/|^data:", re.IGNORECASE)


def _substitute_entities(value: str) -> str:
    # Minimal escaping, but keep non-breaking spaces visible as entities.
    return EntitySubstitution.substitute_xml(value).replace("\xa0", "&nbsp;")


class _InsertionOrderFormatter(HTMLFormatter):
    """Writes attributes in the order they were set instead of sorting them."""

    def attributes(self, tag: Tag):
        return list(tag.attrs.items())


OUTPUT_FORMATTER = _InsertionOrderFormatter(entity_substitution=_substitute_entities)

# Whitespace html.parser collapses to a single "\n" or " " when it re-reads the output.
_ASCII_SPACES = " \n\t\x0c\r"
_PRESERVE_WHITESPACE_TAGS = ("pre", "textarea", "script", "style")


class CleanedHtml(NamedTuple):
    html: str
    title: Optional[str]


# ----------------------------------------------------------------------
# Tree helpers


def _is_blank(node: PageElement) -> bool:
    return isinstance(node, NavigableString) and (isinstance(node, Comment) or not node.strip())


def _significant(nodes: Iterable[PageElement]) -> List[PageElement]:
    return [node for node in nodes if not _is_blank(node)]


def _is_tag(node: Optional[PageElement], *names: str) -> bool:
    return isinstance(node, Tag) and node.name in names


def _is_blank_paragraph(node: PageElement) -> bool:
    """A paragraph the break and empty-paragraph passes would delete."""
    if not _is_tag(node, "p"):
        return False
    return all(_is_blank(child) or _is_tag(child, "br") for child in node.contents)


def _next_significant_sibling(tag: Tag) -> Optional[PageElement]:
    for sibling in tag.next_siblings:
        if not _is_blank(sibling):
            return sibling
    return None


def _text_of(tag: Tag) -> str:
    return " ".join(tag.get_text().split())


def _strip_edge_breaks(tag: Tag) -> None:
    """Remove ``<br>`` elements (and surrounding whitespace) at either edge of ``tag``."""
    for from_end in (False, True):
        while True:
            nodes = list(reversed(tag.contents)) if from_end else list(tag.contents)
            skipped: List[PageElement] = []
            edge: Optional[PageElement] = None
            for node in nodes:
                if _is_blank(node):
                    skipped.append(node)
                    continue
                edge = node
                break
            if not _is_tag(edge, "br"):
                break
            for node in skipped:
                node.extract()
            edge.extract()


def _trim_whitespace(tag: Tag) -> None:
    """Strip leading and trailing whitespace from the text at the edges of ``tag``."""
    while tag.contents and _is_blank(tag.contents[0]):
        tag.contents[0].extract()
    while tag.contents and _is_blank(tag.contents[-1]):
        tag.contents[-1].extract()
    if tag.contents and isinstance(tag.contents[0], NavigableString):
        tag.contents[0].replace_with(tag.contents[0].lstrip())
    if tag.contents and isinstance(tag.contents[-1], NavigableString):
        tag.contents[-1].replace_with(tag.contents[-1].rstrip())


# ----------------------------------------------------------------------
# Passes


def wrap_tables(soup: BeautifulSoup) -> None:
    """``<p><table>…</table></p>`` becomes ``<div class="table-wrapper">``."""
    for paragraph in soup.find_all("p"):
        if paragraph.attrs:
            continue
        children = _significant(paragraph.contents)
        if children and _is_tag(children[0], "table"):
            paragraph.name = "div"
            paragraph["class"] = TABLE_WRAPPER_CLASS


def unwrap_lonely_cell_paragraphs(soup: BeautifulSoup) -> None:
    """A cell holding a single paragraph keeps the paragraph's content and class only."""
    for cell in soup.find_all("td"):
        children = [child for child in _significant(cell.contents) if not _is_blank_paragraph(child)]
        if len(children) != 1 or not _is_tag(children[0], "p"):
            continue
        paragraph = children[0]
        for child in list(cell.contents):
            if child is not paragraph:
                child.extract()
        css_class = paragraph.get("class")
        if css_class and not cell.get("class"):
            cell["class"] = css_class
        paragraph.unwrap()


def _leading_image(paragraph: Tag) -> Optional[Tag]:
    node: Tag = paragraph
    while True:
        children = [child for child in _significant(node.contents) if not _is_tag(child, "br")]
        if not children:
            return None
        first = children[0]
        if _is_tag(first, "img"):
            return first
        if not _is_tag(first, *_EMPHASIS_TAGS):
            return None
        node = first


def caption_images(soup: BeautifulSoup, src_prefix: str = "") -> None:
    """Wrap a paragraph that starts with an image, plus its caption, in a captioned block."""
    for paragraph in soup.find_all("p"):
        if paragraph.attrs:
            continue
        image = _leading_image(paragraph)
        if image is None:
            continue

        src = image.get("src", "")
        image.extract()
        for emphasis in paragraph.find_all(_EMPHASIS_TAGS):
            emphasis.unwrap()
        _strip_edge_breaks(paragraph)
        _trim_whitespace(paragraph)

        if src_prefix and not _ABSOLUTE_SRC.match(src):
            src = src_prefix + src
        captioned = soup.new_tag("img", attrs={"alt": _text_of(paragraph), "src": src})
        paragraph.insert(0, captioned)
        paragraph.insert(1, soup.new_tag("br"))
        paragraph["class"] = CAPTIONED_IMAGE_CLASS


def remove_edge_breaks(soup: BeautifulSoup) -> None:
    for paragraph in soup.find_all("p"):
        _strip_edge_breaks(paragraph)


def remove_empty_paragraphs(soup: BeautifulSoup) -> None:
    for paragraph in soup.find_all("p"):
        if paragraph.find(True) is not None or paragraph.get_text().strip():
            continue
        following = paragraph.next_sibling
        if following is not None and _is_blank(following):
            following.extract()
        paragraph.decompose()


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    """Promote a leading Title paragraph, then read the title from the first ``<h1>``."""
    title: Optional[str] = None

    children = _significant(soup.contents)
    first = children[0] if children else None
    if _is_tag(first, "p") and first.get("class") == [TITLE_STYLE_CLASS]:
        title = _text_of(first)
        first.name = "h1"
        first["class"] = TITLE_HEADING_CLASS

    # The first <h1> wins, even over a Title paragraph promoted just above.
    heading = soup.find("h1")
    if heading is not None:
        title = _text_of(heading)
        heading["class"] = TITLE_HEADING_CLASS

    return title


def mark_list_intros(soup: BeautifulSoup) -> None:
    """Join a paragraph ending in a colon to the list right after it."""
    for paragraph in soup.find_all("p"):
        if paragraph.attrs or not paragraph.contents:
            continue
        last = paragraph.contents[-1]
        if not isinstance(last, NavigableString) or not last.rstrip().endswith(":"):
            continue
        following = _next_significant_sibling(paragraph)
        if not _is_tag(following, "ul") or following.attrs:
            continue
        paragraph["class"] = LIST_INTRO_CLASS
        following["class"] = LIST_AFTER_INTRO_CLASS


def normalize_text_nodes(soup: BeautifulSoup, normalize: Callable[[str], str]) -> None:
    """Apply ``normalize`` to text content only, never to markup or scripts."""
    for text in soup.find_all(string=True):
        if isinstance(text, Comment) or text.parent is None or text.parent.name in ("script", "style"):
            continue
        normalized = normalize(str(text))
        if normalized != text:
            text.replace_with(normalized)


def collapse_whitespace_strings(soup: BeautifulSoup) -> None:
    """Merge adjacent strings and shrink whitespace-only ones the way the parser would."""
    soup.smooth()
    for text in soup.find_all(string=True):
        if isinstance(text, Comment) or text.parent is None or text.parent.name in _PRESERVE_WHITESPACE_TAGS:
            continue
        if not text or text.strip(_ASCII_SPACES):
            continue
        collapsed = "\n" if "\n" in text else " "
        if text != collapsed:
            text.replace_with(collapsed)


class CleanupPipeline:
    """Runs the cleanup passes in their fixed order."""

    def __init__(
        self,
        options: Optional[ConversionOptions] = None,
        vocabulary: Optional[VocabularyNormalizer] = None,
    ) -> None:
        self._options = options or ConversionOptions()
        self._vocabulary = vocabulary or VocabularyNormalizer()

    def run(self, markup: str) -> CleanedHtml:
        soup = BeautifulSoup(markup, "html.parser")

        wrap_tables(soup)
        unwrap_lonely_cell_paragraphs(soup)
        caption_images(soup, self._options.image_src_prefix)
        remove_edge_breaks(soup)
        remove_empty_paragraphs(soup)
        title = extract_title(soup)
        mark_list_intros(soup)
        normalize_text_nodes(soup, self._vocabulary.normalize_text)

        if self._options.accordion:
            sections = build_accordion(soup, self._options.accordion_id_length)
            LOGGER.debug("Grouped %d accordion sections", sections)

        collapse_whitespace_strings(soup)
        return CleanedHtml(html=soup.decode(formatter=OUTPUT_FORMATTER), title=title)
