"""Collapsible sections built from level-2 headings."""
from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup, PageElement, Tag

from docx_simple_html.model.options import DEFAULT_ACCORDION_ID_LENGTH

SECTION_HEADING = "h2"
ID_PREFIX = "accordion-"
STYLE_ID = "accordion-style"
SCRIPT_ID = "accordion-script"

ACCORDION_STYLE = f"""<style id="{STYLE_ID}">
.accordion-toggle {{ cursor: pointer; }}
.accordion-toggle::before {{ content: "\\25B8"; display: inline-block; margin-right: 0.4em; }}
.accordion-section.open .accordion-toggle::before {{ content: "\\25BE"; }}
.accordion-body {{ display: none; }}
.accordion-section.open .accordion-body {{ display: block; }}
</style>
"""

ACCORDION_SCRIPT = f"""<script id="{SCRIPT_ID}">
document.querySelectorAll(".accordion-toggle").forEach(function (toggle) {{
  toggle.addEventListener("click", function () {{
    var body = document.getElementById(toggle.getAttribute("data-accordion-target"));
    if (body) {{
      body.parentNode.classList.toggle("open");
    }}
  }});
}});
</script>
"""

_NON_WORD = re.compile(r"\W")


def section_id(heading_text: str, max_length: int = DEFAULT_ACCORDION_ID_LENGTH) -> str:
    """Deterministic id for a heading's section.

    Headings sharing their first ``max_length`` word characters collide.
    """
    slug = _NON_WORD.sub("", heading_text).lower()[:max_length]
    return ID_PREFIX + (slug or "section")


def _is_section_heading(node: PageElement) -> bool:
    return isinstance(node, Tag) and node.name == SECTION_HEADING


def build_accordion(soup: BeautifulSoup, max_id_length: int = DEFAULT_ACCORDION_ID_LENGTH) -> int:
    """Group each top-level ``<h2>`` and its following siblings; returns the number of sections."""
    headings = [child for child in soup.contents if _is_section_heading(child)]

    for heading in headings:
        ident = section_id(heading.get_text(), max_id_length)

        followers: List[PageElement] = []
        node = heading.next_sibling
        while node is not None and not _is_section_heading(node):
            followers.append(node)
            node = node.next_sibling

        section = soup.new_tag("div", attrs={"class": "accordion-section"})
        body = soup.new_tag("div", attrs={"class": "accordion-body", "id": ident})
        heading.insert_before(section)
        section.append(heading)
        section.append(body)
        for follower in followers:
            body.append(follower)
        section.insert_after("\n")

        heading["class"] = "accordion-toggle"
        heading["data-accordion-target"] = ident

    if soup.find("style", id=STYLE_ID) is None:
        soup.insert(0, BeautifulSoup(ACCORDION_STYLE, "html.parser"))
        soup.append(BeautifulSoup(ACCORDION_SCRIPT, "html.parser"))

    return len(headings)
