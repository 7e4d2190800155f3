"""Helper functions to work with XML namespaces and parsing."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union
from xml.etree import ElementTree as ET


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace prefixes used across parsers."""

    WORD: Dict[str, str] = None  # type: ignore[assignment]
    RELS: Dict[str, str] = None  # type: ignore[assignment]
    DRAWING: Dict[str, str] = None  # type: ignore[assignment]
    OFFICE_RELS: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.WORD = {  # type: ignore[attr-defined]
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
}
Namespaces.RELS = {  # type: ignore[attr-defined]
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}
Namespaces.DRAWING = {  # type: ignore[attr-defined]
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "wp": "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing",
}
Namespaces.OFFICE_RELS = {  # type: ignore[attr-defined]
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
}

_ALL_PREFIXES: Dict[str, str] = {
    **Namespaces.WORD,
    **Namespaces.DRAWING,
    **Namespaces.OFFICE_RELS,
}

# Values of w:val that switch a toggle property such as <w:b/> off.
_FALSE_VALUES = {"0", "false", "off", "none"}


def parse_xml(data: Union[bytes, str]) -> ET.ElementTree:
    """Parse XML from raw bytes or text with sane defaults."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return ET.ElementTree(ET.fromstring(data))


def qualify(name: str) -> str:
    """Expand a ``prefix:local`` name into ElementTree's ``{uri}local`` form."""
    prefix, local = name.split(":", 1)
    return f"{{{_ALL_PREFIXES[prefix]}}}{local}"


def local_name(tag: str) -> str:
    """Return the tag name without its namespace."""
    return tag.split("}", 1)[-1]


def get_attr(element: Optional[ET.Element], attr_name: str) -> Optional[str]:
    """Return a namespaced attribute value such as ``w:val`` or ``r:id``."""
    if element is None:
        return None
    return element.attrib.get(qualify(attr_name))


def is_toggle_on(element: Optional[ET.Element]) -> bool:
    """Return True when a toggle property element is present and not switched off."""
    if element is None:
        return False
    value = get_attr(element, "w:val")
    return value is None or value.strip().lower() not in _FALSE_VALUES
