"""File-system helpers used by the host program around the conversion core."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Optional
from urllib.parse import unquote

from docx_simple_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"\W")


def normalize_output_path(path: Path) -> Path:
    """Replace whitespace runs in the file name with ``-`` and lower-case it."""
    return path.with_name(_WHITESPACE.sub("-", path.name).lower())


def image_prefix_for(html_path: Path) -> str:
    """Prefix for images saved next to ``html_path``: its stem without non-word characters."""
    return _NON_WORD.sub("", html_path.stem) + "-"


class SiblingReader:
    """Reads HTML files that live next to the output, for hyperlink title lookup."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def __call__(self, href: str) -> Optional[str]:
        # Site-absolute hrefs still resolve under the output directory.
        relative = unquote(href.split("?", 1)[0].split("#", 1)[0]).lstrip("/")
        root = self._directory.resolve()
        path = (root / relative).resolve()
        if not path.is_relative_to(root):
            LOGGER.debug("Ignoring sibling page outside %s: %s", root, href)
            return None
        if not path.is_file():
            LOGGER.debug("No sibling page at %s", path)
            return None
        return path.read_text(encoding="utf-8", errors="replace")
