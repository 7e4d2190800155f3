"""DOCX package loader and image materialization for the host program."""
from __future__ import annotations

import posixpath
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import requests

from docx_simple_html.utils.logger import get_logger

LOGGER = get_logger(__name__)

DOCUMENT_XML_PATH = "word/document.xml"
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"
DOCUMENT_PART_DIR = "word"

DEFAULT_DOWNLOAD_TIMEOUT = 30
DOWNLOAD_HEADERS = {"User-Agent": "docx-simple-html/0.1"}


@dataclass(slots=True)
class DocxPackage:
    """Raw parts of a DOCX archive, keyed by their part name."""

    raw_parts: Mapping[str, bytes]

    @classmethod
    def load(cls, docx_path: Path) -> "DocxPackage":
        """Open a DOCX archive and read every part into memory."""
        with zipfile.ZipFile(docx_path) as docx_zip:
            parts = {name: docx_zip.read(name) for name in docx_zip.namelist()}

        LOGGER.debug("Loaded %d parts from %s", len(parts), docx_path.name)
        return cls(raw_parts=parts)

    # ------------------------------------------------------------------
    # Public helpers
    def read_bytes(self, name: str) -> bytes:
        try:
            return self.raw_parts[name]
        except KeyError:
            raise KeyError(f"DOCX part missing: {name}") from None

    def read_text(self, name: str) -> str:
        return self.read_bytes(name).decode("utf-8-sig")

    def get_text(self, name: str) -> Optional[str]:
        if name not in self.raw_parts:
            return None
        return self.read_text(name)

    def require_document_markup(self) -> str:
        return self.read_text(DOCUMENT_XML_PATH)

    def get_relationships_markup(self) -> Optional[str]:
        return self.get_text(DOCUMENT_RELS_PATH)


def internal_part_name(target: str) -> str:
    """Part name for a relationship target relative to ``word/document.xml``."""
    if target.startswith("/"):
        return posixpath.normpath(target.lstrip("/"))
    return posixpath.normpath(posixpath.join(DOCUMENT_PART_DIR, target))


class ImageMaterializer:
    """Writes referenced images next to the HTML output.

    Internal images are copied out of the package; external ones are
    downloaded. Failures are logged and reported as ``False`` so the
    conversion can keep the original target.
    """

    def __init__(self, package: DocxPackage, output_dir: Path, timeout: float = DEFAULT_DOWNLOAD_TIMEOUT) -> None:
        self._package = package
        self._output_dir = output_dir
        self._timeout = timeout

    def __call__(self, target: str, is_external: bool, local_name: str) -> bool:
        destination = self._output_dir / local_name
        try:
            data = self._download(target) if is_external else self._package.read_bytes(internal_part_name(target))
            destination.write_bytes(data)
        except (OSError, KeyError, requests.RequestException) as exc:
            LOGGER.error("Failed to save image %s as %s: %s", target, destination, exc)
            return False

        LOGGER.debug("Saved image %s as %s", target, destination)
        return True

    def _download(self, url: str) -> bytes:
        response = requests.get(url, timeout=self._timeout, headers=DOWNLOAD_HEADERS)
        response.raise_for_status()
        return response.content
