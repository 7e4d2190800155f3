"""Relationship table for the main document part.

Maps relationship ids used by hyperlinks and drawings to their targets. Image
relationships are materialized into local files through a host callback while
the table is built; every other relationship keeps its literal target.
"""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from docx_simple_html.utils.logger import get_logger
from docx_simple_html.utils.xml_utils import Namespaces, parse_xml

LOGGER = get_logger(__name__)

WORD_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

RELTYPE_IMAGE = f"{WORD_REL_NS}/image"
RELTYPE_HYPERLINK = f"{WORD_REL_NS}/hyperlink"

# (target, is_external, local_name) -> success
ImageMaterializer = Callable[[str, bool, str], bool]
DiagnosticSink = Callable[[str], None]


class UnresolvedRelationshipError(KeyError):
    """Raised when markup refers to a relationship id the manifest does not declare."""


@dataclass(frozen=True)
class Relationship:
    """Represents a single resolved relationship."""

    r_id: str
    target: str
    rel_type: str
    is_external: bool = False

    @property
    def is_image(self) -> bool:
        return self.rel_type.endswith("/image")


def image_file_name(image_prefix: str, target: str) -> str:
    """Local name for a materialized image: the prefix plus the target's base name."""
    return image_prefix + posixpath.basename(target)


class RelationshipTable:
    """Immutable id -> target mapping owned by a single conversion."""

    def __init__(self, relationships: Mapping[str, Relationship]) -> None:
        self._by_id: Dict[str, Relationship] = dict(relationships)

    @classmethod
    def from_manifest(
        cls,
        manifest: Optional[str],
        image_prefix: str = "",
        materialize_image: Optional[ImageMaterializer] = None,
        report: Optional[DiagnosticSink] = None,
    ) -> "RelationshipTable":
        """Parse ``document.xml.rels`` text, materializing image targets on the way."""
        if not manifest or not manifest.strip():
            return cls({})

        tree = parse_xml(manifest)
        result: Dict[str, Relationship] = {}
        for rel_el in tree.findall(".//rel:Relationship", Namespaces.RELS):
            r_id = rel_el.attrib["Id"]
            target = rel_el.attrib.get("Target", "")
            rel_type = rel_el.attrib.get("Type", "")
            is_external = rel_el.attrib.get("TargetMode") == "External"
            relationship = Relationship(r_id=r_id, target=target, rel_type=rel_type, is_external=is_external)
            if relationship.is_image and materialize_image is not None:
                relationship = cls._materialize(relationship, image_prefix, materialize_image, report)
            result[r_id] = relationship

        LOGGER.debug("Loaded %d relationships", len(result))
        return cls(result)

    @staticmethod
    def _materialize(
        relationship: Relationship,
        image_prefix: str,
        materialize_image: ImageMaterializer,
        report: Optional[DiagnosticSink],
    ) -> Relationship:
        local_name = image_file_name(image_prefix, relationship.target)
        if materialize_image(relationship.target, relationship.is_external, local_name):
            return Relationship(
                r_id=relationship.r_id,
                target=local_name,
                rel_type=relationship.rel_type,
                is_external=relationship.is_external,
            )

        message = f"Could not save image '{relationship.target}' as '{local_name}'; linking to the original target"
        if report is not None:
            report(message)
        else:
            LOGGER.warning(message)
        return relationship

    def resolve(self, r_id: str) -> str:
        """Return the target for ``r_id``; a miss means the document is inconsistent."""
        relationship = self.find(r_id)
        if relationship is None:
            raise UnresolvedRelationshipError(f"Relationship id not declared in manifest: {r_id}")
        return relationship.target

    def find(self, r_id: str) -> Optional[Relationship]:
        """Return a relationship by id if present."""
        return self._by_id.get(r_id)

    def __len__(self) -> int:
        return len(self._by_id)
