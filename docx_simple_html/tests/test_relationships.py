"""Tests for relationship parsing and image materialization."""
import unittest
from unittest.mock import Mock

from docx_simple_html.parser.rels_parser import (
    RELTYPE_HYPERLINK,
    RELTYPE_IMAGE,
    RelationshipTable,
    UnresolvedRelationshipError,
    image_file_name,
)


doc_rels_xml = """
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="media/image1.png"/>
  <Relationship Id="rId2" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink" Target="https://example.com" TargetMode="External"/>
  <Relationship Id="rId3" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink" Target="rules.html"/>
  <Relationship Id="rId4" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="https://cdn.example.com/art/logo.gif" TargetMode="External"/>
  <Relationship Id="rId5" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/styles" Target="styles.xml"/>
</Relationships>
"""


class RelationshipTableTest(unittest.TestCase):
    """Validate relationship resolution and image materialization."""

    def test_targets_are_literal_without_materializer(self) -> None:
        table = RelationshipTable.from_manifest(doc_rels_xml)

        self.assertEqual(len(table), 5)
        self.assertEqual(table.resolve("rId1"), "media/image1.png")
        self.assertEqual(table.resolve("rId2"), "https://example.com")
        self.assertEqual(table.resolve("rId3"), "rules.html")

        link = table.find("rId2")
        assert link is not None
        self.assertTrue(link.is_external)
        self.assertEqual(link.rel_type, RELTYPE_HYPERLINK)
        self.assertIsNotNone(table.find("rId5"))

    def test_images_are_materialized_with_prefix(self) -> None:
        materialize = Mock(return_value=True)
        table = RelationshipTable.from_manifest(doc_rels_xml, image_prefix="guide-", materialize_image=materialize)

        self.assertEqual(table.resolve("rId1"), "guide-image1.png")
        self.assertEqual(table.resolve("rId4"), "guide-logo.gif")
        self.assertEqual(table.resolve("rId3"), "rules.html")
        self.assertEqual(materialize.call_count, 2)
        materialize.assert_any_call("media/image1.png", False, "guide-image1.png")
        materialize.assert_any_call("https://cdn.example.com/art/logo.gif", True, "guide-logo.gif")

        image = table.find("rId1")
        assert image is not None
        self.assertEqual(image.rel_type, RELTYPE_IMAGE)

    def test_failed_materialization_keeps_original_target(self) -> None:
        report = Mock()
        table = RelationshipTable.from_manifest(
            doc_rels_xml,
            image_prefix="guide-",
            materialize_image=Mock(return_value=False),
            report=report,
        )

        self.assertEqual(table.resolve("rId1"), "media/image1.png")
        self.assertEqual(report.call_count, 2)
        self.assertIn("media/image1.png", report.call_args_list[0].args[0])

    def test_failed_materialization_without_sink_logs_warning(self) -> None:
        with self.assertLogs("docx_simple_html.parser.rels_parser", level="WARNING"):
            RelationshipTable.from_manifest(doc_rels_xml, materialize_image=Mock(return_value=False))

    def test_unknown_id_raises(self) -> None:
        table = RelationshipTable.from_manifest(doc_rels_xml)
        with self.assertRaises(UnresolvedRelationshipError) as ctx:
            table.resolve("rId99")
        self.assertIsInstance(ctx.exception, KeyError)
        self.assertIsNone(table.find("rId99"))

    def test_blank_manifest_gives_empty_table(self) -> None:
        for manifest in (None, "", "   \n"):
            with self.subTest(manifest=manifest):
                self.assertEqual(len(RelationshipTable.from_manifest(manifest)), 0)

    def test_image_file_name_uses_base_name(self) -> None:
        self.assertEqual(image_file_name("p-", "media/sub/image7.jpeg"), "p-image7.jpeg")
        self.assertEqual(image_file_name("", "image7.jpeg"), "image7.jpeg")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
