"""Entry-point for the DOCX body to simple HTML conversion."""
from __future__ import annotations

import argparse
import sys
import zipfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from docx_simple_html.model.document_model import ConversionResult
from docx_simple_html.model.options import DEFAULT_ASPX_TITLE_PREFIX, ConversionOptions
from docx_simple_html.parser.document_parser import DocumentParser, locate_body
from docx_simple_html.parser.docx_loader import DocxPackage, ImageMaterializer
from docx_simple_html.parser.rels_parser import DiagnosticSink, ImageMaterializer as MaterializeCallback
from docx_simple_html.parser.rels_parser import RelationshipTable
from docx_simple_html.renderer.html_renderer import HtmlRenderer, wrap_aspx_page
from docx_simple_html.renderer.hyperlinks import SiblingReader as SiblingCallback
from docx_simple_html.utils.files import SiblingReader, image_prefix_for, normalize_output_path
from docx_simple_html.utils.logger import get_logger, set_verbose

LOGGER = get_logger(__name__)

ASPX_SUFFIX = ".aspx"


class _DiagnosticCollector:
    """Logs each diagnostic, records it, and forwards it to the caller's sink."""

    def __init__(self, sink: Optional[DiagnosticSink]) -> None:
        self._sink = sink
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        LOGGER.warning(message)
        self.messages.append(message)
        if self._sink is not None:
            self._sink(message)


def convert_markup(
    body_markup: Union[str, bytes],
    rels_markup: Optional[str],
    options: Optional[ConversionOptions] = None,
    *,
    materialize_image: Optional[MaterializeCallback] = None,
    read_sibling: Optional[SiblingCallback] = None,
    diagnostics: Optional[Callable[[str], None]] = None,
) -> ConversionResult:
    """Convert ``document.xml`` markup and its relationship manifest into an HTML fragment."""
    options = options or ConversionOptions()

    body = locate_body(body_markup)
    if body is None:
        return ConversionResult.empty()

    collector = _DiagnosticCollector(diagnostics)
    relationships = RelationshipTable.from_manifest(
        rels_markup,
        image_prefix=options.image_prefix,
        materialize_image=materialize_image,
        report=collector,
    )
    document = DocumentParser(relationships).parse_body(body)
    LOGGER.debug("Parsed %d top-level blocks using %d relationships", len(document.blocks), len(relationships))

    cleaned = HtmlRenderer(options, read_sibling).render(document)
    return ConversionResult(html=cleaned.html, title=cleaned.title, diagnostics=collector.messages)


def convert_file(docx_path: Path, html_path: Path, options: Optional[ConversionOptions] = None) -> ConversionResult:
    """Convert a ``.docx`` file, saving images and the page next to ``html_path``."""
    options = options or ConversionOptions()
    if not docx_path.is_file():
        raise FileNotFoundError(f"DOCX file not found: {docx_path}")
    output_dir = html_path.parent
    if not output_dir.is_dir():
        raise FileNotFoundError(f"Output directory not found: {output_dir}")
    if not options.image_prefix:
        options = options.create_updated(image_prefix=image_prefix_for(html_path))

    package = DocxPackage.load(docx_path)
    result = convert_markup(
        package.require_document_markup(),
        package.get_relationships_markup(),
        options,
        materialize_image=ImageMaterializer(package, output_dir),
        read_sibling=SiblingReader(output_dir),
    )

    page = result.html
    if html_path.suffix.lower() == ASPX_SUFFIX:
        page = wrap_aspx_page(result.html, result.title, options.aspx_title_prefix)
    html_path.write_text(page, encoding="utf-8")
    LOGGER.info("Wrote %s (title: %s)", html_path, result.title)
    return result


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert the body of a Word document into simple HTML")
    parser.add_argument("word_file", help="Path to the input .docx file")
    parser.add_argument("output_file", help="Path of the .html or .aspx file to write")
    parser.add_argument("--accordion", action="store_true", help="Group level-2 sections into an accordion")
    parser.add_argument("--image-src-prefix", default="", help="URL path prepended to captioned image sources")
    parser.add_argument(
        "--aspx-title-prefix",
        default=DEFAULT_ASPX_TITLE_PREFIX,
        help="Text placed before the title in .aspx output",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line converter; returns the process exit status."""
    args = build_arg_parser().parse_args(argv)
    set_verbose(args.verbose)

    docx_path = Path(args.word_file).resolve()
    html_path = normalize_output_path(Path(args.output_file).resolve())
    prefix = image_prefix_for(html_path)
    options = ConversionOptions(
        accordion=args.accordion,
        image_prefix=prefix,
        image_src_prefix=args.image_src_prefix,
        aspx_title_prefix=args.aspx_title_prefix,
    )

    print(f"Converting {docx_path} to {html_path} with images to {prefix}")
    try:
        convert_file(docx_path, html_path, options)
    except (OSError, KeyError, zipfile.BadZipFile) as exc:
        print(f"\n!!!{exc}")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
