"""Render the parsed body model into the final HTML fragment."""
from __future__ import annotations

import html
from typing import Optional

from docx_simple_html.model.elements import DocumentBody
from docx_simple_html.model.options import DEFAULT_ASPX_TITLE_PREFIX, ConversionOptions
from docx_simple_html.renderer.blocks import BlockAssembler
from docx_simple_html.renderer.cleanup import CleanedHtml, CleanupPipeline
from docx_simple_html.renderer.hyperlinks import HyperlinkRenderer, SiblingReader
from docx_simple_html.renderer.inline import InlineFormatter


class HtmlRenderer:
    """Assemble blocks into HTML, then run the cleanup pipeline over the result."""

    def __init__(self, options: Optional[ConversionOptions] = None, read_sibling: Optional[SiblingReader] = None) -> None:
        self._options = options or ConversionOptions()
        formatter = InlineFormatter(HyperlinkRenderer(read_sibling))
        self._assembler = BlockAssembler(
            formatter,
            list_styles=self._options.list_styles,
            plain_styles=self._options.plain_styles,
        )
        self._cleanup = CleanupPipeline(self._options)

    def render(self, body: DocumentBody) -> CleanedHtml:
        return self._cleanup.run(self.assemble(body))

    def assemble(self, body: DocumentBody) -> str:
        """HTML before cleanup, mostly useful when debugging the assembler."""
        return self._assembler.assemble(body.blocks)


def wrap_aspx_page(fragment: str, title: Optional[str], title_prefix: str = DEFAULT_ASPX_TITLE_PREFIX) -> str:
    """Embed ``fragment`` in the ASP.NET content page used by the help site."""
    page_title = html.escape(" ".join(part for part in (title_prefix, title or "") if part))
    return f"""<%@ Page Title="{page_title}" Language="C#" MasterPageFile="~/home/home.master" CodeBehind="~/home/InAppPage.cs" Inherits="Hearts.home.InAppPage" AutoEventWireup="true" %>
<asp:Content runat="server" ContentPlaceHolderID="mainBody">
<div class="main-body-content">
{fragment}</div>
</asp:Content>
"""
