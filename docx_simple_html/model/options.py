"""Configuration options for a conversion run."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Tuple

DEFAULT_ACCORDION_ID_LENGTH = 40
DEFAULT_LIST_STYLES = ("ListParagraph",)
DEFAULT_PLAIN_STYLES = ("BodyText",)
DEFAULT_ASPX_TITLE_PREFIX = "Trickster Cards"


@dataclass(frozen=True)
class ConversionOptions:
    """Settings shared by the conversion core and the host program.

    Parameters
    ----------
    accordion : bool, default False
        Group every level-2 heading and the content that follows it into a
        collapsible section.
    image_prefix : str, default ""
        Prefix put in front of the base name of every materialized image.
    image_src_prefix : str, default ""
        URL path prepended to the ``src`` of captioned images.
    accordion_id_length : int, default 40
        Maximum number of characters kept from a heading when building its
        section identifier.
    list_styles : tuple of str, default ("ListParagraph",)
        Paragraph style names rendered as list items.
    plain_styles : tuple of str, default ("BodyText",)
        Paragraph style names rendered as plain, unclassed paragraphs in
        addition to every style whose name contains "Normal".
    aspx_title_prefix : str, default "Trickster Cards"
        Text placed before the document title in the ASP.NET page shell.

    """

    accordion: bool = field(default=False, metadata={"help": "Group level-2 sections into an accordion"})
    image_prefix: str = field(default="", metadata={"help": "Prefix for materialized image file names"})
    image_src_prefix: str = field(default="", metadata={"help": "URL path prepended to captioned image sources"})
    accordion_id_length: int = field(
        default=DEFAULT_ACCORDION_ID_LENGTH,
        metadata={"help": "Maximum length of generated accordion section ids", "type": int},
    )
    list_styles: Tuple[str, ...] = field(default=DEFAULT_LIST_STYLES)
    plain_styles: Tuple[str, ...] = field(default=DEFAULT_PLAIN_STYLES)
    aspx_title_prefix: str = field(default=DEFAULT_ASPX_TITLE_PREFIX)

    def __post_init__(self) -> None:
        if self.accordion_id_length < 1:
            raise ValueError(f"accordion_id_length must be positive, got {self.accordion_id_length}")

    def create_updated(self, **kwargs: Any) -> "ConversionOptions":
        """Create a new instance with updated field values."""
        return replace(self, **kwargs)
