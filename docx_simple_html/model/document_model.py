"""Result of a single markup-to-HTML conversion."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class ConversionResult:
    """HTML fragment, extracted title and any non-fatal diagnostics."""

    html: str = ""
    title: Optional[str] = None
    diagnostics: List[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ConversionResult":
        """Result used when the markup has no usable body."""
        return cls()
