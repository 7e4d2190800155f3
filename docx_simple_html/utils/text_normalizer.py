"""
Vocabulary normalization for rendered text.

Applies the house style for a handful of words and for punctuation next to
closing curly quotes. Only ever called on text content, never on markup.
"""

import re
from typing import Pattern, Sequence, Tuple

Rule = Tuple[Pattern[str], str]


class VocabularyNormalizer:
    """Rewrites text content according to an ordered list of regex rules."""

    # Order matters: compounds must be split before the bare word is capitalized.
    DEFAULT_RULES: Tuple[Rule, ...] = (
        # website(s) / webpage(s) → Web site(s) / Web page(s)
        (re.compile(r"\b[wW]eb(?P<compound>(?:site|page)s?)\b"), r"Web \g<compound>"),
        (re.compile(r"\bweb\b"), "Web"),
        (re.compile(r"\binternet\b"), "Internet"),
        (re.compile(r"\btestdrive\b", re.IGNORECASE), "Test Drive"),
        # ”, → ,”  and  ”. → .”
        (re.compile(r"\u201d(?P<punc>[,.]+)"), "\\g<punc>\u201d"),
    )

    def __init__(self, rules: Sequence[Rule] = DEFAULT_RULES):
        """Initialize the normalizer.

        Args:
            rules: ``(pattern, replacement)`` pairs applied in order. The
                replacement uses :func:`re.sub` syntax.
        """
        self.rules = tuple(rules)

    def normalize_text(self, text: str) -> str:
        """Apply every rule to ``text`` in order."""
        if not text:
            return text

        for pattern, replacement in self.rules:
            text = pattern.sub(replacement, text)
        return text


def normalize_vocabulary(text: str) -> str:
    """Convenience function using the default rule set."""
    return VocabularyNormalizer().normalize_text(text)
