"""Test cases for vocabulary normalization."""

import re
import unittest

from docx_simple_html.utils.text_normalizer import VocabularyNormalizer, normalize_vocabulary


class VocabularyNormalizerTest(unittest.TestCase):
    """Test the house-style vocabulary rules."""

    def setUp(self):
        self.normalizer = VocabularyNormalizer()

    def test_example_sentence(self):
        self.assertEqual(
            self.normalizer.normalize_text("Check our website for webpages about the internet,"),
            "Check our Web site for Web pages about the Internet,",
        )

    def test_word_rules(self):
        test_cases = [
            ("websites", "Web sites"),
            ("Webpage", "Web page"),
            ("the web is big", "the Web is big"),
            ("cobweb", "cobweb"),
            ("internets", "internets"),
            ("take a TestDrive", "take a Test Drive"),
            ("testdrive", "Test Drive"),
        ]
        for input_text, expected in test_cases:
            with self.subTest(text=input_text):
                self.assertEqual(self.normalizer.normalize_text(input_text), expected)

    def test_punctuation_moves_inside_closing_quote(self):
        self.assertEqual(
            self.normalizer.normalize_text("Press “Deal”, then “Play”."),
            "Press “Deal,” then “Play.”",
        )

    def test_stacked_punctuation_moves_in_one_pass(self):
        once = self.normalizer.normalize_text("say “b”.,")
        self.assertEqual(once, "say “b.,”")
        self.assertEqual(self.normalizer.normalize_text(once), once)

    def test_rules_are_stable_on_their_output(self):
        once = normalize_vocabulary("website, web, internet, testdrive, “x”,")
        self.assertEqual(normalize_vocabulary(once), once)

    def test_empty_text(self):
        self.assertEqual(self.normalizer.normalize_text(""), "")

    def test_custom_rules(self):
        normalizer = VocabularyNormalizer([(re.compile(r"\bcolour\b"), "color")])
        self.assertEqual(normalizer.normalize_text("colour website"), "color website")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
