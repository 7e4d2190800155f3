"""Tests for logging configuration."""
import logging
import os
import unittest
from unittest.mock import patch

from docx_simple_html.utils.logger import LEVEL_ENV_VAR, _configured_level, get_logger, set_verbose


class LoggerTest(unittest.TestCase):
    def test_level_from_environment(self) -> None:
        cases = [("", logging.INFO), ("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("loud", logging.INFO)]
        for value, expected in cases:
            with self.subTest(value=value), patch.dict(os.environ, {LEVEL_ENV_VAR: value}):
                self.assertEqual(_configured_level(), expected)

    def test_set_verbose(self) -> None:
        root = logging.getLogger()
        previous = root.level
        self.addCleanup(root.setLevel, previous)

        set_verbose(True)
        self.assertEqual(root.level, logging.DEBUG)
        with patch.dict(os.environ, {LEVEL_ENV_VAR: "ERROR"}):
            set_verbose(False)
        self.assertEqual(root.level, logging.ERROR)

    def test_named_logger(self) -> None:
        self.assertEqual(get_logger("docx_simple_html.test").name, "docx_simple_html.test")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
