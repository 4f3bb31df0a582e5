import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_tailor.normalize.text import normalize_line, normalize_text  # noqa: E402


class NormalizeTextTests(unittest.TestCase):
    def test_line_endings_and_blank_runs(self):
        self.assertEqual(normalize_text("a\r\nb\rc"), "a\nb\nc")
        self.assertEqual(normalize_text("a\n\n\n\n\nb"), "a\n\nb")

    def test_glyph_folding(self):
        self.assertEqual(normalize_text("● item"), "• item")
        self.assertEqual(normalize_text("◦ item"), "• item")
        self.assertEqual(normalize_text("2019 ‒ 2020"), "2019 – 2020")
        self.assertEqual(normalize_text("Acme ― Engineer"), "Acme — Engineer")
        self.assertEqual(normalize_text("“quoted” and ‘single’"), "\"quoted\" and 'single'")

    def test_whitespace_folding_and_trim(self):
        self.assertEqual(normalize_text("\ta b  "), "a b")

    def test_non_string_returns_empty(self):
        self.assertEqual(normalize_text(None), "")
        self.assertEqual(normalize_text(42), "")

    def test_is_idempotent(self):
        raw = "Jane\r\n\r\n\r\n• Led – things\t“now”"
        once = normalize_text(raw)
        self.assertEqual(normalize_text(once), once)

    def test_normalize_line_collapses_spaces(self):
        self.assertEqual(normalize_line("  Senior   Engineer \n"), "Senior Engineer")


if __name__ == "__main__":
    unittest.main()
