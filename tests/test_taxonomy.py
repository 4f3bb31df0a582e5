import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_tailor.schemas.resume import SectionType  # noqa: E402
from ats_tailor.taxonomy import LocalLexicon, get_default_lexicon, resolve_lexicon  # noqa: E402


class LexiconTests(unittest.TestCase):
    def test_default_lexicon_is_cached(self):
        self.assertIs(get_default_lexicon(), get_default_lexicon())
        self.assertIs(resolve_lexicon(None), get_default_lexicon())

    def test_section_rules_cover_every_section(self):
        types = {rule.section_type for rule in LocalLexicon().lexicon.section_rules}
        self.assertEqual(types, set(SectionType) - {SectionType.UNKNOWN})

    def test_company_and_title_lookups(self):
        lexicon = get_default_lexicon()
        self.assertTrue(lexicon.looks_like_company("Acme Corp"))
        self.assertTrue(lexicon.looks_like_company("Stripe"))
        self.assertFalse(lexicon.looks_like_company("Senior Engineer"))
        self.assertTrue(lexicon.has_title_keyword("Staff Data Scientist"))
        self.assertEqual(lexicon.known_company_prefix("Morgan Stanley Analyst"), "morgan stanley")
        self.assertIsNone(lexicon.known_company_prefix("Metadata Engineer"))

    def test_replacement_table_is_read_only(self):
        lexicon = get_default_lexicon()
        with self.assertRaises(TypeError):
            lexicon.term_replacements["new"] = "value"


if __name__ == "__main__":
    unittest.main()
