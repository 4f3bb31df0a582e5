import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_tailor.normalize.text import normalize_text  # noqa: E402
from ats_tailor.parsing.experience import SWAP_PATTERN, extract_experience, match_job_header  # noqa: E402
from ats_tailor.parsing.segmenter import segment_document  # noqa: E402
from ats_tailor.schemas.resume import BulletClassification, SectionType  # noqa: E402
from ats_tailor.taxonomy import get_default_lexicon  # noqa: E402
from samples import RESUME_TEXT  # noqa: E402


class JobHeaderRuleTests(unittest.TestCase):
    def setUp(self):
        self.lexicon = get_default_lexicon()

    def test_pipe_rule(self):
        name, parts = match_job_header("Acme Corp | Senior Engineer | 2019 - 2021 | Austin, TX", self.lexicon)
        self.assertEqual(name, "pipe")
        self.assertEqual((parts.company, parts.title, parts.location), ("Acme Corp", "Senior Engineer", "Austin, TX"))
        self.assertEqual(parts.raw_dates, "2019 - 2021")

    def test_dash_rule(self):
        name, parts = match_job_header("Globex Labs — Software Engineer — 2016 – 2019", self.lexicon)
        self.assertEqual(name, "dash")
        self.assertEqual((parts.company, parts.title), ("Globex Labs", "Software Engineer"))

    def test_known_company_prefix_rule(self):
        name, parts = match_job_header("Google Senior Engineer 2019 - 2021", self.lexicon)
        self.assertEqual(name, "known_company_prefix")
        self.assertEqual((parts.company, parts.title), ("Google", "Senior Engineer"))

    def test_suffix_and_title_rule(self):
        name, parts = match_job_header("Senior Engineer – Acme Corp", self.lexicon)
        self.assertEqual(name, "suffix_and_title")
        self.assertEqual((parts.company, parts.title), ("Senior Engineer", "Acme Corp"))

    def test_bullet_lines_are_never_headers(self):
        self.assertIsNone(match_job_header("• Acme Corp | Engineer", self.lexicon))
        self.assertIsNone(match_job_header("1. Acme Corp | Engineer", self.lexicon))


class ExperienceExtractionTests(unittest.TestCase):
    def test_sample_entries(self):
        content = segment_document(normalize_text(RESUME_TEXT)).content_of(SectionType.EXPERIENCE)
        entries, warnings = extract_experience(content)

        self.assertEqual(len(entries), 2)
        self.assertEqual(warnings, [])
        first, second = entries
        self.assertEqual(first.company.value, "Acme Corp")
        self.assertEqual(first.title.value, "Senior Software Engineer")
        self.assertEqual(first.company.confidence, 1.0)
        self.assertTrue(first.company.locked)
        self.assertEqual(first.dates.text, "2020 – Present")
        self.assertTrue(first.dates.is_current)
        self.assertEqual(first.location, "Seattle, WA")
        self.assertEqual(len(first.bullets), 3)
        self.assertEqual(first.bullets[0].classification, BulletClassification.LEADERSHIP)
        self.assertEqual(first.bullets[2].classification, BulletClassification.ACHIEVEMENT)
        self.assertTrue(first.summary.startswith("Led migration of billing services"))
        self.assertTrue(first.quality_flags.is_valid)

        self.assertEqual(second.company.value, "Globex Labs")
        self.assertEqual(second.dates.text, "2016 – 2019")
        self.assertEqual(second.bullets[1].classification, BulletClassification.COLLABORATION)

    def test_swapped_company_and_title_are_corrected(self):
        with self.assertLogs("ats_tailor.parsing.experience", level="WARNING"):
            entries, warnings = extract_experience("Senior Engineer | Acme Corp | 2020 - 2022\n• Built internal tools")
        entry = entries[0]
        self.assertEqual(entry.company.value, "Acme Corp")
        self.assertEqual(entry.title.value, "Senior Engineer")
        self.assertTrue(entry.quality_flags.swapped_company_title)
        self.assertIn(SWAP_PATTERN, entry.quality_flags.suspicious_patterns)
        self.assertTrue(any("Swapped" in warning for warning in warnings))

    def test_single_direction_disagreement_is_flagged_not_swapped(self):
        entries, warnings = extract_experience("Engineer | Developer | 2020 - 2022\n• Built internal tools")
        entry = entries[0]
        self.assertEqual(entry.company.value, "Engineer")
        self.assertFalse(entry.quality_flags.swapped_company_title)
        self.assertIn(SWAP_PATTERN, entry.quality_flags.suspicious_patterns)
        self.assertTrue(any("may be swapped" in warning for warning in warnings))

    def test_location_and_date_lines_fill_open_entry(self):
        entries, _ = extract_experience("Acme Corp | Engineer\nAustin, TX\n2018 - 2020\n• Shipped features")
        entry = entries[0]
        self.assertEqual(entry.location, "Austin, TX")
        self.assertEqual(entry.dates.start, "2018")
        self.assertEqual(entry.dates.end, "2020")
        self.assertEqual([bullet.text for bullet in entry.bullets], ["Shipped features"])

    def test_missing_fields_and_no_bullets(self):
        entries, warnings = extract_experience("Acme Corp | Engineer")
        flags = entries[0].quality_flags
        self.assertEqual(flags.missing_fields, ["start_date"])
        self.assertFalse(flags.is_valid)
        self.assertEqual(entries[0].dates.confidence, 0.5)
        self.assertTrue(any("no bullet points" in warning for warning in warnings))

    def test_numbered_bullets(self):
        entries, _ = extract_experience("Acme Corp | Engineer | 2019 - 2020\n1. Built the API\n2) Wrote docs")
        self.assertEqual([bullet.text for bullet in entries[0].bullets], ["Built the API", "Wrote docs"])

    def test_lines_before_first_header_are_skipped(self):
        entries, _ = extract_experience("• Orphan bullet\nAcme Corp | Engineer | 2019 - 2020\n• Real bullet")
        self.assertEqual(len(entries), 1)
        self.assertEqual([bullet.text for bullet in entries[0].bullets], ["Real bullet"])


if __name__ == "__main__":
    unittest.main()
