import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_tailor.parsing.resume import parse_resume  # noqa: E402
from ats_tailor.qualifications.extractor import extract_qualifications  # noqa: E402
from ats_tailor.schemas.qualification import (  # noqa: E402
    Qualification,
    QualificationPriority,
    QualificationSet,
    QualificationType,
)
from ats_tailor.scoring.matcher import check_qualification, round_half_up, score_match, threshold_status  # noqa: E402
from ats_tailor.scoring.recommendations import build_recommendations  # noqa: E402
from samples import JOB_TEXT, RESUME_TEXT  # noqa: E402


def _qualification(text, keywords, priority=QualificationPriority.REQUIRED, weight=1.3):
    return Qualification(
        text=text,
        type=QualificationType.TECHNICAL_SKILL,
        priority=priority,
        weight=weight,
        keywords=keywords,
    )


class MatchScoringTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.document = parse_resume(RESUME_TEXT).document
        cls.qualifications = extract_qualifications(JOB_TEXT)

    def test_sample_match(self):
        result = score_match(self.document, self.qualifications)
        self.assertEqual((result.required_met_count, result.required_total_count), (2, 3))
        self.assertEqual((result.preferred_met_count, result.preferred_total_count), (0, 2))
        self.assertEqual(result.required_match_pct, 67)
        self.assertEqual(result.preferred_match_pct, 0)
        self.assertEqual(result.overall_match_pct, 47)
        self.assertEqual(result.threshold_status, "close")
        self.assertFalse(result.meets_threshold)
        self.assertAlmostEqual(result.weighted_score, 2.5)
        self.assertAlmostEqual(result.max_weighted_score, 3.6)

        years, stack, soft = result.breakdown[:3]
        self.assertEqual(years.confidence, 0.8)
        self.assertEqual(years.matched_keywords, 2)
        self.assertTrue(stack.met)
        self.assertEqual(stack.confidence, 1.0)
        self.assertIn("kubernetes", stack.evidence[0])
        self.assertFalse(soft.met)
        self.assertEqual(soft.confidence, 0.0)

    def test_empty_qualifications(self):
        result = score_match(self.document, QualificationSet())
        self.assertEqual(result.overall_match_pct, 0)
        self.assertEqual(result.breakdown, [])
        self.assertEqual(result.threshold_status, "low")

    def test_plain_text_resume(self):
        qualifications = QualificationSet(required=[_qualification("Experience with Kafka", ["kafka"])])
        result = score_match("Streaming pipelines on Kafka", qualifications)
        self.assertEqual(result.required_match_pct, 100)
        self.assertEqual(result.threshold_status, "excellent")
        self.assertTrue(result.meets_threshold)

    def test_semantic_fallback_is_discounted(self):
        qualification = _qualification("Experience with Kafka and Spark", ["kafka", "spark"])
        row = check_qualification("kafka only", qualification)
        self.assertEqual(row.confidence, 0.5)
        self.assertTrue(row.met)
        self.assertEqual(row.total_keywords, 2)

    def test_rounding_is_half_up(self):
        self.assertEqual(round_half_up(12.5), 13)
        self.assertEqual(round_half_up(0.125, 2), 0.13)
        qualifications = QualificationSet(
            required=[_qualification(f"Skill number {index}", [f"skill{index}"]) for index in range(8)]
        )
        result = score_match("skill0", qualifications)
        self.assertEqual(result.required_match_pct, 13)

    def test_threshold_bands(self):
        self.assertEqual(threshold_status(85), "excellent")
        self.assertEqual(threshold_status(84), "good")
        self.assertEqual(threshold_status(75), "good")
        self.assertEqual(threshold_status(74), "close")
        self.assertEqual(threshold_status(60), "close")
        self.assertEqual(threshold_status(59), "low")

    def test_no_required_matches_is_low(self):
        qualifications = QualificationSet(
            required=[_qualification(name, [name.lower()]) for name in ("Haskell", "Erlang", "Fortran", "Kafka")]
        )
        result = score_match(self.document, qualifications)
        self.assertEqual((result.required_met_count, result.required_total_count), (0, 4))
        self.assertEqual(result.required_match_pct, 0)
        self.assertEqual(result.overall_match_pct, 0)
        self.assertEqual(result.threshold_status, "low")
        self.assertFalse(result.meets_threshold)

    def test_added_keyword_never_lowers_confidence(self):
        qualification = _qualification(
            "Experience building Kafka streaming pipelines", ["kafka", "terraform", "graphql"]
        )
        text = "backend engineer"
        previous = check_qualification(text, qualification).confidence
        for addition in ("streaming", "kafka", "pipelines", "terraform", "kafka", "graphql"):
            text = f"{text} {addition}"
            current = check_qualification(text, qualification).confidence
            self.assertGreaterEqual(current, previous, addition)
            previous = current
        self.assertEqual(previous, 1.0)


class RecommendationTests(unittest.TestCase):
    def test_sample_recommendations(self):
        document = parse_resume(RESUME_TEXT).document
        match = score_match(document, extract_qualifications(JOB_TEXT))
        recommendations = build_recommendations(match)

        self.assertEqual(len(recommendations), 1)
        item = recommendations[0]
        self.assertEqual(item.priority, "critical")
        self.assertEqual(item.qualification_type, "soft_skill")
        self.assertEqual(item.action, "Add experience with strong, communication, skills to work experience bullets")
        self.assertEqual(item.impact, 27)

    def test_weak_evidence_and_preferred_gaps(self):
        qualifications = QualificationSet(
            required=[_qualification("Experience with Kafka and Spark", ["kafka", "spark"])],
            preferred=[
                _qualification(f"Tool {name}", [name], QualificationPriority.PREFERRED)
                for name in ("flink", "beam", "airflow", "dagster")
            ],
        )
        recommendations = build_recommendations(score_match("kafka only", qualifications))

        self.assertEqual([item.priority for item in recommendations], ["high", "medium", "medium", "medium"])
        self.assertEqual(recommendations[0].action, "Strengthen evidence of kafka, spark in the resume")
        self.assertEqual(recommendations[1].action, "Consider adding flink for competitive advantage")
        self.assertEqual(recommendations[0].impact, 130)


if __name__ == "__main__":
    unittest.main()
