import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ats_tailor.parsing.resume import parse_resume  # noqa: E402
from ats_tailor.qualifications.keywords import bucket_keywords  # noqa: E402
from ats_tailor.schemas.resume import Bullet, ExperienceEntry, ResumeDocument  # noqa: E402
from ats_tailor.tailoring.applier import apply_plan, per_bullet_cap  # noqa: E402
from ats_tailor.tailoring.planner import DEFAULT_BOUNDS, build_plan, load_bounds  # noqa: E402
from ats_tailor.tailoring.strategies import InsertionContext, insert_keyword  # noqa: E402
from ats_tailor.taxonomy import get_default_lexicon  # noqa: E402
from samples import RESUME_TEXT  # noqa: E402


def _single_bullet_document(text: str, entries: int = 1) -> ResumeDocument:
    return ResumeDocument(experience=[ExperienceEntry(bullets=[Bullet(text=text)]) for _ in range(entries)])


class StrategyTests(unittest.TestCase):
    def setUp(self):
        self.context = InsertionContext(lexicon=get_default_lexicon())

    def test_after_verb(self):
        text, strategy = insert_keyword("Built REST APIs for partners", "kafka", self.context)
        self.assertEqual(strategy, "after_verb")
        self.assertEqual(text, "Built kafka-focused REST APIs for partners")

    def test_after_verb_does_not_stack(self):
        text, strategy = insert_keyword("Built kafka-focused REST APIs", "spark", self.context)
        self.assertEqual(strategy, "append")
        self.assertEqual(text, "Built kafka-focused REST APIs, using spark")

    def test_multiword_modifier_does_not_stack(self):
        text, strategy = insert_keyword("Led machine learning-focused model reviews", "python", self.context)
        self.assertEqual(strategy, "append")
        self.assertEqual(text, "Led machine learning-focused model reviews, using python")

    def test_verb_must_be_a_whole_word(self):
        _, strategy = insert_keyword("Ledger cleanup for finance", "kafka", self.context)
        self.assertEqual(strategy, "append")

    def test_before_comma(self):
        text, strategy = insert_keyword("Reduced latency across services, saving money", "kafka", self.context)
        self.assertEqual(strategy, "before_comma")
        self.assertEqual(text, "Reduced latency across services, using kafka, saving money")

    def test_comma_outside_window_is_ignored(self):
        _, strategy = insert_keyword("Hi, this bullet has an early comma in it", "kafka", self.context)
        self.assertEqual(strategy, "append")

    def test_before_period_and_append(self):
        self.assertEqual(
            insert_keyword("Maintained the reporting stack.", "kafka", self.context),
            ("Maintained the reporting stack, using kafka.", "before_period"),
        )
        self.assertEqual(
            insert_keyword("Maintained the reporting stack", "kafka", self.context),
            ("Maintained the reporting stack, using kafka", "append"),
        )


class PlannerTests(unittest.TestCase):
    def test_config_bounds_match_defaults(self):
        self.assertEqual(load_bounds(), DEFAULT_BOUNDS)

    def test_plan_counts_existing_bullets(self):
        document = parse_resume(RESUME_TEXT).document
        plan = build_plan(bucket_keywords({"high": ["Kubernetes"], "low": ["Kafka"]}), document)

        kubernetes = plan.get("kubernetes")
        self.assertEqual((kubernetes.bucket, kubernetes.target, kubernetes.max), ("high", 3, 5))
        self.assertEqual(kubernetes.current_count, 1)
        kafka = plan.get("Kafka")
        self.assertEqual((kafka.bucket, kafka.target, kafka.max, kafka.current_count), ("low", 1, 2, 0))
        self.assertTrue(kafka.needs_more)

    def test_custom_bounds(self):
        plan = build_plan(bucket_keywords(["kafka"]), _single_bullet_document("Built things"), {"high": (1, 1)})
        self.assertEqual((plan.targets[0].target, plan.targets[0].max), (1, 1))

    def test_plan_counts_every_mention(self):
        document = _single_bullet_document("Tuned SQL reports and rewrote sql views", entries=2)
        plan = build_plan(bucket_keywords(["SQL"]), document)
        self.assertEqual(plan.targets[0].current_count, 4)


class ApplierTests(unittest.TestCase):
    def test_sample_resume_reaches_targets(self):
        document = parse_resume(RESUME_TEXT).document
        buckets = bucket_keywords(["terraform", "graphql", "kafka"])
        plan = build_plan(buckets, document)
        tailored, stats = apply_plan(document, plan, buckets)

        self.assertEqual(stats.keywords_injected, 9)
        self.assertEqual(stats.bullets_modified, 3)
        self.assertEqual(stats.final_counts, {"terraform": 3, "graphql": 3, "kafka": 3})
        self.assertEqual(stats.unmet_keywords, [])
        self.assertEqual(stats.records[0].strategy, "after_verb")
        self.assertEqual(sum(stats.strategies_used.values()), 9)
        self.assertTrue(tailored.experience[0].bullets[0].text.startswith("Led terraform-focused migration"))
        # Older entries are untouched once targets are met.
        self.assertEqual(
            [bullet.text for bullet in tailored.experience[1].bullets],
            [bullet.text for bullet in document.experience[1].bullets],
        )

    def test_input_document_is_not_modified(self):
        document = parse_resume(RESUME_TEXT).document
        before = document.model_dump()
        buckets = bucket_keywords(["terraform"])
        apply_plan(document, build_plan(buckets, document), buckets)
        self.assertEqual(document.model_dump(), before)

    def test_locked_fields_survive(self):
        document = parse_resume(RESUME_TEXT).document
        buckets = bucket_keywords(["terraform", "graphql"])
        tailored, _ = apply_plan(document, build_plan(buckets, document), buckets)
        for original, changed in zip(document.experience, tailored.experience):
            self.assertEqual(original.company, changed.company)
            self.assertEqual(original.title, changed.title)
            self.assertEqual(original.dates, changed.dates)

    def test_per_bullet_cap(self):
        self.assertEqual([per_bullet_cap(index) for index in range(5)], [4, 3, 2, 2, 2])

        document = _single_bullet_document("Built the billing service")
        buckets = bucket_keywords(["kafka", "spark", "flink", "redis", "kinesis", "airflow"])
        _, stats = apply_plan(document, build_plan(buckets, document), buckets)
        self.assertEqual(stats.keywords_injected, 4)
        self.assertEqual(stats.bullets_modified, 1)
        self.assertEqual(len(stats.unmet_keywords), 6)

    def test_keyword_already_present_is_not_repeated(self):
        document = _single_bullet_document("Built kafka consumers")
        buckets = bucket_keywords(["kafka"])
        tailored, stats = apply_plan(document, build_plan(buckets, document), buckets)
        self.assertEqual(stats.keywords_injected, 0)
        self.assertEqual(tailored.experience[0].bullets[0].text, "Built kafka consumers")
        self.assertEqual(stats.unmet_keywords, ["kafka"])

    def test_max_is_never_exceeded(self):
        document = _single_bullet_document("Built things", entries=4)
        buckets = bucket_keywords(["kafka"])
        _, stats = apply_plan(document, build_plan(buckets, document, {"high": (3, 3)}), buckets)
        self.assertEqual(stats.final_counts["kafka"], 3)

    def test_nested_keywords_stay_within_bounds(self):
        for keywords in (["PostgreSQL", "SQL"], ["SQL", "PostgreSQL"]):
            with self.subTest(keywords=keywords):
                document = ResumeDocument(
                    experience=[
                        ExperienceEntry(bullets=[Bullet(text=f"Maintained service {entry}{index}") for index in range(3)])
                        for entry in range(3)
                    ]
                )
                buckets = bucket_keywords({"high": keywords})
                plan = build_plan(buckets, document)
                tailored, stats = apply_plan(document, plan, buckets)

                for item in plan.targets:
                    mentions = sum(
                        bullet.text.lower().count(item.keyword.lower()) for bullet in tailored.all_bullets()
                    )
                    self.assertEqual(stats.final_counts[item.keyword], mentions)
                    self.assertGreaterEqual(mentions, item.target)
                    self.assertLessEqual(mentions, item.max)


if __name__ == "__main__":
    unittest.main()
