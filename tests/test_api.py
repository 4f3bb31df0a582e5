import os
import sys
import unittest
from pathlib import Path

# Keep API tests deterministic and fast by default.
os.environ.setdefault("LLM_EXTRACTION_ENABLED", "0")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from ats_tailor.main import app  # noqa: E402
from samples import JOB_TEXT, RESUME_TEXT  # noqa: E402


class TailorApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_parse_resume(self):
        response = self.client.post("/v1/resume/parse", json={"resume_text": RESUME_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["document"]["experience"][0]["company"]["value"], "Acme Corp")
        self.assertEqual(body["document"]["experience"][0]["bullets"][0]["classification"], "leadership")
        self.assertEqual(body["document"]["experience"][1]["dates"]["duration_months"], 36)

    def test_parse_resume_insufficient_input(self):
        response = self.client.post("/v1/resume/parse", json={"resume_text": "hi"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "insufficient_input")

    def test_extract_qualifications(self):
        response = self.client.post("/v1/qualifications/extract", json={"job_text": JOB_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(len(body["required"]), 3)
        self.assertEqual(body["preferred"][0]["keywords"], ["terraform"])

    def test_match(self):
        response = self.client.post("/v1/match", json={"resume_text": RESUME_TEXT, "job_text": JOB_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["parse_status"], "ok")
        self.assertEqual(body["match"]["required_match_pct"], 67)
        self.assertEqual(body["recommendations"][0]["priority"], "critical")

    def test_tailor(self):
        payload = {"resume_text": RESUME_TEXT, "job_text": JOB_TEXT, "keywords": ["terraform", "graphql"]}
        response = self.client.post("/v1/tailor", json=payload)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["parse_status"], "ok")
        self.assertEqual(body["stats"]["final_counts"], {"terraform": 3, "graphql": 3})
        self.assertEqual(body["final_match"]["preferred_match_pct"], 100)

    def test_request_validation(self):
        response = self.client.post("/v1/tailor", json={"resume_text": RESUME_TEXT, "keywords": 5})
        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
