from __future__ import annotations

import argparse
import json
import logging
import sys

from ats_tailor.core.config import settings
from ats_tailor.parsing.load import load_document
from ats_tailor.schemas.tailoring import TailoringReport
from ats_tailor.services.tailor_service import tailor_resume


def _summary(report: TailoringReport) -> str:
    if report.parse_status != "ok":
        return f"Resume could not be parsed: {report.message}"

    initial, final = report.initial_match, report.final_match
    lines = [
        f"Required match: {initial.required_match_pct}% -> {final.required_match_pct}% ({final.threshold_status})",
        f"Overall match:  {initial.overall_match_pct}% -> {final.overall_match_pct}%",
        f"Keywords injected: {report.stats.keywords_injected} across {report.stats.bullets_modified} bullets",
    ]
    if report.stats.unmet_keywords:
        lines.append(f"Below target: {', '.join(report.stats.unmet_keywords)}")
    for item in report.recommendations:
        lines.append(f"[{item.priority}] {item.action}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Tailor a resume to a job posting.")
    parser.add_argument("resume", help="Resume file (.txt, .pdf or .docx)")
    parser.add_argument("job", help="Job posting file (.txt, .pdf or .docx)")
    parser.add_argument(
        "--keywords",
        nargs="+",
        default=None,
        help="Keywords to inject, highest priority first. Derived from the posting when omitted.",
    )
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(message)s")

    resume = load_document(args.resume)
    job = load_document(args.job)
    for warning in [*resume.warnings, *job.warnings]:
        print(f"warning: {warning}", file=sys.stderr)

    report = tailor_resume(resume.text, job.text, args.keywords)
    if args.json:
        print(json.dumps(report.model_dump(mode="json"), indent=2))
    else:
        print(_summary(report))
    return 0 if report.parse_status == "ok" else 1


if __name__ == "__main__":
    sys.exit(main())
