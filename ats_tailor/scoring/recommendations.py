from __future__ import annotations

from ats_tailor.core.scoring import get_scoring_value
from ats_tailor.schemas.match import MatchResult, QualificationMatch, Recommendation
from ats_tailor.schemas.qualification import QualificationPriority

from .matcher import round_half_up


def _impact(row: QualificationMatch, match: MatchResult) -> int:
    if match.required_total_count == 0:
        return 0
    return int(round_half_up(100 / match.required_total_count * row.qualification.weight))


def _recommend(priority: str, row: QualificationMatch, action: str, match: MatchResult) -> Recommendation:
    return Recommendation(
        priority=priority,
        qualification_type=row.qualification.type.value,
        qualification=row.qualification.text,
        keywords=row.qualification.keywords,
        action=action,
        impact=_impact(row, match),
    )


def build_recommendations(match: MatchResult) -> list[Recommendation]:
    weak_confidence = float(get_scoring_value("recommendations.weak_confidence", 0.75))
    preferred_limit = int(get_scoring_value("recommendations.preferred_limit", 3))
    pass_pct = int(get_scoring_value("matching.thresholds.pass", 75))

    required_rows = [row for row in match.breakdown if row.qualification.priority == QualificationPriority.REQUIRED]
    preferred_rows = [row for row in match.breakdown if row.qualification.priority == QualificationPriority.PREFERRED]

    recommendations: list[Recommendation] = []
    for row in sorted((r for r in required_rows if not r.met), key=lambda r: -r.confidence):
        keywords = ", ".join(row.qualification.keywords[:3])
        recommendations.append(
            _recommend("critical", row, f"Add experience with {keywords} to work experience bullets", match)
        )

    for row in match.breakdown:
        if row.met and row.confidence < weak_confidence:
            keywords = ", ".join(row.qualification.keywords[:2])
            recommendations.append(_recommend("high", row, f"Strengthen evidence of {keywords} in the resume", match))

    if match.required_match_pct >= pass_pct:
        for row in [r for r in preferred_rows if not r.met][:preferred_limit]:
            keywords = ", ".join(row.qualification.keywords[:2])
            recommendations.append(
                _recommend("medium", row, f"Consider adding {keywords} for competitive advantage", match)
            )
    return recommendations
