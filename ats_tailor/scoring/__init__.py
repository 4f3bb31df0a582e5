from .matcher import check_qualification, render_resume_text, score_match, threshold_status
from .recommendations import build_recommendations

__all__ = [
    "build_recommendations",
    "check_qualification",
    "render_resume_text",
    "score_match",
    "threshold_status",
]
