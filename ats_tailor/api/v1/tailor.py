from fastapi import APIRouter, Request

from ats_tailor.ai.factory import get_extraction_service
from ats_tailor.core.config import settings
from ats_tailor.core.rate_limit import rate_limit
from ats_tailor.parsing.resume import parse_resume
from ats_tailor.qualifications.extractor import extract_qualifications
from ats_tailor.schemas.api import (
    ExtractQualificationsRequest,
    MatchRequest,
    MatchResponse,
    ParseResumeRequest,
    TailorRequest,
)
from ats_tailor.schemas.qualification import QualificationSet
from ats_tailor.schemas.resume import ParseOutcome
from ats_tailor.schemas.tailoring import TailoringReport
from ats_tailor.scoring.matcher import score_match
from ats_tailor.scoring.recommendations import build_recommendations
from ats_tailor.services.tailor_service import tailor_resume_async

router = APIRouter()


@router.post("/resume/parse", response_model=ParseOutcome)
@rate_limit()
async def parse_resume_endpoint(request: Request, payload: ParseResumeRequest) -> ParseOutcome:
    _ = request
    return parse_resume(payload.resume_text)


@router.post("/qualifications/extract", response_model=QualificationSet)
@rate_limit()
async def extract_qualifications_endpoint(request: Request, payload: ExtractQualificationsRequest) -> QualificationSet:
    _ = request
    return extract_qualifications(payload.job_text)


@router.post("/match", response_model=MatchResponse)
@rate_limit()
async def match_endpoint(request: Request, payload: MatchRequest) -> MatchResponse:
    _ = request
    outcome = parse_resume(payload.resume_text)
    qualifications = extract_qualifications(payload.job_text)
    if not outcome.ok:
        return MatchResponse(parse_status=outcome.status, message=outcome.message, qualifications=qualifications)

    match = score_match(outcome.document, qualifications)
    return MatchResponse(
        parse_status=outcome.status,
        qualifications=qualifications,
        match=match,
        recommendations=build_recommendations(match),
    )


@router.post("/tailor", response_model=TailoringReport)
@rate_limit(settings.tailor_rate_limit)
async def tailor_endpoint(request: Request, payload: TailorRequest) -> TailoringReport:
    _ = request
    return await tailor_resume_async(
        payload.resume_text,
        payload.job_text,
        payload.keywords,
        service=get_extraction_service(),
    )
