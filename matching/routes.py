"""
University API Routes

Exposes the matching engine and the shortlist / lock workflow.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorCollection

from auth_routes import auth_user
from db_mongo import get_users
from models.schemas_user import ShortlistRequest, LockRequest, AnalyzeRequest, ShortlistOut
from utils.crud_user import update_user
from utils.shortlist import toggle_shortlist, lock_university
from .dependencies import get_matching_engine, get_counsellor
from .logic import MatchingEngine, CountryMatchGroup, DIRECTORY_ERRORS, filter_by_mode, recalc_universities
from .logic.constants import AI_MODE
from .logic.directories import CollegeScorecardDirectory
from .ai.counsellor import Counsellor, CounsellorUnavailable, CounsellorProviderError

logger = logging.getLogger("matching.routes")

router = APIRouter(tags=["universities"])

US_OVERVIEW_FIELDS = (
    "school.name,latest.admissions.admission_rate.overall,"
    "latest.cost.tuition.in_state,latest.student.size"
)


# =============================================================================
# MATCHES
# =============================================================================

@router.get("/universities", summary="University matches grouped by country")
async def get_universities(
    mode: str = Query(default=AI_MODE, description="'ai' keeps preferred countries only"),
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
    engine: MatchingEngine = Depends(get_matching_engine),
):
    """
    Return stored matches, computing them first if the user has none.

    **Query:**
    - `mode`: `ai` filters to the student's preferred countries; any other
      value returns every country.
    """
    matches: List[Dict[str, Any]] = current.get("university_matches") or []

    if not matches:
        try:
            matches = await recalc_universities(users, engine, current["_id"], mode=mode)
        except DIRECTORY_ERRORS as e:
            logger.error(f"University recalculation failed for {current['_id']}: {e}")
            raise HTTPException(status_code=502, detail="Could not calculate university matches")

    groups = [CountryMatchGroup.model_validate(m) for m in matches]
    preferred = (current.get("profile") or {}).get("preferred_countries") or []

    filtered = filter_by_mode(groups, preferred, mode)
    return {"countries": [g.model_dump(mode="json") for g in filtered]}


@router.get("/us-universities", summary="College Scorecard overview")
async def us_universities(engine: MatchingEngine = Depends(get_matching_engine)):
    directory = engine.directory_for("United States")
    if not isinstance(directory, CollegeScorecardDirectory):
        raise HTTPException(status_code=503, detail="College Scorecard is not configured")

    try:
        return await directory.fetch_schools(US_OVERVIEW_FIELDS)
    except DIRECTORY_ERRORS as e:
        logger.error(f"College Scorecard request failed: {e}")
        raise HTTPException(status_code=502, detail="College Scorecard request failed")


@router.post("/analyze-university", summary="AI analysis of one university")
async def analyze_university(
    payload: AnalyzeRequest,
    counsellor: Counsellor = Depends(get_counsellor),
):
    try:
        analysis = await counsellor.analyze_university(payload.university, payload.website, payload.profile)
    except CounsellorUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CounsellorProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"analysis": analysis}


# =============================================================================
# SHORTLIST
# =============================================================================

@router.post("/shortlist", response_model=ShortlistOut, summary="Add or remove a shortlisted university")
async def shortlist(
    payload: ShortlistRequest,
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
):
    updated = toggle_shortlist(current.get("shortlisted_universities") or [], payload.university)
    await update_user(users, current["_id"], {"shortlisted_universities": updated})

    return {
        "shortlisted_universities": updated,
        "application_stage": current.get("application_stage") or "discovering",
    }


@router.post("/lock", response_model=ShortlistOut, summary="Lock a shortlisted university")
async def lock(
    payload: LockRequest,
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
):
    current_list = current.get("shortlisted_universities") or []
    if not current_list:
        raise HTTPException(status_code=400, detail="No shortlisted universities")

    updated, stage = lock_university(current_list, payload.name)
    if updated is None:
        raise HTTPException(status_code=404, detail="Not shortlisted")

    await update_user(users, current["_id"], {"shortlisted_universities": updated, "application_stage": stage})
    return {"shortlisted_universities": updated, "application_stage": stage}
