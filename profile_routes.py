"""
Profile API Routes

Endpoints to save/update and fetch the student questionnaire, plus the
application task checklist. Profiles live on the user document in the
`users` collection.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError

from auth_routes import auth_user
from db_mongo import get_users
from matching.dependencies import get_matching_engine
from matching.logic import (
    DIRECTORY_ERRORS,
    MatchingEngine,
    StudentProfile,
    recalc_universities,
    recalc_in_background,
)
from models.schemas_user import ProfileUpdate, TaskToggle, UserOut
from utils.crud_user import get_user_by_id, update_user, serialize_user
from utils.shortlist import toggle_task

logger = logging.getLogger("profile")

router = APIRouter(prefix="/auth", tags=["profile"])

REQUIRED_ONBOARDING_FIELDS = [
    "education_level",
    "major",
    "graduation_year",
    "intended_degree",
    "field_of_study",
    "target_intake",
    "budget_range",
    "funding_plan",
    "ielts_status",
    "sop_status",
]


def _clean_onboarding(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Drop empty strings and nulls; lists are kept as sent."""
    cleaned = {}
    for key, val in payload.items():
        if isinstance(val, list):
            cleaned[key] = val
        elif val != "" and val is not None:
            cleaned[key] = val
    return cleaned


def _validated_profile(data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return StudentProfile.model_validate(data).model_dump(mode="json")
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))


# ─────────────────────────────────────────────
# GET /auth/profile
# ─────────────────────────────────────────────
@router.get("/profile", summary="Fetch the current profile")
async def get_profile(current: Dict[str, Any] = Depends(auth_user)):
    """
    Return the stored profile, or an empty object when none was saved yet.
    """
    return current.get("profile") or {}


# ─────────────────────────────────────────────
# POST /auth/profile
# ─────────────────────────────────────────────
@router.post("/profile", summary="Merge fields into the profile")
async def save_profile(
    payload: ProfileUpdate,
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
):
    """
    Partial update: only fields present in the request overwrite stored ones.
    Matches are not recalculated.
    """
    updates = payload.model_dump(mode="json", exclude_unset=True)
    profile = {**(current.get("profile") or {}), **updates}

    await update_user(users, current["_id"], {"profile": profile})
    return {"success": True, "profile": profile}


# ─────────────────────────────────────────────
# PUT /auth/profile
# ─────────────────────────────────────────────
@router.put("/profile", response_model=UserOut, summary="Replace the profile and recalculate matches")
async def replace_profile(
    payload: StudentProfile,
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
    engine: MatchingEngine = Depends(get_matching_engine),
):
    profile = payload.model_dump(mode="json")
    await update_user(users, current["_id"], {"profile": profile, "onboarding_completed": True})

    try:
        await recalc_universities(users, engine, current["_id"])
    except DIRECTORY_ERRORS as e:
        logger.error(f"University recalculation failed for {current['_id']}: {e}")
        raise HTTPException(status_code=502, detail="Could not calculate university matches")

    return serialize_user(await get_user_by_id(users, current["_id"]))


# ─────────────────────────────────────────────
# PUT /auth/onboarding
# ─────────────────────────────────────────────
@router.put("/onboarding", response_model=UserOut, summary="Complete onboarding")
async def onboarding(
    background_tasks: BackgroundTasks,
    payload: Dict[str, Any] = Body(...),
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
    engine: MatchingEngine = Depends(get_matching_engine),
):
    """
    Save the full questionnaire. Matches are recalculated after the response
    is sent.
    """
    cleaned = _clean_onboarding(payload)

    for field in REQUIRED_ONBOARDING_FIELDS:
        if not cleaned.get(field):
            raise HTTPException(status_code=400, detail=f"Missing required field: {field}")

    if not cleaned.get("preferred_countries"):
        raise HTTPException(status_code=400, detail="At least one preferred country is required")

    profile = _validated_profile(cleaned)
    await update_user(users, current["_id"], {"profile": profile, "onboarding_completed": True})
    logger.info("Onboarding saved for %s", current["_id"])

    background_tasks.add_task(recalc_in_background, users, engine, current["_id"])

    return serialize_user(await get_user_by_id(users, current["_id"]))


# ─────────────────────────────────────────────
# POST /auth/tasks/toggle
# ─────────────────────────────────────────────
@router.post("/tasks/toggle", summary="Toggle an application task")
async def toggle_application_task(
    payload: TaskToggle,
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
):
    groups, completed, error = toggle_task(
        current.get("application_tasks") or [], payload.university_name, payload.task_id
    )
    if error:
        raise HTTPException(status_code=404, detail=error)

    await update_user(users, current["_id"], {"application_tasks": groups})
    return {"success": True, "completed": completed}
