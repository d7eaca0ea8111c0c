"""
Engine Runner

Ties the matching engine to the user store:
1. Reads the user's profile once
2. Runs the engine
3. Writes matches, mode and a version bump in a single update

Concurrent runs for the same user are last-writer-wins.
"""

import logging
from typing import Any, Dict, List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from .contracts import StudentProfile, CountryMatchGroup
from .constants import AI_MODE
from .engine import MatchingEngine

logger = logging.getLogger("matching.runner")


class UserNotFoundError(LookupError):
    pass


async def recalc_universities(
    users: AsyncIOMotorCollection,
    engine: MatchingEngine,
    user_id: ObjectId,
    mode: str = AI_MODE,
) -> List[Dict[str, Any]]:
    """
    Recalculate and persist university matches for one user.

    Returns the stored match groups.
    """
    user = await users.find_one({"_id": user_id}, {"profile": 1})
    if not user:
        raise UserNotFoundError(f"User not found for id: {user_id}")

    profile = StudentProfile.model_validate(user.get("profile") or {})

    logger.info("Recalculating university matches for %s (mode=%s)", user_id, mode)
    groups: List[CountryMatchGroup] = await engine.recalculate(profile)
    matches = [g.model_dump(mode="json") for g in groups]

    await users.update_one(
        {"_id": user_id},
        {
            "$set": {"university_matches": matches, "university_mode": mode},
            "$inc": {"profile_version": 1},
        },
    )
    logger.info("Stored %d country groups for %s", len(matches), user_id)
    return matches


async def recalc_in_background(
    users: AsyncIOMotorCollection,
    engine: MatchingEngine,
    user_id: ObjectId,
) -> None:
    """Background variant: failures are logged, the request has already returned."""
    logger.info("Background recalculation started for %s", user_id)
    try:
        await recalc_universities(users, engine, user_id)
    except Exception:
        logger.exception("Background recalculation failed for %s", user_id)
        return
    logger.info("Background recalculation done for %s", user_id)
