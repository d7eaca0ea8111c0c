"""
AI Counsellor Routes

Chat with the counsellor, a one-time welcome message, and AI generated
application checklists for shortlisted universities.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError

from auth_routes import auth_user
from db_mongo import get_users
from matching.dependencies import get_counsellor
from matching.ai import Counsellor, CounsellorUnavailable, CounsellorResponseError, CounsellorProviderError
from models.models_user import ChatMessage, ChatRole
from models.schemas_user import ChatRequest, GenerateTasksRequest
from utils.crud_user import update_user
from utils.shortlist import replace_tasks

logger = logging.getLogger("ai")

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/chat", summary="Send a message to the counsellor")
async def chat(
    payload: ChatRequest,
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
    counsellor: Counsellor = Depends(get_counsellor),
):
    question = ChatMessage(role=ChatRole.USER, message=payload.message).model_dump()
    history = (current.get("ai_chats") or []) + [question]

    try:
        reply = await counsellor.reply(current.get("profile") or {}, history)
    except CounsellorUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CounsellorProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))

    answer = ChatMessage(role=ChatRole.ASSISTANT, message=reply).model_dump()
    await users.update_one(
        {"_id": current["_id"]},
        {"$push": {"ai_chats": {"$each": [question, answer]}}},
    )
    return {"result": reply}


@router.get("/chat/history", summary="Stored chat, or a fresh welcome message")
async def chat_history(
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
    counsellor: Counsellor = Depends(get_counsellor),
):
    chats = current.get("ai_chats") or []
    if chats:
        return {"chats": chats}

    # Welcome is generated only once per user
    try:
        intro = await counsellor.welcome(current.get("profile") or {})
    except CounsellorUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CounsellorProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))

    welcome = ChatMessage(role=ChatRole.ASSISTANT, message=intro).model_dump()
    await users.update_one({"_id": current["_id"]}, {"$push": {"ai_chats": welcome}})
    return {"chats": [welcome]}


@router.post("/generate-tasks", summary="Generate an application checklist")
async def generate_tasks(
    payload: GenerateTasksRequest,
    current: Dict[str, Any] = Depends(auth_user),
    users: AsyncIOMotorCollection = Depends(get_users),
    counsellor: Counsellor = Depends(get_counsellor),
):
    university = next(
        (u for u in current.get("shortlisted_universities") or [] if u.get("name") == payload.university_name),
        None,
    )
    if not university:
        raise HTTPException(status_code=400, detail="University not found")

    try:
        tasks = await counsellor.generate_tasks(university, current.get("profile") or {})
        groups = replace_tasks(current.get("application_tasks") or [], payload.university_name, tasks)
    except CounsellorUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CounsellorProviderError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except CounsellorResponseError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except ValidationError as e:
        logger.error(f"AI tasks failed validation: {e}")
        raise HTTPException(status_code=500, detail="AI tasks missing")

    await update_user(users, current["_id"], {"application_tasks": groups})
    stored = next(g for g in groups if g["university_name"] == payload.university_name)
    return {"tasks": stored["tasks"]}
