from typing import Any, Dict
from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from models.models_user import new_user_document
from models.schemas_user import UserOut

def parse_object_id(raw: str | None) -> ObjectId | None:
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError):
        return None

async def get_user_by_email(users: AsyncIOMotorCollection, email: str) -> Dict[str, Any] | None:
    return await users.find_one({"email": email.lower()})

async def get_user_by_id(users: AsyncIOMotorCollection, user_id: ObjectId) -> Dict[str, Any] | None:
    return await users.find_one({"_id": user_id})

async def create_user(users: AsyncIOMotorCollection, *, name: str, email: str, password_hash: str) -> Dict[str, Any]:
    doc = new_user_document(name, email, password_hash)
    result = await users.insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc

async def update_user(users: AsyncIOMotorCollection, user_id: ObjectId, fields: Dict[str, Any]) -> None:
    await users.update_one({"_id": user_id}, {"$set": fields})

def serialize_user(doc: Dict[str, Any]) -> UserOut:
    """Public view of a user document (no password hash, string id)."""
    payload = {k: v for k, v in doc.items() if k not in ("_id", "password_hash")}
    payload["id"] = str(doc["_id"])
    payload["profile"] = doc.get("profile") or {}
    return UserOut.model_validate(payload)
