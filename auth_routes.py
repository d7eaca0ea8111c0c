"""
Auth API Routes

Signup, login and the current-user dependency shared by every protected route.
Users are stored in the `users` collection; tokens are HS256 JWTs.
"""

import logging
from typing import Any, Dict

import jwt
from fastapi import APIRouter, Depends, Header, HTTPException
from motor.motor_asyncio import AsyncIOMotorCollection

from db_mongo import get_users
from models.schemas_user import UserRegister, UserLogin, UserOut, AuthResponse
from utils.auth_utils import hash_password, verify_password, create_token, decode_token
from utils.crud_user import get_user_by_email, get_user_by_id, create_user, parse_object_id, serialize_user

logger = logging.getLogger("auth")

router = APIRouter(prefix="/auth", tags=["auth"])


async def auth_user(
    authorization: str | None = Header(default=None),
    users: AsyncIOMotorCollection = Depends(get_users),
) -> Dict[str, Any]:
    """Resolve the bearer token to the full user document."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="No auth token provided")
    token = authorization.split(" ", 1)[1]
    try:
        data = decode_token(token)
    except jwt.PyJWTError as e:
        logger.error(f"Token decode failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user_id = parse_object_id(data.get("sub"))
    user = await get_user_by_id(users, user_id) if user_id else None
    if not user:
        logger.error(f"User not found for id: {data.get('sub')}")
        raise HTTPException(status_code=401, detail="User not found")
    return user


# ─────────────────────────────────────────────
# POST /auth/signup
# ─────────────────────────────────────────────
@router.post("/signup", response_model=AuthResponse, summary="Register a new account")
async def signup(payload: UserRegister, users: AsyncIOMotorCollection = Depends(get_users)):
    if await get_user_by_email(users, payload.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = await create_user(
        users,
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
    )
    logger.info("Registered user %s", user["_id"])
    return AuthResponse(token=create_token(str(user["_id"])), user=serialize_user(user))


# ─────────────────────────────────────────────
# POST /auth/login
# ─────────────────────────────────────────────
@router.post("/login", response_model=AuthResponse, summary="Login with email and password")
async def login(payload: UserLogin, users: AsyncIOMotorCollection = Depends(get_users)):
    user = await get_user_by_email(users, payload.email)
    if not user:
        raise HTTPException(status_code=400, detail="Account not found")
    if not verify_password(payload.password, user.get("password_hash")):
        raise HTTPException(status_code=400, detail="Incorrect password")
    return AuthResponse(token=create_token(str(user["_id"])), user=serialize_user(user))


# ─────────────────────────────────────────────
# GET /auth/me
# ─────────────────────────────────────────────
@router.get("/me", response_model=UserOut, summary="Current user")
async def me(current: Dict[str, Any] = Depends(auth_user)):
    return serialize_user(current)
