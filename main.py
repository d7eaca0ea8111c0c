from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

from db_mongo import ensure_indexes
from auth_routes import router as auth_router
from profile_routes import router as profile_router
from ai_routes import router as ai_router
from matching.routes import router as universities_router
from matching.logic import build_engine
from matching.logic.directories import build_http_client
from matching.ai import Counsellor

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("main")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Long-lived clients shared by every request
    http_client = build_http_client()
    app.state.matching_engine = build_engine(http_client)
    app.state.counsellor = Counsellor()
    try:
        await ensure_indexes()
    except Exception as e:
        logger.error(f"Could not ensure Mongo indexes: {e}")
    logger.info("AI Counsellor API started")
    try:
        yield
    finally:
        await http_client.aclose()


app = FastAPI(title="AI Counsellor API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(universities_router)
app.include_router(ai_router)


@app.get("/", tags=["meta"], summary="Health check")
def health():
    return {"status": "ok", "message": "AI Counsellor API is running"}
