from fastapi import Request

from .logic.engine import MatchingEngine
from .ai.counsellor import Counsellor


def get_matching_engine(request: Request) -> MatchingEngine:
    """Engine built once in the app lifespan."""
    return request.app.state.matching_engine


def get_counsellor(request: Request) -> Counsellor:
    return request.app.state.counsellor
