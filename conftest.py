"""
Shared test fixtures: an in-memory stand-in for the Mongo users collection,
static university directories and a scripted counsellor.
"""

import copy
from types import SimpleNamespace

import httpx
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from db_mongo import get_users
from main import app
from matching.dependencies import get_matching_engine, get_counsellor
from matching.logic import MatchingEngine, UniversityCandidate
from matching.logic.scorers import guess_difficulty


class FakeCollection:
    """Supports the subset of motor calls the app makes."""

    def __init__(self):
        self.docs = []
        self.update_calls = 0

    def _find(self, query):
        for doc in self.docs:
            if all(doc.get(k) == v for k, v in query.items()):
                return doc
        return None

    async def find_one(self, query, projection=None):
        doc = self._find(query)
        return copy.deepcopy(doc) if doc else None

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, query, update, upsert=False):
        self.update_calls += 1
        doc = self._find(query)
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        for key, value in update.get("$set", {}).items():
            doc[key] = copy.deepcopy(value)
        for key, value in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + value
        for key, value in update.get("$push", {}).items():
            items = value["$each"] if isinstance(value, dict) and "$each" in value else [value]
            doc.setdefault(key, []).extend(copy.deepcopy(items))
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def create_index(self, *args, **kwargs):
        return "ok"


class StaticDirectory:
    """Directory returning fixed names per country."""

    def __init__(self, names_by_country=None, default_names=None):
        self.names_by_country = names_by_country or {}
        self.default_names = default_names or []
        self.calls = []

    async def fetch(self, country, limit=30):
        self.calls.append(country)
        names = self.names_by_country.get(country, self.default_names)
        return [
            UniversityCandidate(name=n, website=f"https://{i}.example.edu", difficulty=guess_difficulty(n))
            for i, n in enumerate(names)
            if n and n.strip()
        ][:limit]


class FailingDirectory:
    async def fetch(self, country, limit=30):
        raise httpx.ConnectError("directory unreachable")


class ScriptedCounsellor:
    def __init__(self):
        self.reply_text = "🎓 Your Profile\nLooking good."
        self.welcome_text = "👋 Welcome!"
        self.tasks = [
            {"id": "t1", "group": "Documents", "title": "Transcript", "desc": "Request it", "priority": "high"},
            {"id": "t2", "group": "Exams", "title": "IELTS", "desc": "Book a date", "priority": "medium"},
        ]
        self.error = None
        self.welcome_calls = 0
        self.last_history = None

    async def reply(self, profile, chats):
        self.last_history = chats
        if self.error:
            raise self.error
        return self.reply_text

    async def welcome(self, profile):
        self.welcome_calls += 1
        return self.welcome_text

    async def generate_tasks(self, university, profile):
        if self.error:
            raise self.error
        return copy.deepcopy(self.tasks)

    async def analyze_university(self, university, website, profile):
        return f"Analysis of {university}"


@pytest.fixture
def users():
    return FakeCollection()


@pytest.fixture
def directory():
    return StaticDirectory(default_names=["Global Business School", "Tech Institute of Nowhere"])


@pytest.fixture
def engine(directory):
    return MatchingEngine(default_directory=directory)


@pytest.fixture
def counsellor():
    return ScriptedCounsellor()


@pytest.fixture
def client(users, engine, counsellor):
    app.dependency_overrides[get_users] = lambda: users
    app.dependency_overrides[get_matching_engine] = lambda: engine
    app.dependency_overrides[get_counsellor] = lambda: counsellor
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    resp = client.post(
        "/auth/signup",
        json={"name": "Asha", "email": "asha@example.com", "password": "secret123"},
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def onboarding_payload():
    return {
        "education_level": "Bachelor's Degree",
        "major": "Computer Science",
        "graduation_year": "2024",
        "gpa": "9.1",
        "intended_degree": "Master's",
        "field_of_study": "Data Science",
        "target_intake": "Fall 2026",
        "preferred_countries": ["Germany", "USA"],
        "budget_range": "$20K - $40K",
        "funding_plan": "Self-Funded",
        "ielts_status": "Completed",
        "gre_status": "In Progress",
        "sop_status": "In Progress",
    }
