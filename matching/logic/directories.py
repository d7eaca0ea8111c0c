"""
University Directories

Clients for the external services that list universities per country:
- Hipolabs university search (every country)
- College Scorecard (United States)

Each directory returns UniversityCandidate objects with blank names already
removed. HTTP failures are raised to the caller; there are no retries. A body
that is not the expected JSON shape raises DirectoryResponseError.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Protocol

import httpx
from dotenv import load_dotenv

from .contracts import UniversityCandidate
from .constants import MAX_CANDIDATES_PER_COUNTRY
from .scorers import guess_difficulty

load_dotenv()

logger = logging.getLogger("matching.directories")

HIPOLABS_URL = os.getenv("HIPOLABS_URL", "http://universities.hipolabs.com")
COLLEGE_SCORECARD_URL = os.getenv(
    "COLLEGE_SCORECARD_URL", "https://api.data.gov/ed/collegescorecard/v1/schools"
)
COLLEGE_SCORECARD_KEY = os.getenv("COLLEGE_SCORECARD_KEY")
DIRECTORY_TIMEOUT = float(os.getenv("DIRECTORY_TIMEOUT", "15"))


class DirectoryResponseError(ValueError):
    """Raised when a directory answers 2xx with a body we cannot read."""


# Everything a directory lookup can fail with
DIRECTORY_ERRORS = (httpx.HTTPError, DirectoryResponseError)


class UniversityDirectory(Protocol):
    async def fetch(self, country: str, limit: int = MAX_CANDIDATES_PER_COUNTRY) -> List[UniversityCandidate]:
        ...


def _candidate(name: Optional[str], website: Optional[str]) -> Optional[UniversityCandidate]:
    if not name or not name.strip():
        return None
    return UniversityCandidate(
        name=name,
        website=website or "",
        difficulty=guess_difficulty(name),
    )


def _read_json(resp: httpx.Response, source: str) -> Any:
    try:
        return resp.json()
    except ValueError as e:
        raise DirectoryResponseError(f"{source} returned invalid JSON") from e


def _expect_list(payload: Any, source: str) -> List[Any]:
    if not isinstance(payload, list):
        raise DirectoryResponseError(
            f"{source} returned {type(payload).__name__}, expected a list"
        )
    return payload


class HipolabsDirectory:
    """
    Hipolabs search API: GET /search?country=<name>
    Response: [{"name": ..., "web_pages": [...], ...}]
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str = HIPOLABS_URL):
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def fetch(self, country: str, limit: int = MAX_CANDIDATES_PER_COUNTRY) -> List[UniversityCandidate]:
        resp = await self.client.get(f"{self.base_url}/search", params={"country": country})
        resp.raise_for_status()

        candidates: List[UniversityCandidate] = []
        rows = _expect_list(_read_json(resp, "Hipolabs"), "Hipolabs")
        for row in rows:
            if not isinstance(row, dict):
                continue
            web_pages = row.get("web_pages") or []
            candidate = _candidate(row.get("name"), web_pages[0] if web_pages else "")
            if candidate:
                candidates.append(candidate)
            if len(candidates) >= limit:
                break
        return candidates


class CollegeScorecardDirectory:
    """
    College Scorecard API (US Department of Education).
    Response: {"metadata": {...}, "results": [{"school.name": ..., "school.school_url": ...}]}
    """

    FIELDS = "school.name,school.school_url"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str] = COLLEGE_SCORECARD_KEY,
        base_url: str = COLLEGE_SCORECARD_URL,
    ):
        self.client = client
        self.api_key = api_key
        self.base_url = base_url

    async def fetch_schools(self, fields: str, per_page: int = MAX_CANDIDATES_PER_COUNTRY) -> List[Dict[str, Any]]:
        """Raw first page of results for the requested fields."""
        resp = await self.client.get(
            self.base_url,
            params={"api_key": self.api_key, "per_page": per_page, "fields": fields},
        )
        resp.raise_for_status()
        body = _read_json(resp, "College Scorecard")
        if not isinstance(body, dict):
            raise DirectoryResponseError("College Scorecard returned no results object")
        return _expect_list(body.get("results"), "College Scorecard results")

    async def fetch(self, country: str, limit: int = MAX_CANDIDATES_PER_COUNTRY) -> List[UniversityCandidate]:
        results = await self.fetch_schools(self.FIELDS, per_page=limit)

        candidates: List[UniversityCandidate] = []
        for row in results:
            if not isinstance(row, dict):
                continue
            candidate = _candidate(row.get("school.name"), row.get("school.school_url"))
            if candidate:
                candidates.append(candidate)
        return candidates[:limit]


def build_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=DIRECTORY_TIMEOUT)
