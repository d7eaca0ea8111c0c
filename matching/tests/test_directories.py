"""
Tests for the directory clients against stubbed HTTP responses.
"""

import asyncio

import httpx
import pytest

from matching.logic.directories import HipolabsDirectory, CollegeScorecardDirectory, DirectoryResponseError
from matching.logic.engine import build_engine


def _run(handler, fn):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fn(client)
    return asyncio.run(go())


def test_hipolabs_filters_blank_names_and_caps_results():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        rows = [{"name": "  ", "web_pages": ["https://blank.example"]}, {"name": None}]
        rows += [{"name": f"University {i}", "web_pages": [f"https://u{i}.example", "https://alt"]} for i in range(40)]
        return httpx.Response(200, json=rows)

    candidates = _run(handler, lambda c: HipolabsDirectory(c, base_url="http://dir.test").fetch("Germany"))

    assert seen["url"] == "http://dir.test/search?country=Germany"
    assert len(candidates) == 30
    assert candidates[0].name == "University 0"
    assert candidates[0].website == "https://u0.example"
    assert candidates[0].difficulty == "medium"


def test_hipolabs_missing_web_pages_gives_empty_website():
    def handler(request):
        return httpx.Response(200, json=[{"name": "Small College"}])

    candidates = _run(handler, lambda c: HipolabsDirectory(c).fetch("Canada"))

    assert candidates[0].website == ""
    assert candidates[0].difficulty == "low"


def test_scorecard_sends_key_and_fields():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={
            "metadata": {"page": 0},
            "results": [
                {"school.name": "Stanford University", "school.school_url": "www.stanford.edu"},
                {"school.name": "", "school.school_url": "nowhere"},
                {"school.name": "Plain College", "school.school_url": None},
            ],
        })

    directory = lambda c: CollegeScorecardDirectory(c, api_key="k123", base_url="https://scorecard.test/schools")
    candidates = _run(handler, lambda c: directory(c).fetch("United States"))

    assert seen["params"] == {"api_key": "k123", "per_page": "30", "fields": "school.name,school.school_url"}
    assert [u.name for u in candidates] == ["Stanford University", "Plain College"]
    assert candidates[0].difficulty == "high"
    assert candidates[1].website == ""


def test_http_errors_are_raised():
    def handler(request):
        return httpx.Response(503, json={"error": "down"})

    with pytest.raises(httpx.HTTPStatusError):
        _run(handler, lambda c: HipolabsDirectory(c).fetch("Germany"))


def test_hipolabs_rejects_non_list_body():
    def handler(request):
        return httpx.Response(200, json={"error": "rate limited"})

    with pytest.raises(DirectoryResponseError, match="expected a list"):
        _run(handler, lambda c: HipolabsDirectory(c).fetch("Germany"))


def test_hipolabs_rejects_non_json_body():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(DirectoryResponseError, match="invalid JSON"):
        _run(handler, lambda c: HipolabsDirectory(c).fetch("Germany"))


def test_hipolabs_skips_non_object_rows():
    def handler(request):
        return httpx.Response(200, json=["junk", None, {"name": "Real University"}])

    candidates = _run(handler, lambda c: HipolabsDirectory(c).fetch("Canada"))

    assert [u.name for u in candidates] == ["Real University"]


@pytest.mark.parametrize("body", [{"results": None}, {"metadata": {}}, [1, 2]])
def test_scorecard_rejects_missing_results(body):
    def handler(request):
        return httpx.Response(200, json=body)

    with pytest.raises(DirectoryResponseError):
        _run(handler, lambda c: CollegeScorecardDirectory(c, api_key="k").fetch("United States"))


def test_build_engine_routes_united_states_to_scorecard():
    engine = build_engine(httpx.AsyncClient())

    assert isinstance(engine.directory_for("United States"), CollegeScorecardDirectory)
    assert isinstance(engine.directory_for("Germany"), HipolabsDirectory)
