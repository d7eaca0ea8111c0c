"""
Tests for the AI counsellor routes and response parsing.
"""

import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from matching.ai import (
    Counsellor,
    CounsellorUnavailable,
    CounsellorResponseError,
    CounsellorProviderError,
    parse_task_payload,
)
from matching.ai.prompt_builder import build_history_messages, build_chat_system_prompt, build_tasks_prompt


def test_parse_task_payload_strips_fences():
    raw = '```json\n{"tasks": [{"id": "1", "title": "SOP"}]}\n```'
    assert parse_task_payload(raw) == [{"id": "1", "title": "SOP"}]


def test_parse_task_payload_rejects_bad_json():
    with pytest.raises(CounsellorResponseError, match="invalid JSON"):
        parse_task_payload('{"tasks": [')


@pytest.mark.parametrize("raw", ['{"tasks": "none"}', '{"todo": []}', '[1, 2]', '"tasks"'])
def test_parse_task_payload_rejects_non_list_tasks(raw):
    with pytest.raises(CounsellorResponseError, match="AI tasks missing"):
        parse_task_payload(raw)


def test_history_window_and_roles():
    chats = [{"role": "user", "message": str(i)} for i in range(10)]
    chats.append({"role": "assistant", "message": "last"})

    messages = build_history_messages(chats)

    assert len(messages) == 6
    assert messages[-1] == {"role": "assistant", "content": "last"}
    assert messages[0] == {"role": "user", "content": "5"}


def test_prompts_include_profile():
    prompt = build_chat_system_prompt({"major": "Chemistry"})
    assert '"major": "Chemistry"' in prompt
    assert "Dream Universities" in prompt

    tasks_prompt = build_tasks_prompt({"name": "UCL", "country": "United Kingdom"}, {"gpa": "8", "email": "x"})
    assert "UCL (United Kingdom)" in tasks_prompt
    assert '"gpa": "8"' in tasks_prompt
    assert "email" not in tasks_prompt


def test_counsellor_without_key_is_unavailable():
    counsellor = Counsellor(api_key="")
    with pytest.raises(CounsellorUnavailable):
        asyncio.run(counsellor.welcome({}))


def test_counsellor_provider_failure_is_wrapped():
    async def create(**kwargs):
        raise openai.APIConnectionError(request=httpx.Request("POST", "https://openrouter.test/chat/completions"))

    fake_client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    counsellor = Counsellor(api_key="test-key", client=fake_client)

    with pytest.raises(CounsellorProviderError) as exc:
        asyncio.run(counsellor.reply({}, [{"role": "user", "message": "hi"}]))
    assert isinstance(exc.value.__cause__, openai.APIConnectionError)


def test_chat_stores_both_messages(client, auth_headers, counsellor, users):
    resp = client.post("/ai/chat", json={"message": "Which countries fit me?"}, headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == {"result": counsellor.reply_text}
    assert counsellor.last_history[-1]["message"] == "Which countries fit me?"
    chats = users.docs[0]["ai_chats"]
    assert [c["role"] for c in chats] == ["user", "assistant"]


def test_history_welcome_generated_once(client, auth_headers, counsellor):
    first = client.get("/ai/chat/history", headers=auth_headers).json()
    second = client.get("/ai/chat/history", headers=auth_headers).json()

    assert first["chats"][0]["message"] == counsellor.welcome_text
    assert len(second["chats"]) == 1
    assert counsellor.welcome_calls == 1


def test_generate_tasks_requires_shortlist(client, auth_headers):
    resp = client.post("/ai/generate-tasks", json={"university_name": "A University"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "University not found"


def test_generate_tasks_replaces_group(client, auth_headers, users):
    client.post("/shortlist", json={"university": {"name": "A University", "country": "Canada"}}, headers=auth_headers)
    users.docs[0]["application_tasks"] = [
        {"university_name": "A University", "tasks": [{"id": "old", "title": "Old", "completed": True}]},
        {"university_name": "Other", "tasks": []},
    ]

    resp = client.post("/ai/generate-tasks", json={"university_name": "A University"}, headers=auth_headers)

    assert resp.status_code == 200
    tasks = resp.json()["tasks"]
    assert [t["id"] for t in tasks] == ["t1", "t2"]
    assert all(t["completed"] is False for t in tasks)

    groups = users.docs[0]["application_tasks"]
    assert [g["university_name"] for g in groups] == ["Other", "A University"]


def test_generate_tasks_bad_model_output(client, auth_headers, counsellor):
    client.post("/shortlist", json={"university": {"name": "A University"}}, headers=auth_headers)
    counsellor.error = CounsellorResponseError("AI returned invalid JSON")

    resp = client.post("/ai/generate-tasks", json={"university_name": "A University"}, headers=auth_headers)

    assert resp.status_code == 500
    assert resp.json()["detail"] == "AI returned invalid JSON"


def test_generate_tasks_invalid_task_fields(client, auth_headers, counsellor):
    client.post("/shortlist", json={"university": {"name": "A University"}}, headers=auth_headers)
    counsellor.tasks = [{"id": "t1", "group": "Paperwork", "title": "x"}]

    resp = client.post("/ai/generate-tasks", json={"university_name": "A University"}, headers=auth_headers)

    assert resp.status_code == 500


def test_chat_provider_failure_is_502(client, auth_headers, counsellor, users):
    counsellor.error = CounsellorProviderError("AI provider request failed")

    resp = client.post("/ai/chat", json={"message": "Hello?"}, headers=auth_headers)

    assert resp.status_code == 502
    assert resp.json()["detail"] == "AI provider request failed"
    assert users.docs[0].get("ai_chats") == []


def test_generate_tasks_provider_failure_is_502(client, auth_headers, counsellor):
    client.post("/shortlist", json={"university": {"name": "A University"}}, headers=auth_headers)
    counsellor.error = CounsellorProviderError("AI provider request failed")

    resp = client.post("/ai/generate-tasks", json={"university_name": "A University"}, headers=auth_headers)

    assert resp.status_code == 502
