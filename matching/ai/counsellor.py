import os
import json
import logging
from typing import Dict, Any, List, Optional
import openai
from dotenv import load_dotenv

from .prompt_builder import (
    build_chat_system_prompt,
    build_welcome_prompt,
    build_history_messages,
    build_tasks_prompt,
    build_analysis_prompt,
)

# Load env vars (if not already loaded)
load_dotenv()

logger = logging.getLogger("matching.ai")

OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")


class CounsellorUnavailable(RuntimeError):
    """Raised when no API key is configured."""


class CounsellorResponseError(ValueError):
    """Raised when the model returns something we cannot use."""


class CounsellorProviderError(RuntimeError):
    """Raised when the request to the model provider fails."""


def parse_task_payload(raw: str) -> List[Dict[str, Any]]:
    """
    Extract the task list from a model reply.

    Code fences are stripped before parsing. Raises CounsellorResponseError
    when the reply is not JSON or `tasks` is not a list.
    """
    cleaned = (raw or "").replace("```json", "").replace("```", "").strip()

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise CounsellorResponseError("AI returned invalid JSON") from e

    tasks = parsed.get("tasks") if isinstance(parsed, dict) else None
    if not isinstance(tasks, list):
        raise CounsellorResponseError("AI tasks missing")

    return [t for t in tasks if isinstance(t, dict)]


class Counsellor:
    def __init__(self, api_key: Optional[str] = None, client: Optional[openai.AsyncOpenAI] = None):
        self.api_key = api_key if api_key is not None else os.getenv("OPENROUTER_KEY")
        self.client = client
        if self.client is None and self.api_key:
            self.client = openai.AsyncOpenAI(
                api_key=self.api_key,
                base_url=OPENROUTER_BASE_URL,
                default_headers={
                    "HTTP-Referer": FRONTEND_URL,
                    "X-Title": "AI Counsellor",
                },
            )

        self.model = os.getenv("AI_MODEL", "openai/gpt-4o-mini")
        self.max_tokens = 600
        self.chat_temperature = 0.6
        self.tasks_temperature = 0.4

    async def _complete(self, messages: List[Dict[str, str]], temperature: Optional[float] = None) -> str:
        if not self.client:
            logger.warning("OPENROUTER_KEY not set. AI counsellor disabled.")
            raise CounsellorUnavailable("AI counsellor is not configured")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                temperature=self.chat_temperature if temperature is None else temperature,
            )
        except openai.APIError as e:
            logger.exception("AI provider request failed")
            raise CounsellorProviderError("AI provider request failed") from e
        return response.choices[0].message.content or ""

    async def reply(self, profile: Dict[str, Any], chats: List[Dict[str, Any]]) -> str:
        """Answer the latest message given the stored conversation."""
        messages = [{"role": "system", "content": build_chat_system_prompt(profile)}]
        messages.extend(build_history_messages(chats))
        return await self._complete(messages)

    async def welcome(self, profile: Dict[str, Any]) -> str:
        """One-time introduction summarizing the profile."""
        return await self._complete([{"role": "system", "content": build_welcome_prompt(profile)}])

    async def generate_tasks(self, university: Dict[str, Any], profile: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Application checklist for a shortlisted university.
        """
        prompt = build_tasks_prompt(university, profile)
        raw = await self._complete([{"role": "system", "content": prompt}], temperature=self.tasks_temperature)

        try:
            return parse_task_payload(raw)
        except CounsellorResponseError:
            logger.error("Unusable AI task response: %s", raw)
            raise

    async def analyze_university(self, university: str, website: str, profile: Dict[str, Any]) -> str:
        prompt = build_analysis_prompt(university, website, profile)
        return await self._complete([{"role": "user", "content": prompt}])
