from typing import Dict, Any, List
import json
from .style_rules import (
    SYSTEM_ROLE_DEFINITION,
    PERSONALITY,
    FORBIDDEN_FORMATTING,
    CHAT_STYLE_GUIDE,
    CHAT_RESPONSIBILITIES,
    ACTION_JSON_INSTRUCTION,
    WELCOME_SECTIONS,
    TASKS_JSON_FORMAT_INSTRUCTION,
    ANALYSIS_POINTS,
)

# Number of stored chat messages sent back to the model
HISTORY_WINDOW = 6

# Profile fields shared with the model when generating tasks
TASK_PROFILE_FIELDS = [
    "education_level",
    "major",
    "gpa",
    "intended_degree",
    "field_of_study",
    "target_intake",
    "ielts_status",
    "gre_status",
    "sop_status",
]


def _profile_block(profile: Dict[str, Any]) -> str:
    return f"""This is the student's live profile from the database:
{json.dumps(profile, indent=2, default=str)}
"""


def build_chat_system_prompt(profile: Dict[str, Any]) -> str:
    """System prompt for the ongoing counsellor chat."""
    forbidden = "\n".join([f"- {rule}" for rule in FORBIDDEN_FORMATTING])

    return f"""{SYSTEM_ROLE_DEFINITION}
{_profile_block(profile)}
{PERSONALITY}
You NEVER use:
{forbidden}
{CHAT_STYLE_GUIDE}
{CHAT_RESPONSIBILITIES}
{ACTION_JSON_INSTRUCTION}"""


def build_welcome_prompt(profile: Dict[str, Any]) -> str:
    """System prompt for the one-time introduction message."""
    forbidden = "\n".join([f"- {rule}" for rule in FORBIDDEN_FORMATTING + ["bold text", "placeholders like [Degree]"]])

    return f"""{SYSTEM_ROLE_DEFINITION}
{_profile_block(profile)}
{PERSONALITY}
STRICT STYLE RULES (VERY IMPORTANT):
You MUST follow this format exactly.
You MUST NOT use:
{forbidden}

You MUST use this visual style only:

Emoji + Section Title
Short natural sentences
Each line on its own
Friendly but professional tone
{WELCOME_SECTIONS}"""


def build_history_messages(chats: List[Dict[str, Any]], window: int = HISTORY_WINDOW) -> List[Dict[str, str]]:
    """
    Convert stored chats to chat-completion messages.
    Only the last `window` entries are sent to save tokens.
    """
    return [
        {
            "role": "assistant" if c.get("role") == "assistant" else "user",
            "content": c.get("message", ""),
        }
        for c in chats[-window:]
    ]


def build_tasks_prompt(university: Dict[str, Any], profile: Dict[str, Any]) -> str:
    task_profile = {field: profile.get(field) for field in TASK_PROFILE_FIELDS}

    return f"""
You are an AI Study Abroad Counsellor.
{TASKS_JSON_FORMAT_INSTRUCTION}
University:
{university.get("name")} ({university.get("country")})

Student profile:
{json.dumps(task_profile, default=str)}
"""


def build_analysis_prompt(university: str, website: str, profile: Dict[str, Any]) -> str:
    points = "\n".join([f"{i}. {point}" for i, point in enumerate(ANALYSIS_POINTS, start=1)])

    return f"""
You are an expert study-abroad counsellor.

University: {university}
Website: {website}
Student Profile: {json.dumps(profile, default=str)}

Give:
{points}
"""
