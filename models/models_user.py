from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApplicationStage(str, Enum):
    DISCOVERING = "discovering"
    APPLYING = "applying"


class ShortlistedUniversity(BaseModel):
    name: str
    country: Optional[str] = None
    portal_url: Optional[str] = None
    locked: bool = False
    match_score: Optional[int] = None
    tuition: Optional[int] = None
    ranking: Optional[int] = None
    application_deadline: Optional[datetime] = None


class TaskGroup(str, Enum):
    DOCUMENTS = "Documents"
    EXAMS = "Exams"
    FORMS = "Forms"


class TaskPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class ApplicationTask(BaseModel):
    id: str
    group: Optional[TaskGroup] = None
    title: str = ""
    desc: str = ""
    priority: Optional[TaskPriority] = None
    completed: bool = False

    class Config:
        use_enum_values = True


class ApplicationTaskGroup(BaseModel):
    university_name: str
    tasks: List[ApplicationTask] = Field(default_factory=list)


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatContext(BaseModel):
    task_title: Optional[str] = None
    university: Optional[str] = None


class ChatMessage(BaseModel):
    role: ChatRole
    message: str
    context: Optional[ChatContext] = None
    created_at: datetime = Field(default_factory=utcnow)

    class Config:
        use_enum_values = True


def new_user_document(name: str, email: str, password_hash: str) -> Dict[str, Any]:
    """Initial Mongo document for a freshly registered user."""
    return {
        "name": name,
        "email": email.lower(),
        "password_hash": password_hash,
        "onboarding_completed": False,
        "application_stage": ApplicationStage.DISCOVERING.value,
        "profile": {},
        "shortlisted_universities": [],
        "application_tasks": [],
        "ai_chats": [],
        # Computed by the matching engine, never user input
        "university_matches": [],
        "university_mode": None,
        "profile_version": 0,
        "created_at": utcnow(),
    }
