from pydantic import BaseModel, EmailStr, constr
from datetime import datetime
from typing import Any, Dict, List, Optional

from matching.logic.contracts import StudentProfile
from models.models_user import ShortlistedUniversity, ApplicationTaskGroup

class UserRegister(BaseModel):
    name: constr(strip_whitespace=True, min_length=1)
    email: EmailStr
    password: constr(min_length=6)

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserOut(BaseModel):
    id: str
    name: str | None = None
    email: EmailStr
    onboarding_completed: bool = False
    application_stage: str = "discovering"
    profile: StudentProfile = StudentProfile()
    shortlisted_universities: List[ShortlistedUniversity] = []
    application_tasks: List[ApplicationTaskGroup] = []
    university_mode: str | None = None
    profile_version: int = 0
    created_at: datetime | None = None

class AuthResponse(BaseModel):
    token: str
    user: UserOut

class ProfileUpdate(StudentProfile):
    """Partial profile; only fields present in the request are applied."""

class TaskToggle(BaseModel):
    university_name: str
    task_id: str

class ShortlistRequest(BaseModel):
    university: ShortlistedUniversity

class LockRequest(BaseModel):
    name: str

class AnalyzeRequest(BaseModel):
    university: str
    website: str = ""
    profile: Dict[str, Any] = {}

class ChatRequest(BaseModel):
    message: constr(strip_whitespace=True, min_length=1)

class GenerateTasksRequest(BaseModel):
    university_name: str

class ShortlistOut(BaseModel):
    shortlisted_universities: List[ShortlistedUniversity]
    application_stage: str
