"""
Data Contracts for the Matching Engine

Pydantic models for the engine input (StudentProfile) and output
(CountryMatchGroup). These shapes are also what gets stored on the user
document.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from enum import Enum

from .constants import Difficulty, FitCategory


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class EducationLevel(str, Enum):
    HIGH_SCHOOL = "High School"
    BACHELORS = "Bachelor's Degree"
    MASTERS = "Master's Degree"
    PHD = "PhD"


class IntendedDegree(str, Enum):
    BACHELORS = "Bachelor's"
    MASTERS = "Master's"
    MBA = "MBA"
    PHD = "PhD"


class TargetIntake(str, Enum):
    FALL_2025 = "Fall 2025"
    SPRING_2025 = "Spring 2025"
    FALL_2026 = "Fall 2026"
    SPRING_2026 = "Spring 2026"


class BudgetRange(str, Enum):
    UNDER_20K = "Under $20K"
    FROM_20K_TO_40K = "$20K - $40K"
    FROM_40K_TO_60K = "$40K - $60K"
    OVER_60K = "Over $60K"


class FundingPlan(str, Enum):
    SELF_FUNDED = "Self-Funded"
    SCHOLARSHIP_DEPENDENT = "Scholarship-Dependent"
    LOAN_DEPENDENT = "Loan-Dependent"


class ProgressStatus(str, Enum):
    """Status of an exam or document (IELTS, GRE, SOP)."""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class StudentProfile(BaseModel):
    """
    Questionnaire answers for a student.
    Every field is optional; the scorer treats missing values as weak signals.
    """
    # Academic Background
    education_level: Optional[EducationLevel] = None
    major: Optional[str] = None
    graduation_year: Optional[str] = None
    gpa: Optional[str] = None  # kept as typed, parsed by the scorer

    # Study Goals
    intended_degree: Optional[IntendedDegree] = None
    field_of_study: Optional[str] = None
    target_intake: Optional[TargetIntake] = None
    preferred_countries: List[str] = Field(default_factory=list)

    # Budget
    budget_range: Optional[BudgetRange] = None
    funding_plan: Optional[FundingPlan] = None

    # Readiness
    ielts_status: Optional[ProgressStatus] = None
    gre_status: Optional[ProgressStatus] = None
    sop_status: Optional[ProgressStatus] = None

    class Config:
        use_enum_values = True

    @field_validator("gpa", "graduation_year", mode="before")
    @classmethod
    def stringify_numbers(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("preferred_countries", mode="before")
    @classmethod
    def default_countries(cls, value):
        return value or []


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class UniversityCandidate(BaseModel):
    """A university as returned by a directory, before scoring."""
    name: str
    website: str = ""
    difficulty: Difficulty = Difficulty.LOW

    class Config:
        use_enum_values = True


class RankedUniversity(UniversityCandidate):
    """A scored university for one country."""
    country: str
    portal_url: str = ""
    match_score: int = Field(ge=0, le=100)
    fit: FitCategory
    tuition: int
    ranking: Optional[int] = None  # no real ranking source yet


class CountryMatchGroup(BaseModel):
    country: str
    universities: List[RankedUniversity] = Field(default_factory=list)
