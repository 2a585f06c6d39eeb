from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date, datetime

from practice.mastery import Label

MAX_NAME_LENGTH = 200
MAX_LINK_LENGTH = 500
MAX_INSIGHT_LENGTH = 5000

class ProblemCreate(BaseModel):
    """Schema for adding a problem to the catalogue"""
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    link: str = Field(min_length=1, max_length=MAX_LINK_LENGTH)
    key_insight: Optional[str] = Field(default=None, max_length=MAX_INSIGHT_LENGTH)

class ProblemUpdate(BaseModel):
    """Schema for editing descriptive fields of a problem"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_NAME_LENGTH)
    link: Optional[str] = Field(default=None, min_length=1, max_length=MAX_LINK_LENGTH)
    key_insight: Optional[str] = Field(default=None, max_length=MAX_INSIGHT_LENGTH)

class ProblemResponse(BaseModel):
    """Schema for a problem as returned by the engine"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    link: str
    label: Label
    last_reviewed: Optional[date] = None
    review_count: int
    key_insight: Optional[str] = None

class DailyProblem(BaseModel):
    """One row of a day's practice set"""
    assignment_id: int
    problem_id: int
    assigned_date: date
    completed: bool
    name: str
    link: str
    label: Label
    last_reviewed: Optional[date] = None
    review_count: int
    key_insight: Optional[str] = None

class AttemptResponse(BaseModel):
    """Schema for one historical attempt"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    problem_id: int
    outcome: Label
    attempted_at: datetime

class StatsResponse(BaseModel):
    """Dashboard aggregates for a date"""
    total_problems: int
    mastered_problems: int
    current_streak: int
    ready_for_review: int

class InsightResponse(BaseModel):
    """Key insight picked for the tip rotation"""
    problem_id: int
    problem_name: str
    problem_link: str
    key_insight: str

class SettingsUpdate(BaseModel):
    """Schema for changing stored preferences"""
    daily_problem_count: int = Field(ge=3, le=10)
