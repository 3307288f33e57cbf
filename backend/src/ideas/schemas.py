from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from src.validation.schemas import ValidationSignal


class ValidationStage(str, Enum):
    INITIAL = "initial"
    TESTING = "testing"
    VALIDATED = "validated"
    REJECTED = "rejected"


class PainPointCreate(BaseModel):
    category: str = Field(..., max_length=100)
    description: str = Field(..., max_length=1000)
    impact_score: int = Field(0, ge=0, le=10)
    wtp_score: int = Field(0, ge=0, le=10)
    freq_score: int = Field(0, ge=0, le=10)


class PainPoint(PainPointCreate):
    id: Optional[str] = None
    idea_id: Optional[str] = None
    created_at: Optional[datetime] = None


class IdeaCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    problem_category: str = Field(..., max_length=100)
    validation_stage: ValidationStage = ValidationStage.INITIAL
    user_pain_points: list[str] = []
    revenue_potential: int = Field(0, ge=0)
    target_users: int = Field(0, ge=0)


class IdeaUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    problem_category: Optional[str] = Field(None, max_length=100)
    validation_stage: Optional[ValidationStage] = None
    user_pain_points: Optional[list[str]] = None
    revenue_potential: Optional[int] = Field(None, ge=0)
    target_users: Optional[int] = Field(None, ge=0)


class Idea(BaseModel):
    id: str
    user_id: str
    name: str
    description: str
    problem_category: str
    validation_stage: ValidationStage = ValidationStage.INITIAL
    user_pain_points: list[str] = []
    revenue_potential: int = 0
    target_users: int = 0
    pricing_strategy: Optional[dict] = None
    acquisition_strategy: Optional[dict] = None
    pain_points: list[PainPoint] = []
    validation_signals: list[ValidationSignal] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("user_pain_points", "pain_points", "validation_signals", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return v or []

    @field_validator("revenue_potential", "target_users", mode="before")
    @classmethod
    def _none_as_zero(cls, v):
        return v or 0


SortField = Literal["created_at", "updated_at", "name", "revenue_potential", "target_users"]


class IdeaSearchFilters(BaseModel):
    category: Optional[str] = None
    stage: Optional[ValidationStage] = None
    min_revenue: Optional[int] = Field(None, ge=0)
    max_revenue: Optional[int] = Field(None, ge=0)
    sort_by: SortField = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"
