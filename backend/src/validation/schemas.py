"""
Validation signal payloads, one variant per signal kind.

Reads are lenient. A stored payload is opaque: it loads as-is, and only a
landing page's conversion_rate is interpreted (anything non-numeric reads
as 0). A stored kind outside the known tags loads as an OtherSignal and
never scores.

Writes are strict. SignalCreate accepts only the five known tags, a typed
payload per tag, and nothing the server assigns itself (id, idea_id,
timestamp).
"""

import math
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, ValidationError,
    field_validator,
)


class SignalKind(str, Enum):
    SURVEY = "survey"
    INTERVIEW = "interview"
    LANDING_PAGE = "landing_page"
    PROTOTYPE = "prototype"
    OTHER = "other"


KNOWN_KINDS = {k.value for k in SignalKind}


# ═══════════════════════════════════════
# Payloads (writes)
# ═══════════════════════════════════════

class SurveyResult(BaseModel):
    action: Literal["questions_generated", "survey_generated", "survey_results"] = "survey_results"
    questions: list[dict] = []
    template: Optional[str] = None
    responses: Optional[int] = Field(None, ge=0)
    summary: Optional[str] = None
    insights: list[str] = []


class InterviewResult(BaseModel):
    action: Literal["interview_completed"] = "interview_completed"
    participant: str = ""
    duration: Optional[int] = Field(None, ge=0, description="Minutes")
    key_insights: list[str] = []
    pain_points_confirmed: list[str] = []
    willingness_to_pay: Optional[str] = None


class LandingPageResult(BaseModel):
    action: Literal["landing_page_test"] = "landing_page_test"
    url: str = ""
    visitors: int = Field(0, ge=0)
    signups: int = Field(0, ge=0)
    conversion_rate: Optional[float] = Field(None, ge=0, le=1)
    traffic_sources: list[str] = []


class PrototypeResult(BaseModel):
    action: Literal["prototype_feedback"] = "prototype_feedback"
    prototype_type: str = ""
    users_tested: int = Field(0, ge=0)
    feedback: list[str] = []
    usability_score: Optional[float] = Field(None, ge=0, le=10)
    feature_requests: list[str] = []


# ═══════════════════════════════════════
# Payloads (stored rows)
# ═══════════════════════════════════════

class StoredResult(BaseModel):
    model_config = ConfigDict(extra="allow")


class StoredLandingPageResult(StoredResult):
    conversion_rate: float = 0.0

    @field_validator("conversion_rate", mode="before")
    @classmethod
    def _numeric_or_zero(cls, v):
        try:
            rate = float(v)
        except (TypeError, ValueError):
            return 0.0
        return rate if math.isfinite(rate) else 0.0


# ═══════════════════════════════════════
# Signals (stored rows)
# ═══════════════════════════════════════

class _SignalBase(BaseModel):
    id: Optional[str] = None
    idea_id: Optional[str] = None
    timestamp: Optional[datetime] = None

    @field_validator("timestamp", mode="wrap")
    @classmethod
    def _unparseable_as_none(cls, v, handler):
        try:
            return handler(v)
        except ValidationError:
            return None


class _KnownSignal(_SignalBase):
    @field_validator("result", mode="before", check_fields=False)
    @classmethod
    def _mapping_or_empty(cls, v):
        if isinstance(v, BaseModel):
            return v.model_dump()
        return v if isinstance(v, dict) else {}


class SurveySignal(_KnownSignal):
    kind: Literal["survey"] = "survey"
    result: StoredResult = StoredResult()


class InterviewSignal(_KnownSignal):
    kind: Literal["interview"] = "interview"
    result: StoredResult = StoredResult()


class LandingPageSignal(_KnownSignal):
    kind: Literal["landing_page"] = "landing_page"
    result: StoredLandingPageResult = StoredLandingPageResult()


class PrototypeSignal(_KnownSignal):
    kind: Literal["prototype"] = "prototype"
    result: StoredResult = StoredResult()


class OtherSignal(_SignalBase):
    kind: str = "other"
    result: Any = None

    @field_validator("kind", mode="before")
    @classmethod
    def _as_text(cls, v):
        return "other" if v is None else str(v)


def _stored_tag(value) -> str:
    kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
    return kind if isinstance(kind, str) and kind in KNOWN_KINDS else "other"


ValidationSignal = Annotated[
    Union[
        Annotated[SurveySignal, Tag("survey")],
        Annotated[InterviewSignal, Tag("interview")],
        Annotated[LandingPageSignal, Tag("landing_page")],
        Annotated[PrototypeSignal, Tag("prototype")],
        Annotated[OtherSignal, Tag("other")],
    ],
    Discriminator(_stored_tag),
]

_signal_list = TypeAdapter(list[ValidationSignal])


def parse_signals(rows: list[dict]) -> list:
    """Load raw signal rows (e.g. from the database) into typed signals."""
    return _signal_list.validate_python(rows or [])


# ═══════════════════════════════════════
# Writes
# ═══════════════════════════════════════

class _SignalCreateBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SurveySignalCreate(_SignalCreateBase):
    kind: Literal["survey"]
    result: SurveyResult = SurveyResult()


class InterviewSignalCreate(_SignalCreateBase):
    kind: Literal["interview"]
    result: InterviewResult = InterviewResult()


class LandingPageSignalCreate(_SignalCreateBase):
    kind: Literal["landing_page"]
    result: LandingPageResult = LandingPageResult()


class PrototypeSignalCreate(_SignalCreateBase):
    kind: Literal["prototype"]
    result: PrototypeResult = PrototypeResult()


class OtherSignalCreate(_SignalCreateBase):
    kind: Literal["other"]
    result: dict = {}


SignalCreate = Annotated[
    Union[
        SurveySignalCreate, InterviewSignalCreate, LandingPageSignalCreate,
        PrototypeSignalCreate, OtherSignalCreate,
    ],
    Field(discriminator="kind"),
]

class SurveyQuestionsRequest(BaseModel):
    questions: list[dict] = Field(..., min_length=1, max_length=20)


# ═══════════════════════════════════════
# Analysis
# ═══════════════════════════════════════

class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very high"


class SignalCounts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    surveys: int = 0
    interviews: int = 0
    landing_pages: int = Field(0, alias="landingPages")
    prototypes: int = 0


class ValidationAnalysis(BaseModel):
    score: int = Field(..., ge=0, le=100)
    confidence: Confidence
    recommendations: list[str]
    signals: SignalCounts
