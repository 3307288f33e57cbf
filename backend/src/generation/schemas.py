"""
Structured outputs for the generators.

Every field is required so the models can be sent as strict JSON schemas;
the LLM response is decoded straight into them or the call fails.
"""

from typing import Optional

from pydantic import BaseModel, Field


class GenerateIdeasRequest(BaseModel):
    keywords: str = Field(..., min_length=1, max_length=300)
    industry: Optional[str] = Field(None, max_length=100)


# ═══════════════════════════════════════
# Ideas
# ═══════════════════════════════════════

class GeneratedIdea(BaseModel):
    name: str
    description: str
    problem_category: str
    user_pain_points: list[str]
    revenue_potential: int
    target_users: int


class GeneratedIdeas(BaseModel):
    ideas: list[GeneratedIdea]


# ═══════════════════════════════════════
# Validation questions
# ═══════════════════════════════════════

class ValidationQuestion(BaseModel):
    type: str
    question: str
    purpose: str


class ValidationQuestionSet(BaseModel):
    questions: list[ValidationQuestion]


# ═══════════════════════════════════════
# Monetization
# ═══════════════════════════════════════

class PricingTier(BaseModel):
    name: str
    price: float
    period: str
    features: list[str]
    target_segment: str


class RevenueProjections(BaseModel):
    month_1: int
    month_6: int
    month_12: int


class MonetizationStrategy(BaseModel):
    pricing_model: str
    tiers: list[PricingTier]
    value_metrics: list[str]
    pricing_psychology: list[str]
    revenue_projections: RevenueProjections


# ═══════════════════════════════════════
# Acquisition
# ═══════════════════════════════════════

class TargetCustomers(BaseModel):
    primary: str
    secondary: str
    tertiary: str


class AcquisitionChannel(BaseModel):
    name: str
    platforms: list[str]
    approach: str
    effort: str
    timeline: str
    expected_reach: str


class GuerillaTactic(BaseModel):
    title: str
    description: str
    implementation: str


class TimelineStep(BaseModel):
    week: str
    actions: str


class AcquisitionStrategy(BaseModel):
    target_customers: TargetCustomers
    channels: list[AcquisitionChannel]
    tactics: list[GuerillaTactic]
    timeline: list[TimelineStep]
    success_metrics: list[str]
