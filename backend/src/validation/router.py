"""
NicheNavigator Validation Router

Signals are append-only. Each recorded signal (including generated
questions and survey templates) counts toward the plan's per-idea
validation limit: 5 on Free, unlimited on Pro.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from src.auth.dependencies import get_profile
from src.auth.schemas import UserProfile
from src.config import get_settings, require_supabase, Settings
from src.generation.fallbacks import fallback_questions, fallback_survey_template
from src.generation.service import (
    GenerationError, generate_survey_template, generate_validation_questions,
)
from src.ideas.dependencies import get_owned_idea
from src.ideas.schemas import Idea
from src.ideas.service import add_validation_signal
from src.middleware import limiter
from src.subscription.dependencies import enforce
from src.subscription.plans import Action
from src.validation.schemas import SignalCreate, SurveyQuestionsRequest, ValidationAnalysis
from src.validation.scoring import score_validation

logger = logging.getLogger(__name__)
router = APIRouter()


def _record(sb, idea: Idea, kind: str, result: dict):
    try:
        return add_validation_signal(sb, idea.id, kind, result)
    except Exception:
        logger.exception(f"Could not record {kind} signal for idea {idea.id}")
        raise HTTPException(status_code=500, detail="Could not save validation signal")


def _require_llm(settings: Settings):
    if not settings.openai_api_key:
        raise HTTPException(status_code=503, detail="OpenAI API key not configured")


@router.get("/ideas/{idea_id}/validation")
async def analyze_validation(idea: Idea = Depends(get_owned_idea)) -> ValidationAnalysis:
    return score_validation(idea.validation_signals)


@router.post("/ideas/{idea_id}/signals", status_code=201)
async def record_signal(
    body: SignalCreate,
    idea: Idea = Depends(get_owned_idea),
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
):
    enforce(profile, Action.CREATE_VALIDATION, len(idea.validation_signals))
    result = body.result if isinstance(body.result, dict) else body.result.model_dump(mode="json")
    signal = _record(sb, idea, body.kind, result)
    return {"signal": signal, "analysis": score_validation([*idea.validation_signals, signal])}


@router.post("/ideas/{idea_id}/validation/questions")
@limiter.limit("10/minute")
async def create_validation_questions(
    request: Request,
    idea: Idea = Depends(get_owned_idea),
    profile: UserProfile = Depends(get_profile),
    settings: Settings = Depends(get_settings),
    sb=Depends(require_supabase),
):
    _require_llm(settings)
    enforce(profile, Action.CREATE_VALIDATION, len(idea.validation_signals))

    try:
        questions = await generate_validation_questions(idea, settings)
    except GenerationError as e:
        logger.warning(f"Question generation failed for {idea.id}: {e}")
        return {"questions": fallback_questions(), "is_fallback": True, "message": str(e)}

    payload = [q.model_dump() for q in questions]
    _record(sb, idea, "survey", {"action": "questions_generated", "questions": payload})
    return {"questions": questions, "is_fallback": False}


@router.post("/ideas/{idea_id}/validation/survey")
@limiter.limit("10/minute")
async def create_survey_template(
    request: Request,
    body: SurveyQuestionsRequest,
    idea: Idea = Depends(get_owned_idea),
    profile: UserProfile = Depends(get_profile),
    settings: Settings = Depends(get_settings),
    sb=Depends(require_supabase),
):
    _require_llm(settings)
    enforce(profile, Action.CREATE_VALIDATION, len(idea.validation_signals))

    try:
        template = await generate_survey_template(idea, body.questions, settings)
    except GenerationError as e:
        logger.warning(f"Survey generation failed for {idea.id}: {e}")
        return {"template": fallback_survey_template(idea), "is_fallback": True, "message": str(e)}

    _record(sb, idea, "survey", {
        "action": "survey_generated", "template": template, "questions": body.questions,
    })
    return {"template": template, "is_fallback": False}
