import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from src.auth.dependencies import get_profile, require_auth
from src.auth.schemas import UserProfile
from src.config import get_settings, require_supabase, Settings
from src.generation.fallbacks import fallback_acquisition, fallback_ideas, fallback_monetization
from src.generation.schemas import AcquisitionStrategy, GenerateIdeasRequest, MonetizationStrategy
from src.generation.service import (
    GenerationError, generate_acquisition_strategy, generate_ideas, generate_monetization_strategy,
)
from src.ideas.dependencies import get_owned_idea
from src.ideas.schemas import Idea
from src.ideas.service import update_idea
from src.middleware import limiter

logger = logging.getLogger(__name__)
router = APIRouter()


def _require_llm(settings: Settings):
    if not settings.openai_api_key:
        raise HTTPException(status_code=503, detail="OpenAI API key not configured")


def _apply(sb, idea: Idea, profile: UserProfile, changes: dict) -> Idea:
    try:
        updated = update_idea(sb, idea.id, profile.id, changes)
    except Exception:
        logger.exception(f"Could not apply strategy to idea {idea.id}")
        raise HTTPException(status_code=500, detail="Could not update idea")
    if updated is None:
        raise HTTPException(status_code=404, detail="Idea not found")
    return updated


# ═══════════════════════════════════════
# Idea discovery
# ═══════════════════════════════════════

@router.post("/generate/ideas")
@limiter.limit("10/minute")
async def discover_ideas(
    request: Request,
    req: GenerateIdeasRequest,
    user: dict = Depends(require_auth),
    settings: Settings = Depends(get_settings),
):
    """Suggest micro-SaaS ideas for some keywords. Nothing is saved; POST /ideas to keep one."""
    _require_llm(settings)
    try:
        ideas = await generate_ideas(req.keywords, req.industry, settings)
    except GenerationError as e:
        logger.warning(f"Idea generation failed for {req.keywords!r}: {e}")
        return {"ideas": fallback_ideas(), "is_fallback": True, "message": str(e)}
    return {"ideas": ideas, "is_fallback": False}


# ═══════════════════════════════════════
# Monetization
# ═══════════════════════════════════════

@router.post("/ideas/{idea_id}/monetization")
@limiter.limit("5/minute")
async def plan_monetization(
    request: Request,
    idea: Idea = Depends(get_owned_idea),
    settings: Settings = Depends(get_settings),
):
    _require_llm(settings)
    try:
        strategy = await generate_monetization_strategy(idea, settings)
    except GenerationError as e:
        logger.warning(f"Monetization generation failed for {idea.id}: {e}")
        return {"strategy": fallback_monetization(), "is_fallback": True, "message": str(e)}
    return {"strategy": strategy, "is_fallback": False}


@router.post("/ideas/{idea_id}/monetization/apply")
async def apply_monetization(
    body: MonetizationStrategy,
    idea: Idea = Depends(get_owned_idea),
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
) -> Idea:
    """Store the plan on the idea; month-12 projection becomes its revenue potential."""
    changes = {"pricing_strategy": body.model_dump(mode="json")}
    month_12 = body.revenue_projections.month_12
    if month_12 > 0:
        changes["revenue_potential"] = month_12
    return _apply(sb, idea, profile, changes)


# ═══════════════════════════════════════
# Acquisition
# ═══════════════════════════════════════

@router.post("/ideas/{idea_id}/acquisition")
@limiter.limit("5/minute")
async def plan_acquisition(
    request: Request,
    idea: Idea = Depends(get_owned_idea),
    settings: Settings = Depends(get_settings),
):
    _require_llm(settings)
    try:
        strategy = await generate_acquisition_strategy(idea, settings)
    except GenerationError as e:
        logger.warning(f"Acquisition generation failed for {idea.id}: {e}")
        return {"strategy": fallback_acquisition(), "is_fallback": True, "message": str(e)}
    return {"strategy": strategy, "is_fallback": False}


@router.post("/ideas/{idea_id}/acquisition/apply")
async def apply_acquisition(
    body: AcquisitionStrategy,
    idea: Idea = Depends(get_owned_idea),
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
) -> Idea:
    return _apply(sb, idea, profile, {"acquisition_strategy": body.model_dump(mode="json")})
