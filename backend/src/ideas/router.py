"""
NicheNavigator Idea Router

Plan limits (see subscription/plans.py):
  Free:  3 ideas, no export
  Pro:   unlimited ideas, JSON/CSV export

Duplicating an idea counts as creating one.
"""

import logging
from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from src.auth.dependencies import get_profile
from src.auth.schemas import UserProfile
from src.config import require_supabase
from src.ideas import service
from src.ideas.dependencies import get_owned_idea
from src.ideas.schemas import (
    Idea, IdeaCreate, IdeaSearchFilters, IdeaUpdate, PainPointCreate, SortField, ValidationStage,
)
from src.subscription.dependencies import enforce
from src.subscription.plans import Action

logger = logging.getLogger(__name__)
router = APIRouter()


def _ensure_can_create(sb, profile: UserProfile):
    try:
        current = service.count_ideas(sb, profile.id)
    except Exception:
        logger.exception("Could not count ideas")
        raise HTTPException(status_code=500, detail="Could not check plan limits")
    enforce(profile, Action.CREATE_IDEA, current)


# ═══════════════════════════════════════
# Collection
# ═══════════════════════════════════════

@router.get("/ideas")
async def list_ideas(
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
):
    try:
        return {"ideas": service.list_ideas(sb, profile.id)}
    except Exception:
        logger.exception("Could not list ideas")
        raise HTTPException(status_code=500, detail="Could not fetch ideas")


@router.post("/ideas", status_code=201)
async def create_idea(
    body: IdeaCreate,
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
) -> Idea:
    _ensure_can_create(sb, profile)
    try:
        return service.create_idea(sb, profile.id, body)
    except Exception:
        logger.exception("Could not create idea")
        raise HTTPException(status_code=500, detail="Could not save idea")


@router.get("/ideas/search")
async def search_ideas(
    q: Optional[str] = Query(None, max_length=200),
    category: Optional[str] = None,
    stage: Optional[ValidationStage] = None,
    min_revenue: Optional[int] = Query(None, ge=0),
    max_revenue: Optional[int] = Query(None, ge=0),
    sort_by: SortField = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
):
    filters = IdeaSearchFilters(
        category=category, stage=stage, min_revenue=min_revenue,
        max_revenue=max_revenue, sort_by=sort_by, sort_order=sort_order,
    )
    try:
        return {"ideas": service.search_ideas(sb, profile.id, q, filters)}
    except Exception:
        logger.exception("Idea search failed")
        raise HTTPException(status_code=500, detail="Could not search ideas")


@router.get("/ideas/stats")
async def idea_stats(
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
):
    try:
        ideas = service.list_ideas(sb, profile.id)
    except Exception:
        logger.exception("Could not compute idea statistics")
        raise HTTPException(status_code=500, detail="Could not fetch statistics")
    return service.idea_statistics(ideas)


@router.get("/ideas/export")
async def export_ideas(
    format: Literal["json", "csv"] = "json",
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
):
    enforce(profile, Action.EXPORT_DATA)
    try:
        ideas = service.list_ideas(sb, profile.id)
    except Exception:
        logger.exception("Export failed")
        raise HTTPException(status_code=500, detail="Could not export ideas")

    day = datetime.now(timezone.utc).date().isoformat()
    if format == "csv":
        return Response(
            content=service.export_csv(ideas),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="niche-navigator-ideas-{day}.csv"'},
        )
    return service.export_json(profile.id, ideas)


# ═══════════════════════════════════════
# Single idea
# ═══════════════════════════════════════

@router.get("/ideas/{idea_id}")
async def get_idea(idea: Idea = Depends(get_owned_idea)) -> Idea:
    return idea


@router.patch("/ideas/{idea_id}")
async def update_idea(
    idea_id: str,
    body: IdeaUpdate,
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
) -> Idea:
    changes = body.model_dump(mode="json", exclude_unset=True)
    try:
        idea = service.update_idea(sb, idea_id, profile.id, changes)
    except Exception:
        logger.exception(f"Could not update idea {idea_id}")
        raise HTTPException(status_code=500, detail="Could not update idea")
    if idea is None:
        raise HTTPException(status_code=404, detail="Idea not found")
    return idea


@router.delete("/ideas/{idea_id}")
async def delete_idea(
    idea_id: str,
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
):
    try:
        deleted = service.delete_idea(sb, idea_id, profile.id)
    except Exception:
        logger.exception(f"Could not delete idea {idea_id}")
        raise HTTPException(status_code=500, detail="Could not delete idea")
    if not deleted:
        raise HTTPException(status_code=404, detail="Idea not found")
    return {"status": "success", "message": "Idea deleted"}


@router.post("/ideas/{idea_id}/duplicate", status_code=201)
async def duplicate_idea(
    idea: Idea = Depends(get_owned_idea),
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
) -> Idea:
    _ensure_can_create(sb, profile)
    try:
        copy = service.duplicate_idea(sb, idea.id, profile.id)
    except Exception:
        logger.exception(f"Could not duplicate idea {idea.id}")
        raise HTTPException(status_code=500, detail="Could not duplicate idea")
    if copy is None:
        raise HTTPException(status_code=404, detail="Idea not found")
    return copy


# ═══════════════════════════════════════
# Pain points
# ═══════════════════════════════════════

@router.post("/ideas/{idea_id}/pain-points", status_code=201)
async def add_pain_points(
    body: list[PainPointCreate],
    idea: Idea = Depends(get_owned_idea),
    sb=Depends(require_supabase),
):
    try:
        return {"pain_points": service.add_pain_points(sb, idea.id, body)}
    except Exception:
        logger.exception(f"Could not add pain points to {idea.id}")
        raise HTTPException(status_code=500, detail="Could not save pain points")


@router.put("/ideas/{idea_id}/pain-points")
async def replace_pain_points(
    body: list[PainPointCreate],
    idea: Idea = Depends(get_owned_idea),
    sb=Depends(require_supabase),
):
    try:
        return {"pain_points": service.replace_pain_points(sb, idea.id, body)}
    except Exception:
        logger.exception(f"Could not replace pain points of {idea.id}")
        raise HTTPException(status_code=500, detail="Could not save pain points")
