import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.auth.dependencies import get_profile
from src.auth.schemas import UserProfile
from src.config import require_supabase
from src.ideas.service import count_ideas
from src.subscription.plans import (
    can_perform_action, plan_features, pricing_info, subscription_summary, usage_limits,
)

logger = logging.getLogger(__name__)
router = APIRouter()


class CapabilityCheck(BaseModel):
    action: str = Field(..., max_length=50)
    current_count: int = Field(0, ge=0)


@router.get("")
async def get_subscription(
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
):
    """Plan, feature flags, limits and current idea usage for the caller."""
    status = profile.subscription_status
    try:
        ideas_used = count_ideas(sb, profile.id)
    except Exception:
        logger.exception("Could not count ideas for subscription summary")
        raise HTTPException(status_code=500, detail="Could not fetch usage")

    return {
        **subscription_summary(status),
        "is_pro": profile.is_pro,
        "features": plan_features(status),
        "limits": usage_limits(status),
        "usage": {"ideas": ideas_used},
        "can_create_idea": can_perform_action(status, "create_idea", ideas_used),
    }


@router.get("/pricing")
async def get_pricing():
    return pricing_info()


@router.post("/check")
async def check_capability(
    body: CapabilityCheck,
    profile: UserProfile = Depends(get_profile),
):
    return {
        "action": body.action,
        "allowed": can_perform_action(profile.subscription_status, body.action, body.current_count),
    }
