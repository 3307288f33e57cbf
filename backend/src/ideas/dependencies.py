import logging

from fastapi import Depends, HTTPException

from src.auth.dependencies import get_profile
from src.auth.schemas import UserProfile
from src.config import require_supabase
from src.ideas.schemas import Idea
from src.ideas.service import get_idea

logger = logging.getLogger(__name__)


def get_owned_idea(
    idea_id: str,
    profile: UserProfile = Depends(get_profile),
    sb=Depends(require_supabase),
) -> Idea:
    """Load an idea owned by the caller, 404 otherwise."""
    try:
        idea = get_idea(sb, idea_id, profile.id)
    except Exception:
        logger.exception(f"Could not fetch idea {idea_id}")
        raise HTTPException(status_code=500, detail="Could not fetch idea")
    if idea is None:
        raise HTTPException(status_code=404, detail="Idea not found")
    return idea
