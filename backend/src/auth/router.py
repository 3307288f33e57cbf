from fastapi import APIRouter, Depends
from typing import Optional

from src.auth.dependencies import get_current_user
from src.auth.service import load_profile
from src.config import get_supabase_client

router = APIRouter()


@router.get("/me")
async def get_me(
    user: Optional[dict] = Depends(get_current_user),
    sb=Depends(get_supabase_client),
):
    """Get current user profile. Returns null user if not authenticated."""
    if user is None:
        return {"user": None}

    if not sb:
        return {"user": {"id": user["id"], "email": user.get("email"), "subscription_status": "free"}}

    return {"user": load_profile(sb, user).model_dump()}
