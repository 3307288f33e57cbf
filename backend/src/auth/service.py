import logging

from src.auth.schemas import UserProfile

logger = logging.getLogger(__name__)


def load_profile(sb, user: dict) -> UserProfile:
    """Build the caller's profile from the `profiles` table.

    Missing rows and unknown statuses fall back to the free plan."""
    try:
        result = sb.table("profiles").select("*").eq("id", user["id"]).execute()
    except Exception as e:
        logger.warning(f"Could not fetch profile for {user['id']}: {e}")
        return UserProfile(id=user["id"], email=user.get("email"))

    row = result.data[0] if result.data else {}
    status = row.get("subscription_status") or "free"
    if status not in ("free", "pro"):
        logger.warning(f"Unknown subscription status {status!r} for {user['id']}, treating as free")
        status = "free"

    return UserProfile(
        id=user["id"],
        email=user.get("email"),
        display_name=row.get("display_name"),
        subscription_status=status,
    )
