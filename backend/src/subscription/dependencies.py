from fastapi import HTTPException

from src.auth.schemas import UserProfile
from src.subscription.plans import (
    Action, action_limit, can_perform_action, usage_limits, COUNT_LIMITS,
)

_DENIED_MESSAGES = {
    Action.CREATE_IDEA: "Free plan is limited to {limit} ideas. Upgrade to Pro for unlimited ideas.",
    Action.CREATE_VALIDATION: "Free plan is limited to {limit} validation signals per idea. Upgrade to Pro for unlimited validation.",
    Action.EXPORT_DATA: "Data export is a Pro feature.",
    Action.ADVANCED_ANALYTICS: "Advanced analytics is a Pro feature.",
    Action.CURATED_LISTS: "Curated niche lists are a Pro feature.",
    Action.ADVANCED_VALIDATION: "Advanced validation tools are a Pro feature.",
}


def enforce(profile: UserProfile, action: Action, current_count: int = 0):
    """Raise if the profile's plan does not allow `action`.

    429 for exhausted count limits, 403 for features outside the plan."""
    if can_perform_action(profile.subscription_status, action, current_count):
        return

    if action in COUNT_LIMITS:
        limit = action_limit(profile.subscription_status, action)
        raise HTTPException(status_code=429, detail={
            "message": _DENIED_MESSAGES[action].format(limit=limit),
            "upgrade_required": True,
            "action": action.value,
            "current": current_count,
            "limits": usage_limits(profile.subscription_status),
        })

    raise HTTPException(status_code=403, detail={
        "message": _DENIED_MESSAGES[action],
        "upgrade_required": True,
        "action": action.value,
    })
