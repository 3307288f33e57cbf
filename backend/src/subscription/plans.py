"""
Subscription plans and the capability gate.

Free:  3 ideas, 5 validation signals per idea, no premium features
Pro:   unlimited counts, every feature

Limits of None mean unlimited.
"""

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

FREE_MAX_IDEAS = 3
FREE_MAX_VALIDATIONS = 5
PRO_MONTHLY_PRICE = 19


class Action(str, Enum):
    CREATE_IDEA = "create_idea"
    CREATE_VALIDATION = "create_validation"
    EXPORT_DATA = "export_data"
    ADVANCED_ANALYTICS = "advanced_analytics"
    CURATED_LISTS = "curated_lists"
    ADVANCED_VALIDATION = "advanced_validation"


class PlanFeatures(BaseModel):
    max_ideas: Optional[int]
    max_validations: Optional[int]
    advanced_analytics: bool
    export_data: bool
    priority_support: bool
    curated_niche_lists: bool
    advanced_validation_tools: bool


FREE_FEATURES = PlanFeatures(
    max_ideas=FREE_MAX_IDEAS,
    max_validations=FREE_MAX_VALIDATIONS,
    advanced_analytics=False,
    export_data=False,
    priority_support=False,
    curated_niche_lists=False,
    advanced_validation_tools=False,
)

PRO_FEATURES = PlanFeatures(
    max_ideas=None,
    max_validations=None,
    advanced_analytics=True,
    export_data=True,
    priority_support=True,
    curated_niche_lists=True,
    advanced_validation_tools=True,
)

# Count-bounded actions map to a limit, the rest to a feature flag.
COUNT_LIMITS = {
    Action.CREATE_IDEA: "max_ideas",
    Action.CREATE_VALIDATION: "max_validations",
}
FEATURE_FLAGS = {
    Action.EXPORT_DATA: "export_data",
    Action.ADVANCED_ANALYTICS: "advanced_analytics",
    Action.CURATED_LISTS: "curated_niche_lists",
    Action.ADVANCED_VALIDATION: "advanced_validation_tools",
}


def plan_features(status: str) -> PlanFeatures:
    return PRO_FEATURES if status == "pro" else FREE_FEATURES


def action_limit(status: str, action: Action) -> Optional[int]:
    """Numeric limit for a count-bounded action (None = unlimited)."""
    return getattr(plan_features(status), COUNT_LIMITS[action])


def can_perform_action(status: str, action, current_count: int = 0) -> bool:
    """Check whether a user on `status` may perform `action`.

    Count-bounded actions pass when the plan is unlimited or
    current_count is strictly below the limit. Unknown actions are allowed."""
    try:
        action = Action(action)
    except ValueError:
        logger.debug(f"Unknown gated action {action!r}, allowing")
        return True

    features = plan_features(status)
    if action in COUNT_LIMITS:
        limit = getattr(features, COUNT_LIMITS[action])
        return limit is None or current_count < limit
    return getattr(features, FEATURE_FLAGS[action])


def usage_limits(status: str) -> dict:
    features = plan_features(status)
    return {
        "ideas": {"limit": features.max_ideas, "unlimited": features.max_ideas is None},
        "validations": {"limit": features.max_validations, "unlimited": features.max_validations is None},
    }


def subscription_summary(status: str) -> dict:
    if status == "pro":
        return {"status": "pro", "label": "Pro Plan", "description": "Full access to all features"}
    return {"status": "free", "label": "Free Plan", "description": "Limited access to basic features"}


def pricing_info() -> dict:
    return {
        "free": {
            "name": "Free",
            "price": 0,
            "period": "forever",
            "features": [
                f"Up to {FREE_MAX_IDEAS} ideas",
                "Basic validation tools",
                "Community support",
                "Basic analytics",
            ],
        },
        "pro": {
            "name": "Pro",
            "price": PRO_MONTHLY_PRICE,
            "period": "month",
            "features": [
                "Unlimited ideas",
                "Advanced validation tools",
                "Curated niche lists",
                "Data export",
                "Advanced analytics",
                "Priority support",
            ],
        },
    }
