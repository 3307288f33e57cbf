"""Subscription gate: plan features, capability checks, subscription endpoints."""

import pytest

from conftest import USER, idea_payload, set_plan
from src.auth.dependencies import get_current_user
from src.main import app
from src.subscription.plans import (
    Action, can_perform_action, plan_features, pricing_info, usage_limits,
)


class TestPlans:
    def test_free_features(self):
        features = plan_features("free")
        assert features.max_ideas == 3
        assert features.max_validations == 5
        assert not features.export_data
        assert not features.advanced_analytics

    def test_pro_features(self):
        features = plan_features("pro")
        assert features.max_ideas is None
        assert features.max_validations is None
        assert features.export_data and features.curated_niche_lists

    def test_unknown_status_is_free(self):
        assert plan_features("enterprise") == plan_features("free")

    @pytest.mark.parametrize("count,allowed", [(0, True), (2, True), (3, False), (10, False)])
    def test_free_idea_cap(self, count, allowed):
        assert can_perform_action("free", Action.CREATE_IDEA, count) is allowed

    @pytest.mark.parametrize("count,allowed", [(4, True), (5, False)])
    def test_free_validation_cap(self, count, allowed):
        assert can_perform_action("free", "create_validation", count) is allowed

    def test_pro_is_unlimited(self):
        assert can_perform_action("pro", Action.CREATE_IDEA, 10_000)
        assert can_perform_action("pro", Action.CREATE_VALIDATION, 10_000)

    @pytest.mark.parametrize("action", [
        "export_data", "advanced_analytics", "curated_lists", "advanced_validation",
    ])
    def test_feature_flags(self, action):
        assert can_perform_action("free", action) is False
        assert can_perform_action("pro", action) is True

    def test_unknown_action_allowed(self):
        assert can_perform_action("free", "teleport") is True

    def test_usage_limits(self):
        assert usage_limits("free")["ideas"] == {"limit": 3, "unlimited": False}
        assert usage_limits("pro")["validations"] == {"limit": None, "unlimited": True}

    def test_pricing(self):
        info = pricing_info()
        assert info["free"]["price"] == 0
        assert info["pro"]["price"] == 19
        assert info["pro"]["period"] == "month"


class TestSubscriptionEndpoints:
    def test_summary_for_free_user(self, client, db):
        client.post("/api/ideas", json=idea_payload())
        res = client.get("/api/subscription")
        assert res.status_code == 200
        body = res.json()
        assert body["status"] == "free"
        assert body["is_pro"] is False
        assert body["usage"] == {"ideas": 1}
        assert body["limits"]["ideas"]["limit"] == 3
        assert body["can_create_idea"] is True

    def test_summary_for_pro_user(self, client, db):
        set_plan(db, USER["id"], "pro")
        body = client.get("/api/subscription").json()
        assert body["status"] == "pro"
        assert body["is_pro"] is True
        assert body["label"] == "Pro Plan"
        assert body["features"]["export_data"] is True

    def test_pricing_is_public(self, client):
        res = client.get("/api/subscription/pricing")
        assert res.status_code == 200
        assert res.json()["pro"]["name"] == "Pro"

    def test_check_endpoint(self, client):
        res = client.post("/api/subscription/check", json={"action": "create_idea", "current_count": 3})
        assert res.json() == {"action": "create_idea", "allowed": False}

    def test_requires_auth(self, client):
        app.dependency_overrides[get_current_user] = lambda: None
        assert client.get("/api/subscription").status_code == 401
