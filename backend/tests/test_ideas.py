"""Idea store and idea endpoints: CRUD, ownership, plan limits, search, stats, export."""

import csv
import io

from conftest import OTHER_USER, USER, idea_payload, set_plan
from src.ideas import service
from src.ideas.schemas import Idea, IdeaCreate, IdeaSearchFilters, PainPointCreate


def _create(client, **overrides):
    res = client.post("/api/ideas", json=idea_payload(**overrides))
    assert res.status_code == 201, res.text
    return res.json()


# ===================================================================== #
#  CRUD                                                                   #
# ===================================================================== #

class TestIdeaCrud:
    def test_create_and_fetch(self, client):
        idea = _create(client)
        assert idea["validation_stage"] == "initial"
        assert idea["user_id"] == USER["id"]
        assert idea["pain_points"] == []
        assert idea["validation_signals"] == []

        res = client.get(f"/api/ideas/{idea['id']}")
        assert res.status_code == 200
        assert res.json()["name"] == "API Monitoring Dashboard"

    def test_list_newest_first(self, client):
        _create(client, name="First")
        _create(client, name="Second")
        names = [i["name"] for i in client.get("/api/ideas").json()["ideas"]]
        assert names == ["Second", "First"]

    def test_negative_revenue_rejected(self, client):
        res = client.post("/api/ideas", json=idea_payload(revenue_potential=-5))
        assert res.status_code == 422

    def test_unknown_stage_rejected(self, client):
        res = client.post("/api/ideas", json=idea_payload(validation_stage="launched"))
        assert res.status_code == 422

    def test_partial_update(self, client):
        idea = _create(client)
        res = client.patch(f"/api/ideas/{idea['id']}", json={"validation_stage": "testing"})
        assert res.status_code == 200
        body = res.json()
        assert body["validation_stage"] == "testing"
        assert body["name"] == idea["name"]
        assert body["updated_at"] != idea["updated_at"]

    def test_update_missing_idea(self, client):
        res = client.patch("/api/ideas/nope", json={"name": "x"})
        assert res.status_code == 404

    def test_delete(self, client):
        idea = _create(client)
        assert client.delete(f"/api/ideas/{idea['id']}").status_code == 200
        assert client.get(f"/api/ideas/{idea['id']}").status_code == 404
        assert client.delete(f"/api/ideas/{idea['id']}").status_code == 404

    def test_other_users_ideas_are_invisible(self, client, db):
        theirs = service.create_idea(db, OTHER_USER["id"], IdeaCreate(**idea_payload(name="Theirs")))
        assert client.get(f"/api/ideas/{theirs.id}").status_code == 404
        assert client.patch(f"/api/ideas/{theirs.id}", json={"name": "Mine now"}).status_code == 404
        assert client.delete(f"/api/ideas/{theirs.id}").status_code == 404
        assert client.get("/api/ideas").json()["ideas"] == []

    def test_store_failure_is_500(self, client, db):
        db.fail = True
        res = client.get("/api/ideas")
        assert res.status_code == 500
        assert res.json()["detail"] == "Could not fetch ideas"


# ===================================================================== #
#  Plan limits                                                            #
# ===================================================================== #

class TestIdeaLimits:
    def test_free_plan_caps_at_three(self, client):
        for i in range(3):
            _create(client, name=f"Idea {i}")
        res = client.post("/api/ideas", json=idea_payload(name="Fourth"))
        assert res.status_code == 429
        detail = res.json()["detail"]
        assert detail["upgrade_required"] is True
        assert detail["current"] == 3

    def test_pro_plan_is_unlimited(self, client, db):
        set_plan(db, USER["id"], "pro")
        for i in range(5):
            _create(client, name=f"Idea {i}")
        assert len(client.get("/api/ideas").json()["ideas"]) == 5

    def test_duplicate_counts_toward_cap(self, client):
        ideas = [_create(client, name=f"Idea {i}") for i in range(3)]
        res = client.post(f"/api/ideas/{ideas[0]['id']}/duplicate")
        assert res.status_code == 429


# ===================================================================== #
#  Duplicate & pain points                                                #
# ===================================================================== #

class TestDuplicateAndPainPoints:
    def test_duplicate(self, client):
        idea = _create(client)
        client.patch(f"/api/ideas/{idea['id']}", json={"validation_stage": "validated"})
        client.post(f"/api/ideas/{idea['id']}/signals", json={"kind": "survey", "result": {}})

        res = client.post(f"/api/ideas/{idea['id']}/duplicate")
        assert res.status_code == 201
        copy = res.json()
        assert copy["id"] != idea["id"]
        assert copy["name"] == "API Monitoring Dashboard (Copy)"
        assert copy["validation_stage"] == "initial"
        assert copy["revenue_potential"] == idea["revenue_potential"]
        assert copy["validation_signals"] == []

    def test_add_and_replace_pain_points(self, client):
        idea = _create(client)
        first = [{"category": "cost", "description": "Too expensive", "impact_score": 8, "wtp_score": 6, "freq_score": 9}]
        res = client.post(f"/api/ideas/{idea['id']}/pain-points", json=first)
        assert res.status_code == 201
        assert res.json()["pain_points"][0]["impact_score"] == 8

        second = [
            {"category": "ux", "description": "Hard to set up"},
            {"category": "alerts", "description": "Noisy alerts", "freq_score": 10},
        ]
        client.put(f"/api/ideas/{idea['id']}/pain-points", json=second)

        stored = client.get(f"/api/ideas/{idea['id']}").json()["pain_points"]
        assert [p["category"] for p in stored] == ["ux", "alerts"]

    def test_failed_replace_keeps_old_pain_points(self, client, db):
        idea = _create(client)
        client.post(f"/api/ideas/{idea['id']}/pain-points", json=[{"category": "cost", "description": "Too expensive"}])

        db.fail_ops.add(("pain_points", "insert"))
        res = client.put(f"/api/ideas/{idea['id']}/pain-points", json=[{"category": "ux", "description": "Hard to set up"}])
        assert res.status_code == 500

        db.fail_ops.clear()
        stored = client.get(f"/api/ideas/{idea['id']}").json()["pain_points"]
        assert [p["category"] for p in stored] == ["cost"]

    def test_replace_with_empty_list_clears(self, db):
        idea = service.create_idea(db, USER["id"], IdeaCreate(**idea_payload()))
        service.add_pain_points(db, idea.id, [PainPointCreate(category="a", description="one")])
        assert service.replace_pain_points(db, idea.id, []) == []
        assert service.get_idea(db, idea.id, USER["id"]).pain_points == []

    def test_pain_point_scores_bounded(self, client):
        idea = _create(client)
        res = client.post(
            f"/api/ideas/{idea['id']}/pain-points",
            json=[{"category": "c", "description": "d", "impact_score": 11}],
        )
        assert res.status_code == 422

    def test_replace_pain_points_in_store(self, db):
        idea = service.create_idea(db, USER["id"], IdeaCreate(**idea_payload()))
        service.add_pain_points(db, idea.id, [PainPointCreate(category="a", description="one")])
        service.replace_pain_points(db, idea.id, [PainPointCreate(category="b", description="two")])
        reloaded = service.get_idea(db, idea.id, USER["id"])
        assert [p.category for p in reloaded.pain_points] == ["b"]


# ===================================================================== #
#  Search, stats, export                                                  #
# ===================================================================== #

class TestSearch:
    def _seed(self, db):
        set_plan(db, USER["id"], "pro")
        for name, category, stage, revenue in [
            ("Invoice Chaser", "Finance", "testing", 500),
            ("API Pulse", "Developer Tools", "validated", 1200),
            ("Lesson Planner", "Education", "initial", 90),
        ]:
            service.create_idea(db, USER["id"], IdeaCreate(**idea_payload(
                name=name, problem_category=category, validation_stage=stage,
                revenue_potential=revenue, description=f"{name} for small teams",
            )))

    def test_text_search_is_case_insensitive(self, client, db):
        self._seed(db)
        names = [i["name"] for i in client.get("/api/ideas/search", params={"q": "api"}).json()["ideas"]]
        assert names == ["API Pulse"]

    def test_filters_and_sorting(self, client, db):
        self._seed(db)
        res = client.get("/api/ideas/search", params={
            "min_revenue": 100, "sort_by": "revenue_potential", "sort_order": "asc",
        })
        assert [i["name"] for i in res.json()["ideas"]] == ["Invoice Chaser", "API Pulse"]

        res = client.get("/api/ideas/search", params={"stage": "validated"})
        assert [i["name"] for i in res.json()["ideas"]] == ["API Pulse"]

    def test_unsafe_characters_stripped(self, db):
        self._seed(db)
        ideas = service.search_ideas(db, USER["id"], "Pulse,(", IdeaSearchFilters())
        assert [i.name for i in ideas] == ["API Pulse"]

    def test_bad_sort_field_rejected(self, client):
        assert client.get("/api/ideas/search", params={"sort_by": "password"}).status_code == 422


class TestStatsAndExport:
    def test_statistics(self, client, db):
        set_plan(db, USER["id"], "pro")
        a = _create(client, problem_category="Finance", revenue_potential=100, target_users=10)
        _create(client, problem_category="Finance", revenue_potential=300, target_users=30)
        client.patch(f"/api/ideas/{a['id']}", json={"validation_stage": "validated"})
        client.post(f"/api/ideas/{a['id']}/signals", json={"kind": "interview", "result": {}})

        stats = client.get("/api/ideas/stats").json()
        assert stats["total_ideas"] == 2
        assert stats["by_stage"] == {"initial": 1, "testing": 0, "validated": 1, "rejected": 0}
        assert stats["by_category"] == {"Finance": 2}
        assert stats["total_revenue_potential"] == 400
        assert stats["total_target_users"] == 40
        assert stats["validation_signals"] == 1
        assert stats["average_revenue_per_idea"] == 200

    def test_statistics_empty(self):
        stats = service.idea_statistics([])
        assert stats["total_ideas"] == 0
        assert stats["average_revenue_per_idea"] == 0

    def test_export_requires_pro(self, client):
        res = client.get("/api/ideas/export")
        assert res.status_code == 403
        assert res.json()["detail"]["upgrade_required"] is True

    def test_export_json(self, client, db):
        set_plan(db, USER["id"], "pro")
        a = _create(client, revenue_potential=100)
        _create(client, revenue_potential=50)
        client.patch(f"/api/ideas/{a['id']}", json={"validation_stage": "validated"})

        body = client.get("/api/ideas/export").json()
        assert body["user_id"] == USER["id"]
        assert len(body["ideas"]) == 2
        assert body["summary"] == {
            "total_ideas": 2, "validated_ideas": 1,
            "total_revenue_potential": 150, "total_target_users": 1000,
        }

    def test_export_csv(self, client, db):
        set_plan(db, USER["id"], "pro")
        _create(client, name='Quote "Tool"', description="Handles, commas")

        res = client.get("/api/ideas/export", params={"format": "csv"})
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/csv")
        assert "attachment" in res.headers["content-disposition"]

        rows = list(csv.reader(io.StringIO(res.text)))
        assert rows[0] == service.CSV_HEADERS
        assert rows[1][:6] == ['Quote "Tool"', "Handles, commas", "Developer Tools", "initial", "299", "500"]
        assert rows[1][6] == "2026-01-01"
        assert res.text.splitlines()[0].startswith('"Name","Description"')

    def test_export_csv_quotes_every_field(self):
        idea = Idea(id="1", user_id="u", name="n", description="d", problem_category="c")
        text = service.export_csv([idea])
        assert text.splitlines()[1] == '"n","d","c","initial","0","0","",""'
