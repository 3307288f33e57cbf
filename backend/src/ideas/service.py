"""
Idea Store

Supabase-backed persistence for ideas and their two child collections
(pain_points, validation_signals). Every query is scoped by the caller's
user id; ownership is never read from ambient state.

Errors from the client propagate; routers turn them into HTTP errors.
Concurrent updates to the same idea are last-write-wins.
"""

import csv
import io
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from src.ideas.schemas import (
    Idea, IdeaCreate, IdeaSearchFilters, PainPoint, PainPointCreate, ValidationStage,
)
from src.validation.schemas import parse_signals

logger = logging.getLogger(__name__)

IDEA_SELECT = "*, pain_points(*), validation_signals(*)"

# Characters that would break a PostgREST or=() filter
_SEARCH_UNSAFE = re.compile(r"[,()%*\\]")

CSV_HEADERS = [
    "Name",
    "Description",
    "Problem Category",
    "Validation Stage",
    "Revenue Potential",
    "Target Users",
    "Created At",
    "Updated At",
]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_idea(row: dict) -> Idea:
    row = dict(row)
    # Embedded rows come back in no guaranteed order
    row["validation_signals"] = sorted(
        row.get("validation_signals") or [], key=lambda s: str(s.get("timestamp") or "")
    )
    row["pain_points"] = sorted(
        row.get("pain_points") or [], key=lambda p: str(p.get("created_at") or "")
    )
    return Idea.model_validate(row)


# ═══════════════════════════════════════
# Ideas
# ═══════════════════════════════════════

def list_ideas(sb, user_id: str) -> list[Idea]:
    result = sb.table("ideas").select(IDEA_SELECT) \
        .eq("user_id", user_id).order("created_at", desc=True).execute()
    return [_to_idea(row) for row in (result.data or [])]


def get_idea(sb, idea_id: str, user_id: str) -> Optional[Idea]:
    result = sb.table("ideas").select(IDEA_SELECT) \
        .eq("id", idea_id).eq("user_id", user_id).execute()
    if not result.data:
        return None
    return _to_idea(result.data[0])


def count_ideas(sb, user_id: str) -> int:
    result = sb.table("ideas").select("id", count="exact").eq("user_id", user_id).execute()
    if result.count is not None:
        return result.count
    return len(result.data or [])


def create_idea(sb, user_id: str, data: IdeaCreate) -> Idea:
    row = {**data.model_dump(mode="json"), "user_id": user_id}
    result = sb.table("ideas").insert(row).execute()
    idea = _to_idea(result.data[0])
    logger.info(f"Created idea {idea.id} for user {user_id}")
    return idea


def update_idea(sb, idea_id: str, user_id: str, changes: dict) -> Optional[Idea]:
    """Apply a partial update. Returns None when the idea does not exist for this user."""
    if changes:
        result = sb.table("ideas").update({**changes, "updated_at": _now()}) \
            .eq("id", idea_id).eq("user_id", user_id).execute()
        if not result.data:
            return None
    return get_idea(sb, idea_id, user_id)


def delete_idea(sb, idea_id: str, user_id: str) -> bool:
    result = sb.table("ideas").delete().eq("id", idea_id).eq("user_id", user_id).execute()
    return bool(result.data)


def duplicate_idea(sb, idea_id: str, user_id: str) -> Optional[Idea]:
    """Copy an idea's own fields into a fresh idea at the initial stage.

    Pain points and validation signals stay with the original."""
    result = sb.table("ideas").select("*").eq("id", idea_id).eq("user_id", user_id).execute()
    if not result.data:
        return None

    original = result.data[0]
    copy = {
        k: v for k, v in original.items()
        if k not in ("id", "created_at", "updated_at", "pain_points", "validation_signals")
    }
    copy["name"] = f"{original['name']} (Copy)"
    copy["validation_stage"] = ValidationStage.INITIAL.value

    inserted = sb.table("ideas").insert(copy).execute()
    return _to_idea(inserted.data[0])


def search_ideas(sb, user_id: str, term: Optional[str], filters: IdeaSearchFilters) -> list[Idea]:
    query = sb.table("ideas").select(IDEA_SELECT).eq("user_id", user_id)

    cleaned = _SEARCH_UNSAFE.sub(" ", term or "").strip()
    if cleaned:
        query = query.or_(f"name.ilike.%{cleaned}%,description.ilike.%{cleaned}%")

    if filters.category:
        query = query.eq("problem_category", filters.category)
    if filters.stage:
        query = query.eq("validation_stage", filters.stage.value)
    if filters.min_revenue is not None:
        query = query.gte("revenue_potential", filters.min_revenue)
    if filters.max_revenue is not None:
        query = query.lte("revenue_potential", filters.max_revenue)

    result = query.order(filters.sort_by, desc=filters.sort_order == "desc").execute()
    return [_to_idea(row) for row in (result.data or [])]


# ═══════════════════════════════════════
# Child collections
# ═══════════════════════════════════════

def add_pain_points(sb, idea_id: str, pain_points: list[PainPointCreate]) -> list[PainPoint]:
    if not pain_points:
        return []
    rows = [{"idea_id": idea_id, **pp.model_dump()} for pp in pain_points]
    result = sb.table("pain_points").insert(rows).execute()
    return [PainPoint.model_validate(row) for row in (result.data or [])]


def replace_pain_points(sb, idea_id: str, pain_points: list[PainPointCreate]) -> list[PainPoint]:
    """Pain points are immutable; changing them means replacing the whole list.

    The new rows go in before the old ones are removed, so a failed insert
    leaves the previous list untouched."""
    existing = sb.table("pain_points").select("id").eq("idea_id", idea_id).execute()
    old_ids = [row["id"] for row in (existing.data or [])]

    added = add_pain_points(sb, idea_id, pain_points)
    if old_ids:
        sb.table("pain_points").delete().in_("id", old_ids).execute()
    return added


def add_validation_signal(sb, idea_id: str, kind: str, result: dict):
    """Append one signal. Existing signals are never modified."""
    row = {"idea_id": idea_id, "kind": kind, "result": result, "timestamp": _now()}
    inserted = sb.table("validation_signals").insert(row).execute()
    logger.info(f"Recorded {kind} signal for idea {idea_id}")
    return parse_signals(inserted.data)[0]


# ═══════════════════════════════════════
# Reporting
# ═══════════════════════════════════════

def idea_statistics(ideas: list[Idea]) -> dict:
    total_revenue = sum(i.revenue_potential for i in ideas)
    by_category: dict[str, int] = {}
    for idea in ideas:
        by_category[idea.problem_category] = by_category.get(idea.problem_category, 0) + 1

    return {
        "total_ideas": len(ideas),
        "by_stage": {
            stage.value: sum(1 for i in ideas if i.validation_stage == stage)
            for stage in ValidationStage
        },
        "by_category": by_category,
        "total_revenue_potential": total_revenue,
        "total_target_users": sum(i.target_users for i in ideas),
        "validation_signals": sum(len(i.validation_signals) for i in ideas),
        "average_revenue_per_idea": total_revenue / len(ideas) if ideas else 0,
    }


def export_json(user_id: str, ideas: list[Idea]) -> dict:
    return {
        "export_date": _now(),
        "user_id": user_id,
        "ideas": [i.model_dump(mode="json", by_alias=True) for i in ideas],
        "summary": {
            "total_ideas": len(ideas),
            "validated_ideas": sum(1 for i in ideas if i.validation_stage == ValidationStage.VALIDATED),
            "total_revenue_potential": sum(i.revenue_potential for i in ideas),
            "total_target_users": sum(i.target_users for i in ideas),
        },
    }


def _date(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else ""


def export_csv(ideas: list[Idea]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for idea in ideas:
        writer.writerow([
            idea.name,
            idea.description,
            idea.problem_category,
            idea.validation_stage.value,
            idea.revenue_potential,
            idea.target_users,
            _date(idea.created_at),
            _date(idea.updated_at),
        ])
    return buf.getvalue()
