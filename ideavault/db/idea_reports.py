"""Persistence for generated business reports."""

from datetime import datetime, timezone
from typing import Any

from ideavault.core.logging import get_logger
from ideavault.db.supabase_client import get_user_supabase, is_no_rows, is_table_missing
from ideavault.db.user_ideas import generate_idea_id

logger = get_logger(__name__)

TABLE = "idea_reports"

REPORT_COLUMNS = (
    "business_concept",
    "market_intelligence",
    "product_strategy",
    "go_to_market",
    "financial_foundation",
    "evaluation",
    "visualizations",
    "mvp_prompt",
    "model",
)


def get_idea_report(user_id: str, idea_id: int | str) -> dict[str, Any] | None:
    """Stored report for an idea, or None (also when the table is missing)."""
    try:
        response = (
            get_user_supabase()
            .table(TABLE)
            .select("*")
            .eq("idea_id", str(idea_id))
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
    except Exception as e:
        if is_no_rows(e):
            return None
        if is_table_missing(e):
            logger.warning("idea_reports table not found, returning no report")
            return None
        raise

    return response.data if response else None


def create_idea_report(
    user_id: str, idea_id: int | str, report: dict[str, Any]
) -> dict[str, Any]:
    """
    Store a report for an idea.

    Only the known report columns are written; generation metadata such as
    ``raw_response`` stays out of the table.

    Returns:
        Stored row, or an unpersisted record when the table does not exist
    """
    now = datetime.now(timezone.utc).isoformat()
    data = {k: report[k] for k in REPORT_COLUMNS if k in report}
    data.update({"idea_id": idea_id, "user_id": user_id, "generated_at": now})

    try:
        response = get_user_supabase().table(TABLE).insert(data).execute()
    except Exception as e:
        if is_table_missing(e):
            logger.warning("idea_reports table not found, returning unsaved report")
            return {**data, "id": generate_idea_id(), "created_at": now, "updated_at": now}
        raise

    if not response.data:
        raise ValueError("Failed to create report")
    return response.data[0]
