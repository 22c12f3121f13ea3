"""JSON report rendering (camelCase keys)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional, Sequence

from ..models.result import BatchSummary, ComplianceResult


def result_to_dict(result: ComplianceResult) -> dict:
    return result.model_dump(mode="json", by_alias=True)


def render_result_json(result: ComplianceResult) -> str:
    return json.dumps(result_to_dict(result), indent=2, ensure_ascii=False)


def render_summary_json(
    summary: BatchSummary,
    results: Optional[Sequence[ComplianceResult]] = None,
) -> str:
    """Batch document: {"summary", "results", "timestamp"}."""
    document = {
        "summary": summary.model_dump(mode="json", by_alias=True),
        "results": [result_to_dict(r) for r in results or []],
        "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)
