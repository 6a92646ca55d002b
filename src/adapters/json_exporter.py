"""JSON export of a retry batch report.

Why JSON:
- Lets operators attach the batch outcome to an incident or feed it into
  other tooling.
- Stable layout (sorted keys, UTF-8) so two reports diff cleanly.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import RetryReport


def export_report_json(*, report: RetryReport, output_path: Path) -> Path:
    """Write `RetryReport` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
