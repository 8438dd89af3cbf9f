"""JSON report output."""

from __future__ import annotations

import json
from pathlib import Path

from navcheck.models.test_result import RunSummary


def generate_json_report(summary: RunSummary, output_path: Path) -> None:
    """Write a machine-readable JSON report for one script run."""
    report = summary.model_dump()
    report["ok"] = summary.ok
    report["captures"] = [c.model_dump() for c in summary.captures]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
