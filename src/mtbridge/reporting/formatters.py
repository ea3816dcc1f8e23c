"""Output formatters for dispatch reports."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path

from mtbridge.reporting.report import DispatchReport


def to_json(report: DispatchReport, indent: int = 2) -> str:
    """Format report as JSON string."""
    return json.dumps(report.to_dict(), indent=indent, default=str)


def to_markdown(report: DispatchReport) -> str:
    """Format report as Markdown."""
    lines = [
        "# Translation Report",
        "",
        "| Field | Value |",
        "|-------|-------|",
        f"| Backend | {report.backend} |",
        f"| Source language | {report.source_lang} |",
        f"| Target language | {report.target_lang} |",
        f"| Strategy | {report.strategy} |",
        f"| Max workers | {report.max_workers} |",
        "",
        "## Statistics",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Items | {report.total_items} |",
        f"| Empty | {report.empty_items} |",
        f"| Translated | {report.translated_items} |",
        f"| Failed | {report.failed_items} |",
        f"| Timed out | {report.timed_out_items} |",
        f"| Duration | {report.duration_seconds:.1f}s |",
    ]

    if report.errors:
        lines.extend([
            "",
            "## Errors",
            "",
        ])
        for err in report.errors:
            lines.append(f"- {err}")

    return "\n".join(lines) + "\n"


def to_csv(report: DispatchReport) -> str:
    """Format report as a single-row CSV."""
    output = io.StringIO()
    data = report.to_dict()
    # Flatten errors list
    data["errors"] = "; ".join(data["errors"])
    writer = csv.DictWriter(output, fieldnames=data.keys())
    writer.writeheader()
    writer.writerow(data)
    return output.getvalue()


def save_report(report: DispatchReport, path: str | Path) -> None:
    """Save report to file, auto-detecting format from extension."""
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in (".md", ".markdown"):
        content = to_markdown(report)
    elif suffix == ".csv":
        content = to_csv(report)
    else:
        content = to_json(report)

    path.write_text(content, encoding="utf-8")
