"""
Report output.

The report is one JSON document. By default it is written to stdout (the
website build redirects it into its data folder); it can also be written
directly to a file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, TextIO

from rhythmsfeed.model import Report


def dump_report(report: Report) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def write_report(report: Report, out: TextIO) -> None:
    out.write(dump_report(report))
    out.write("\n")
    out.flush()


def save_report(report: Report, path: str | Path) -> Path:
    """
    Write the report to a file, creating parent directories if needed.
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(dump_report(report) + "\n", encoding="utf-8")
    return out_path


def load_report(path: str | Path) -> Optional[Report]:
    """
    Read a previously saved report. Returns None if the file is missing or
    not a report.
    """
    report_path = Path(path)
    if not report_path.exists():
        return None

    try:
        data = json.loads(report_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return None

    if not isinstance(data, dict) or "events" not in data:
        return None
    return Report.from_dict(data)
