# File: app/export/csv_export.py
"""
CSV rendering of the export projection.

Fields are quoted only when they contain a comma, quote or line break;
inner quotes are doubled (RFC 4180).
"""

import csv
import io
from datetime import date
from typing import Any, Iterable, List, Mapping, Sequence

from settings import ExportConfig


def export_header(terms: Sequence[str]) -> List[str]:
    return ExportConfig.BASE_COLUMNS + [f"{ExportConfig.SCORE_COLUMN_PREFIX}{t}" for t in terms]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def export_records(rows: Iterable[Mapping[str, Any]], terms: Sequence[str]) -> List[List[str]]:
    """Header plus one list of cells per export row."""
    records = [export_header(terms)]
    for row in rows:
        scores = row.get("scores") or {}
        records.append(
            [_cell(row.get(col)) for col in ExportConfig.BASE_COLUMNS]
            + [_cell(scores.get(term, 0)) for term in terms]
        )
    return records


def to_csv(rows: Iterable[Mapping[str, Any]], terms: Sequence[str]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerows(export_records(rows, terms))
    return buffer.getvalue()
