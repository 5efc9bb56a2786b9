from __future__ import annotations

import csv
import io
import logging
from datetime import datetime, timedelta
from typing import Any, Iterable

import orjson

from formbuilder.models import FormField
from formbuilder.utils import now_utc, parse_dt

logger = logging.getLogger(__name__)

BASE_HEADERS = ["Submission ID", "Submitted At", "Status"]
METADATA_HEADERS = ["Reviewed At", "Review Notes"]
SUBMISSION_STATUSES = ("pending", "approved", "denied")
EXPORT_FORMATS = {
    "csv": (",", "text/csv"),
    "tsv": ("\t", "text/tab-separated-values"),
}


def fields_from_payload(raw_fields: Iterable[dict[str, Any]]) -> list[FormField]:
    fields: list[FormField] = []
    for index, raw in enumerate(raw_fields):
        fields.append(
            FormField.from_dict(
                {
                    **raw,
                    "id": raw.get("id") or f"field-{index}",
                    "type": raw.get("type") or "text",
                    "order": raw.get("order", index),
                }
            )
        )
    return fields


def format_dt(value: Any) -> str:
    parsed = parse_dt(value)
    if parsed is None:
        return ""
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def _submission_data(submission: dict[str, Any]) -> dict[str, Any]:
    data = submission.get("data")
    if isinstance(data, (str, bytes)):
        try:
            data = orjson.loads(data)
        except orjson.JSONDecodeError:
            return {}
    return data if isinstance(data, dict) else {}


def value_to_text(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    if value:
        return str(value)
    return ""


def csv_headers_and_rows(
    fields: list[FormField],
    submissions: list[dict[str, Any]],
    include_metadata: bool = False,
) -> tuple[list[str], list[list[str]]]:
    headers = list(BASE_HEADERS)
    headers.extend(item.label for item in fields)
    if include_metadata:
        headers.extend(METADATA_HEADERS)

    rows: list[list[str]] = []
    for submission in submissions:
        data = _submission_data(submission)
        row = [
            str(submission.get("id", "")),
            format_dt(submission.get("submitted_at")),
            str(submission.get("status") or "pending"),
        ]
        for item in fields:
            row.append(value_to_text(data.get(item.label)))
        if include_metadata:
            row.append(format_dt(submission.get("reviewed_at")))
            row.append(str(submission.get("review_notes") or ""))
        rows.append(row)
    return headers, rows


def export_csv(
    fields: list[FormField],
    submissions: list[dict[str, Any]],
    include_metadata: bool = False,
    delimiter: str = ",",
) -> str:
    headers, rows = csv_headers_and_rows(fields, submissions, include_metadata)
    output = io.StringIO()
    writer = csv.writer(output, delimiter=delimiter, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    logger.info("Exported %d submission(s) across %d field(s)", len(rows), len(fields))
    return output.getvalue()


def submission_stats(
    submissions: list[dict[str, Any]],
    now: datetime | None = None,
) -> dict[str, Any]:
    now = now or now_utc()
    one_week_ago = now - timedelta(days=7)

    stats: dict[str, Any] = {"total": len(submissions)}
    for status in SUBMISSION_STATUSES:
        stats[status] = sum(1 for item in submissions if item.get("status") == status)

    recent = 0
    response_times: list[float] = []
    for item in submissions:
        submitted = parse_dt(item.get("submitted_at"))
        if submitted is None:
            continue
        if submitted > one_week_ago:
            recent += 1
        reviewed = parse_dt(item.get("reviewed_at"))
        if reviewed is not None:
            response_times.append((reviewed - submitted).total_seconds())
    stats["recent_submissions"] = recent
    if response_times:
        stats["average_response_time"] = sum(response_times) / len(response_times)
    return stats


def format_file_size(size: int) -> str:
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    index = 0
    while size >= 1024 ** (index + 1) and index < len(units) - 1:
        index += 1
    value = round(size / 1024**index, 2)
    return f"{value:g} {units[index]}"
