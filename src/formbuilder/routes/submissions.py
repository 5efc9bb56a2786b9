from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from formbuilder.export import EXPORT_FORMATS, export_csv, fields_from_payload, submission_stats
from formbuilder.schema import FIELDS_PAYLOAD_SCHEMA, SUBMISSIONS_PAYLOAD_SCHEMA, check_payload
from formbuilder.utils import parse_dt

router = APIRouter()


async def _read_submissions(request: Request) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="JSONの解析に失敗しました")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="リクエストが不正です")
    submissions = payload.get("submissions") or []
    if check_payload(submissions, SUBMISSIONS_PAYLOAD_SCHEMA):
        raise HTTPException(status_code=400, detail="submissionsが不正です")
    return payload, submissions


@router.post("/api/submissions/export", tags=["api/submissions"])
async def api_export_submissions(request: Request) -> PlainTextResponse:
    fmt = request.query_params.get("format", "csv")
    if fmt not in EXPORT_FORMATS:
        raise HTTPException(status_code=400, detail=f"formatが不正です ({fmt})")
    payload, submissions = await _read_submissions(request)
    raw_fields = payload.get("fields") or []
    errors = check_payload(raw_fields, FIELDS_PAYLOAD_SCHEMA)
    if errors:
        raise HTTPException(status_code=400, detail=errors)
    fields = fields_from_payload(raw_fields)

    delimiter, content_type = EXPORT_FORMATS[fmt]
    content = export_csv(
        fields,
        submissions,
        include_metadata=bool(payload.get("include_metadata")),
        delimiter=delimiter,
    )

    title = str(payload.get("title") or "submissions").strip().replace(" ", "_")
    filename = f"{title}.{fmt}"
    return PlainTextResponse(
        content,
        media_type=content_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/api/submissions/stats", tags=["api/submissions"])
async def api_submission_stats(request: Request) -> JSONResponse:
    payload, submissions = await _read_submissions(request)
    now = parse_dt(payload.get("now")) if payload.get("now") else None
    return JSONResponse(submission_stats(submissions, now=now))
