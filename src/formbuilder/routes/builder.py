from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from formbuilder.catalog import get_template, list_templates, templates_by_category
from formbuilder.editor import BuilderSession
from formbuilder.schema import (
    FIELD_CREATE_SCHEMA,
    FIELD_UPDATE_SCHEMA,
    FORM_UPDATE_SCHEMA,
    check_payload,
    preview_schema,
    save_payload,
    validate_snapshot,
    validate_submission,
)
from formbuilder.sessions import session_output

router = APIRouter()


def _get_session(request: Request, session_id: str) -> BuilderSession:
    session = request.app.state.sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="セッションが見つかりません")
    return session


async def _read_payload(request: Request, schema: dict[str, Any] | None = None) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="JSONの解析に失敗しました")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="リクエストが不正です")
    if schema is not None:
        errors = check_payload(payload, schema)
        if errors:
            raise HTTPException(status_code=400, detail=errors)
    return payload


@router.get("/api/templates", tags=["api/templates"])
async def api_list_templates(request: Request) -> JSONResponse:
    category = request.query_params.get("category")
    templates = templates_by_category(category) if category else list_templates()
    return JSONResponse([template.to_dict() for template in templates])


@router.post("/api/sessions", tags=["api/sessions"])
async def api_create_session(request: Request) -> JSONResponse:
    sessions = request.app.state.sessions
    body = await request.body()
    payload = await _read_payload(request) if body else {}
    template_id = str(payload.get("template_id") or "").strip()
    if template_id:
        template = get_template(template_id)
        if template is None:
            raise HTTPException(status_code=404, detail="テンプレートが見つかりません")
        session = sessions.create_from_template(template)
    else:
        session = sessions.create()
    return JSONResponse(session_output(session), status_code=201)


@router.get("/api/sessions/{session_id}", tags=["api/sessions"])
async def api_get_session(request: Request, session_id: str) -> JSONResponse:
    return JSONResponse(session_output(_get_session(request, session_id)))


@router.delete("/api/sessions/{session_id}", tags=["api/sessions"])
async def api_close_session(request: Request, session_id: str) -> JSONResponse:
    if not request.app.state.sessions.close(session_id):
        raise HTTPException(status_code=404, detail="セッションが見つかりません")
    return JSONResponse({"closed": session_id})


@router.put("/api/sessions/{session_id}/form", tags=["api/sessions"])
async def api_update_form(request: Request, session_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    payload = await _read_payload(request, FORM_UPDATE_SCHEMA)
    try:
        session.update_form(
            title=payload.get("title"),
            description=payload.get("description"),
            webhook_url=payload.get("webhook_url"),
            webhook_enabled=payload.get("webhook_enabled"),
        )
    except ValueError:
        raise HTTPException(status_code=400, detail="webhook_urlが不正です")
    return JSONResponse(session_output(session))


@router.post("/api/sessions/{session_id}/fields", tags=["api/sessions"])
async def api_add_field(request: Request, session_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    payload = await _read_payload(request, FIELD_CREATE_SCHEMA)
    session.add_field(payload["type"])
    return JSONResponse(session_output(session), status_code=201)


@router.put("/api/sessions/{session_id}/fields/{field_id}", tags=["api/sessions"])
async def api_update_field(request: Request, session_id: str, field_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    payload = await _read_payload(request, FIELD_UPDATE_SCHEMA)
    try:
        session.update_field(field_id, **payload)
    except KeyError:
        raise HTTPException(status_code=404, detail="フィールドが見つかりません")
    return JSONResponse(session_output(session))


@router.delete("/api/sessions/{session_id}/fields/{field_id}", tags=["api/sessions"])
async def api_delete_field(request: Request, session_id: str, field_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    try:
        session.delete_field(field_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="フィールドが見つかりません")
    return JSONResponse(session_output(session))


@router.post("/api/sessions/{session_id}/fields/{field_id}/move", tags=["api/sessions"])
async def api_move_field(request: Request, session_id: str, field_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    payload = await _read_payload(request)
    over_id = str(payload.get("over_id") or "").strip()
    if not over_id:
        raise HTTPException(status_code=400, detail="over_idは必須です")
    try:
        session.move_field(field_id, over_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="フィールドが見つかりません")
    return JSONResponse(session_output(session))


@router.post("/api/sessions/{session_id}/select", tags=["api/sessions"])
async def api_select_field(request: Request, session_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    payload = await _read_payload(request)
    field_id = payload.get("field_id")
    try:
        session.select_field(str(field_id) if field_id else None)
    except KeyError:
        raise HTTPException(status_code=404, detail="フィールドが見つかりません")
    return JSONResponse(session_output(session))


@router.post("/api/sessions/{session_id}/undo", tags=["api/sessions"])
async def api_undo(request: Request, session_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    session.undo()
    return JSONResponse(session_output(session))


@router.post("/api/sessions/{session_id}/redo", tags=["api/sessions"])
async def api_redo(request: Request, session_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    session.redo()
    return JSONResponse(session_output(session))


@router.get("/api/sessions/{session_id}/schema", tags=["api/sessions"])
async def api_preview_schema(request: Request, session_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    return JSONResponse(preview_schema(session.state))


@router.post("/api/sessions/{session_id}/preview", tags=["api/sessions"])
async def api_preview_submit(request: Request, session_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    payload = await _read_payload(request)
    data = payload.get("data", payload)
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="dataが不正です")
    errors = validate_submission(session.state, data)
    return JSONResponse({"valid": not errors, "errors": errors})


@router.get("/api/sessions/{session_id}/save-payload", tags=["api/sessions"])
async def api_save_payload(request: Request, session_id: str) -> JSONResponse:
    session = _get_session(request, session_id)
    state = session.state
    errors = validate_snapshot(state)
    if errors:
        raise HTTPException(status_code=400, detail=errors)
    return JSONResponse(save_payload(state))
