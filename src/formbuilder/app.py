from __future__ import annotations

from fastapi import FastAPI

from formbuilder.config import Settings
from formbuilder.routes.builder import router as builder_router
from formbuilder.routes.submissions import router as submissions_router
from formbuilder.sessions import SessionStore


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(
        openapi_tags=[
            {"name": "api/templates", "description": "REST API: テンプレート"},
            {"name": "api/sessions", "description": "REST API: 編集セッション"},
            {"name": "api/submissions", "description": "REST API: 送信データの集計"},
            {"name": "system", "description": "システム"},
        ]
    )

    app.state.settings = settings
    app.state.sessions = SessionStore(max_history=settings.history_max_size)

    @app.get("/healthz", tags=["system"])
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(builder_router)
    app.include_router(submissions_router)

    return app
