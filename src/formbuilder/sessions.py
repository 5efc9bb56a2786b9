from __future__ import annotations

import logging
from typing import Any

from formbuilder.config import DEFAULT_HISTORY_SIZE
from formbuilder.editor import BuilderSession
from formbuilder.models import Snapshot, blank_snapshot
from formbuilder.utils import new_ulid

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, max_history: int = DEFAULT_HISTORY_SIZE) -> None:
        self._max_history = max_history
        self._sessions: dict[str, BuilderSession] = {}

    def create(self, seed: Snapshot | None = None) -> BuilderSession:
        session = BuilderSession(new_ulid(), seed or blank_snapshot(), max_history=self._max_history)
        self._sessions[session.id] = session
        logger.info("Builder session opened: %s", session.id)
        return session

    def create_from_template(self, template: Any) -> BuilderSession:
        session = BuilderSession.from_template(new_ulid(), template, max_history=self._max_history)
        self._sessions[session.id] = session
        logger.info("Builder session opened from template %s: %s", template.id, session.id)
        return session

    def get(self, session_id: str) -> BuilderSession | None:
        return self._sessions.get(session_id)

    def close(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info("Builder session closed: %s", session_id)
        return True

    def list_ids(self) -> list[str]:
        return list(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)


def session_output(session: BuilderSession) -> dict[str, Any]:
    return {
        "id": session.id,
        "state": session.state.to_dict(),
        "selected_field_id": session.selected_field_id,
        "can_undo": session.can_undo,
        "can_redo": session.can_redo,
        "cursor": session.history.cursor,
        "history_size": len(session.history),
    }
