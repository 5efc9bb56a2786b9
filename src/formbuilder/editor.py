from __future__ import annotations

import logging
from typing import Any

from formbuilder.config import CHOICE_TYPES, DEFAULT_HISTORY_SIZE, DEFAULT_OPTIONS, FIELD_TYPES
from formbuilder.history import History
from formbuilder.models import FormField, Snapshot
from formbuilder.schema import is_valid_webhook_url
from formbuilder.utils import new_ulid

logger = logging.getLogger(__name__)

EDITABLE_FIELD_ATTRS = {"type", "label", "placeholder", "required", "options"}


class BuilderSession:
    """One form-in-progress: the live editable state plus its undo history.

    Every mutator records the new state right after changing it. ``undo`` and
    ``redo`` restore the selected snapshot and then record as well; the
    history's latch absorbs that push.
    """

    def __init__(
        self,
        session_id: str,
        seed: Snapshot,
        max_history: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        self.id = session_id
        self._state = seed.clone()
        self._history = History(self._state, max_size=max_history)
        self._selected_id: str | None = None

    @classmethod
    def from_template(
        cls,
        session_id: str,
        template: Any,
        max_history: int = DEFAULT_HISTORY_SIZE,
    ) -> BuilderSession:
        seed = Snapshot(
            fields=[item.clone() for item in template.fields],
            title=template.name,
            description=template.description,
        )
        return cls(session_id, seed, max_history=max_history)

    @property
    def state(self) -> Snapshot:
        return self._state.clone()

    @property
    def history(self) -> History:
        return self._history

    @property
    def selected_field_id(self) -> str | None:
        return self._selected_id

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def _record(self) -> None:
        self._history.push(self._state)

    def _reindex(self) -> None:
        for index, item in enumerate(self._state.fields):
            item.order = index

    def _index_of(self, field_id: str) -> int:
        for index, item in enumerate(self._state.fields):
            if item.id == field_id:
                return index
        raise KeyError(field_id)

    def update_form(
        self,
        title: str | None = None,
        description: str | None = None,
        webhook_url: str | None = None,
        webhook_enabled: bool | None = None,
    ) -> bool:
        if webhook_url is not None:
            webhook_url = webhook_url.strip()
            if webhook_url and not is_valid_webhook_url(webhook_url):
                raise ValueError(f"invalid webhook url: {webhook_url}")
        updates = {
            "title": title,
            "description": description,
            "webhook_url": webhook_url,
            "webhook_enabled": webhook_enabled,
        }
        changed = False
        for key, value in updates.items():
            if value is not None and value != getattr(self._state, key):
                setattr(self._state, key, value)
                changed = True
        if changed:
            self._record()
        return changed

    def set_title(self, title: str) -> None:
        self.update_form(title=title)

    def set_description(self, description: str) -> None:
        self.update_form(description=description)

    def set_webhook(self, url: str, enabled: bool) -> None:
        self.update_form(webhook_url=url, webhook_enabled=enabled)

    def add_field(self, field_type: str) -> FormField:
        if field_type not in FIELD_TYPES:
            raise ValueError(f"unknown field type: {field_type}")
        new_field = FormField(
            id=f"field-{new_ulid()}",
            type=field_type,
            label=f"New {field_type} field",
            placeholder="",
            required=False,
            options=list(DEFAULT_OPTIONS) if field_type in CHOICE_TYPES else None,
            order=len(self._state.fields),
        )
        self._state.fields.append(new_field)
        self._selected_id = new_field.id
        self._record()
        return new_field.clone()

    def update_field(self, field_id: str, **updates: Any) -> FormField:
        unknown = set(updates) - EDITABLE_FIELD_ATTRS
        if unknown:
            raise ValueError(f"cannot update attributes: {', '.join(sorted(unknown))}")
        if "type" in updates and updates["type"] not in FIELD_TYPES:
            raise ValueError(f"unknown field type: {updates['type']}")
        target = self._state.fields[self._index_of(field_id)]
        changed = False
        for key, value in updates.items():
            if key == "options":
                value = [str(option) for option in value] if value is not None else None
            if value != getattr(target, key):
                setattr(target, key, value)
                changed = True
        if changed:
            self._record()
        return target.clone()

    def delete_field(self, field_id: str) -> None:
        index = self._index_of(field_id)
        del self._state.fields[index]
        self._reindex()
        if self._selected_id == field_id:
            self._selected_id = None
        self._record()

    def move_field(self, active_id: str, over_id: str) -> None:
        if active_id == over_id:
            return
        old_index = self._index_of(active_id)
        new_index = self._index_of(over_id)
        moved = self._state.fields.pop(old_index)
        self._state.fields.insert(new_index, moved)
        self._reindex()
        self._record()

    def select_field(self, field_id: str | None) -> None:
        if field_id is not None:
            self._index_of(field_id)
        self._selected_id = field_id

    def _restore(self, snapshot: Snapshot) -> None:
        self._state = snapshot
        if self._selected_id and self._state.find_field(self._selected_id) is None:
            self._selected_id = None
        self._record()

    def undo(self) -> bool:
        if not self._history.undo():
            return False
        self._restore(self._history.current())
        logger.debug("Session %s undo -> %d", self.id, self._history.cursor)
        return True

    def redo(self) -> bool:
        if not self._history.redo():
            return False
        self._restore(self._history.current())
        logger.debug("Session %s redo -> %d", self.id, self._history.cursor)
        return True
