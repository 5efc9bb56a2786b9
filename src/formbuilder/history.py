from __future__ import annotations

import logging

from formbuilder.config import DEFAULT_HISTORY_SIZE
from formbuilder.models import Snapshot

logger = logging.getLogger(__name__)


class History:
    """Bounded linear undo/redo timeline of builder snapshots.

    Entries are stored as clones, so later changes to the caller's objects
    never reach a recorded snapshot. ``undo``/``redo`` arm a single-shot latch
    that swallows the next ``push``: the editor restores the snapshot into its
    live state and pushes as it does after any change, and that push must not
    be recorded as a new edit.
    """

    def __init__(self, seed: Snapshot, max_size: int = DEFAULT_HISTORY_SIZE) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1 (got {max_size})")
        self._max_size = max_size
        self._entries: list[Snapshot] = [seed.clone()]
        self._cursor = 0
        self._suppress_next_push = False

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def suppressing(self) -> bool:
        return self._suppress_next_push

    @property
    def entries(self) -> list[Snapshot]:
        return [entry.clone() for entry in self._entries]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, candidate: Snapshot) -> bool:
        if self._suppress_next_push:
            self._suppress_next_push = False
            return False

        del self._entries[self._cursor + 1 :]
        self._entries.append(candidate.clone())
        self._cursor = len(self._entries) - 1

        overflow = len(self._entries) - self._max_size
        if overflow > 0:
            del self._entries[:overflow]
            self._cursor = max(self._cursor - overflow, 0)
            logger.debug("History evicted %d oldest snapshot(s)", overflow)
        return True

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self._suppress_next_push = True
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self._suppress_next_push = True
        self._cursor += 1
        return True

    def current(self) -> Snapshot:
        return self._entries[self._cursor].clone()
