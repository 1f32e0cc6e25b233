"""Capped, newest-first log of completed rolls."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .types import HistoryEntry

MAX_HISTORY_ENTRIES = 50


@dataclass
class RollHistory:
    entries: List[HistoryEntry] = field(default_factory=list)
    visible: bool = False
    limit: int = MAX_HISTORY_ENTRIES

    def append(self, entry: HistoryEntry) -> None:
        """Insert ``entry`` at the front and drop anything past ``limit``.

        Recording a roll also reveals the history column.
        """
        self.entries.insert(0, entry)
        del self.entries[self.limit :]
        if not self.visible:
            self.visible = True

    def clear(self) -> None:
        self.entries.clear()
        self.visible = False

    def toggle_visibility(self) -> None:
        self.visible = not self.visible

    def __len__(self) -> int:
        return len(self.entries)
