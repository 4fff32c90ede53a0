"""Undo stack — records buffer edits so they can be reverted as units."""
from dataclasses import dataclass, field
from typing import Optional, List
from collections import deque


@dataclass
class EditEntry:
    position: int                 # where the edit happened
    removed: str                  # text that was there before
    added: str                    # text that replaced it
    removed_formats: List = field(default_factory=list)  # formats of removed chars
    cursor_before: int = 0        # caret position to restore on undo


class UndoStack:
    """Maintains a bounded stack of recent buffer edits."""

    def __init__(self, max_size: int = 100):
        self._stack: deque[EditEntry] = deque(maxlen=max_size)

    def push(self, entry: EditEntry):
        self._stack.append(entry)

    def pop(self) -> Optional[EditEntry]:
        if self._stack:
            return self._stack.pop()
        return None

    def peek(self) -> Optional[EditEntry]:
        if self._stack:
            return self._stack[-1]
        return None

    def clear(self):
        self._stack.clear()

    @property
    def size(self) -> int:
        return len(self._stack)
