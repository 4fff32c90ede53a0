"""Text buffer — the cursor-addressable document the composer edits.

TextBuffer is the contract both the history navigator and the
capitalization engine work against. MemoryTextBuffer implements it in
plain Python (used headless and in tests); QtTextBuffer in qt_buffer.py
implements it over a QTextEdit.
"""
import logging
from typing import Callable, List, Optional, Tuple

from msgcompose.undo import UndoStack, EditEntry

logger = logging.getLogger(__name__)

# (position, chars_removed, chars_added)
ChangeListener = Callable[[int, int, int], None]


class TextBuffer:
    """Base class: listener plumbing plus the operations the core relies on.

    Every mutation must notify listeners synchronously, after the change
    has been applied and the cursor moved, including mutations requested
    by a listener itself.
    """

    def __init__(self):
        self._listeners: List[ChangeListener] = []

    def add_listener(self, listener: ChangeListener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, position: int, removed: int, added: int):
        for listener in list(self._listeners):
            listener(position, removed, added)

    def length(self) -> int:
        raise NotImplementedError

    def text(self) -> str:
        raise NotImplementedError

    def char_at(self, pos: int) -> str:
        """Character at pos, or '' when pos is outside the text."""
        raise NotImplementedError

    def cursor_position(self) -> int:
        raise NotImplementedError

    def set_cursor_position(self, pos: int):
        raise NotImplementedError

    def selection(self) -> Optional[Tuple[int, int]]:
        """(start, end) of the selection, or None when nothing is selected."""
        raise NotImplementedError

    def set_selection(self, anchor: int, position: int):
        raise NotImplementedError

    def at_end(self) -> bool:
        return self.cursor_position() >= self.length()

    def insert_text(self, text: str):
        """Type text at the cursor, replacing the selection if there is one."""
        raise NotImplementedError

    def replace_char(self, pos: int, char: str):
        """Swap the character at pos for char, keeping its format.

        Must be a single undoable edit.
        """
        raise NotImplementedError

    def set_text(self, text: str):
        """Replace the whole content and put the cursor at the end."""
        raise NotImplementedError

    def undo(self) -> bool:
        """Revert the latest undoable edit. Returns False if there is none."""
        raise NotImplementedError


class MemoryTextBuffer(TextBuffer):
    """In-memory text buffer with per-character formats and undo.

    Formats are opaque values (None is the default format). Typed text
    inherits the format of the character before the cursor, the way a
    rich-text editor continues the current run.
    """

    def __init__(self, text: str = "", fmt=None, undo_limit: int = 100):
        super().__init__()
        self._chars: List[str] = list(text)
        self._formats: list = [fmt] * len(text)
        self._cursor: int = len(text)
        self._anchor: int = len(text)
        self._undo_stack = UndoStack(max_size=undo_limit)

    @property
    def undo_stack(self):
        return self._undo_stack

    def length(self) -> int:
        return len(self._chars)

    def text(self) -> str:
        return ''.join(self._chars)

    def char_at(self, pos: int) -> str:
        if 0 <= pos < len(self._chars):
            return self._chars[pos]
        return ''

    def format_at(self, pos: int):
        if 0 <= pos < len(self._formats):
            return self._formats[pos]
        return None

    def current_format(self):
        """Format new text would get if typed at the cursor."""
        if self._cursor > 0:
            return self._formats[self._cursor - 1]
        if self._formats:
            return self._formats[0]
        return None

    def _clamp(self, pos: int) -> int:
        return max(0, min(pos, len(self._chars)))

    def cursor_position(self) -> int:
        return self._cursor

    def set_cursor_position(self, pos: int):
        self._cursor = self._anchor = self._clamp(pos)

    def selection(self) -> Optional[Tuple[int, int]]:
        if self._anchor == self._cursor:
            return None
        return (min(self._anchor, self._cursor), max(self._anchor, self._cursor))

    def set_selection(self, anchor: int, position: int):
        self._anchor = self._clamp(anchor)
        self._cursor = self._clamp(position)

    def insert_text(self, text: str, fmt=None):
        if not text and self.selection() is None:
            return
        cursor_before = self._cursor
        if fmt is None:
            fmt = self.current_format()

        start, end = self.selection() or (self._cursor, self._cursor)
        removed = ''.join(self._chars[start:end])
        removed_formats = self._formats[start:end]
        self._chars[start:end] = list(text)
        self._formats[start:end] = [fmt] * len(text)
        self._cursor = self._anchor = start + len(text)

        self._undo_stack.push(EditEntry(
            position=start,
            removed=removed,
            added=text,
            removed_formats=removed_formats,
            cursor_before=cursor_before,
        ))
        self._notify(start, len(removed), len(text))

    def delete_previous_char(self):
        """Backspace: remove the selection or the character before the cursor."""
        if self.selection() is None:
            if self._cursor == 0:
                return
            self._anchor = self._cursor - 1
        self.insert_text('')

    def replace_char(self, pos: int, char: str):
        if not 0 <= pos < len(self._chars):
            logger.debug("replace_char out of range: %d (length %d)", pos, len(self._chars))
            return
        fmt = self._formats[pos]
        old = self._chars[pos]
        self._chars[pos] = char
        self._formats[pos] = fmt

        self._undo_stack.push(EditEntry(
            position=pos,
            removed=old,
            added=char,
            removed_formats=[fmt],
            cursor_before=self._cursor,
        ))
        self._notify(pos, 1, 1)

    def set_text(self, text: str):
        old = self.text()
        old_formats = list(self._formats)
        cursor_before = self._cursor
        self._chars = list(text)
        self._formats = [None] * len(text)
        self._cursor = self._anchor = len(text)

        self._undo_stack.push(EditEntry(
            position=0,
            removed=old,
            added=text,
            removed_formats=old_formats,
            cursor_before=cursor_before,
        ))
        self._notify(0, len(old), len(text))

    def undo(self) -> bool:
        """Revert the most recent edit. Returns False if there is none."""
        entry = self._undo_stack.pop()
        if entry is None:
            return False
        start = entry.position
        end = start + len(entry.added)
        self._chars[start:end] = list(entry.removed)
        self._formats[start:end] = list(entry.removed_formats)
        self._cursor = self._anchor = self._clamp(entry.cursor_before)
        self._notify(start, len(entry.added), len(entry.removed))
        return True
