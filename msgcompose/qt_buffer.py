"""TextBuffer over a Qt QTextEdit.

Positions are QTextDocument positions; the trailing paragraph separator
is not counted in length().
"""
import logging
from typing import Optional, Tuple

from PyQt5.QtGui import QTextCursor

from msgcompose.buffer import TextBuffer

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = '\u2029'


class QtTextBuffer(TextBuffer):
    """Adapts a QTextEdit (and its document) to the TextBuffer contract.

    QTextDocument.contentsChange is forwarded to listeners as is; it is
    emitted synchronously, after the edit's cursor has been updated.
    """

    def __init__(self, edit):
        super().__init__()
        self._edit = edit
        self._document = edit.document()
        self._document.contentsChange.connect(self._on_contents_change)

    @property
    def edit(self):
        return self._edit

    def close(self):
        """Stop forwarding document changes."""
        try:
            self._document.contentsChange.disconnect(self._on_contents_change)
        except TypeError:
            # already disconnected
            pass

    def _on_contents_change(self, position: int, removed: int, added: int):
        self._notify(position, removed, added)

    def length(self) -> int:
        return self._document.characterCount() - 1

    def text(self) -> str:
        return self._document.toPlainText()

    def char_at(self, pos: int) -> str:
        if not 0 <= pos < self.length():
            return ''
        char = self._document.characterAt(pos)
        if char == PARAGRAPH_SEPARATOR:
            return '\n'
        return char

    def _clamp(self, pos: int) -> int:
        return max(0, min(pos, self.length()))

    def cursor_position(self) -> int:
        return self._edit.textCursor().position()

    def set_cursor_position(self, pos: int):
        cur = self._edit.textCursor()
        cur.setPosition(self._clamp(pos))
        self._edit.setTextCursor(cur)

    def selection(self) -> Optional[Tuple[int, int]]:
        cur = self._edit.textCursor()
        if not cur.hasSelection():
            return None
        return (cur.selectionStart(), cur.selectionEnd())

    def set_selection(self, anchor: int, position: int):
        cur = self._edit.textCursor()
        cur.setPosition(self._clamp(anchor))
        cur.setPosition(self._clamp(position), QTextCursor.KeepAnchor)
        self._edit.setTextCursor(cur)

    def at_end(self) -> bool:
        return self._edit.textCursor().atEnd()

    def insert_text(self, text: str):
        self._edit.insertPlainText(text)

    def replace_char(self, pos: int, char: str):
        if not 0 <= pos < self.length():
            logger.debug("replace_char out of range: %d (length %d)", pos, self.length())
            return
        cur = self._edit.textCursor()
        cur.beginEditBlock()
        try:
            cur.setPosition(pos + 1)
            cf = cur.charFormat()
            cur.deletePreviousChar()
            cur.setCharFormat(cf)
            cur.insertText(char)
        finally:
            cur.endEditBlock()

    def set_text(self, text: str):
        self._edit.setPlainText(text)
        self._edit.moveCursor(QTextCursor.End)

    def undo(self) -> bool:
        if not self._document.isUndoAvailable():
            return False
        self._document.undo()
        return True
