"""Sent-message history with a preserved draft."""
import logging
from collections import deque
from typing import Callable, Optional

logger = logging.getLogger(__name__)

MAX_MESSAGE_HISTORY = 50


class HistoryNavigator:
    """Recalls previously sent messages into the buffer.

    Entries are kept oldest first. The navigation index runs from 0 (the
    oldest entry) to size, where size is the live draft rather than an
    entry. Leaving the draft for the history saves the buffer text, and
    coming back past the newest entry restores it.

    `correction` is True while a recalled message is shown over a saved
    draft; a widget can use it to style the editor differently.
    """

    def __init__(self, buffer, max_size: int = MAX_MESSAGE_HISTORY,
                 on_correction_changed: Optional[Callable[[bool], None]] = None):
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self._buffer = buffer
        self._entries: deque[str] = deque(maxlen=max_size)
        self._index: int = 0
        self._draft: str = ""
        self._correction: bool = False
        self._on_correction_changed = on_correction_changed

    @property
    def entries(self) -> tuple:
        return tuple(self._entries)

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def max_size(self) -> int:
        return self._entries.maxlen

    @property
    def index(self) -> int:
        return self._index

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def correction(self) -> bool:
        return self._correction

    @property
    def at_current(self) -> bool:
        return self._index == len(self._entries)

    def record_sent(self, text: str):
        """Remember a sent message as the newest entry."""
        if not text.strip():
            return
        if self._draft == text:
            # the draft went out, nothing left to restore
            self._draft = ""
        try:
            self._entries.remove(text)
        except ValueError:
            pass
        # deque(maxlen) drops the oldest entry at capacity
        self._entries.append(text)
        self._index = len(self._entries)
        logger.debug("Recorded message, history size %d", len(self._entries))

    def show_previous(self):
        """Step to the next older entry."""
        size = len(self._entries)
        if not size or not (self._index > 0 or self._correction):
            return

        if self._index == size:
            self._draft = self._buffer.text()
            self._correction = True
        elif (self._index == size - 1 and self._correction
              and self._buffer.text() != self._entries[-1]):
            # Newest entry was edited: show it again instead of skipping it
            self._correction = False
            self._index = size

        if self._index == 0:
            return
        self._index -= 1
        self._show_entry()

    def show_next(self):
        """Step to the next newer entry, or back to the draft."""
        self._correction = False
        size = len(self._entries)
        if not size:
            return
        if self._index + 1 < size:
            self._index += 1
            self._show_entry()
        elif self._index != size:
            self._index = size
            self._restore_draft()

    def show_first(self):
        """Jump to the oldest entry, or back to the draft if one is saved."""
        self._correction = False
        size = len(self._entries)
        if not size:
            return
        if not self._draft:
            self._index = 0
            self._show_entry()
        else:
            self._index = size
            self._restore_draft()

    def show_last(self):
        """Jump to the newest entry."""
        self._correction = False
        size = len(self._entries)
        if not size:
            return
        self._index = size - 1
        self._show_entry()

    def clear(self):
        self._entries.clear()
        self._index = 0
        self._draft = ""
        self._set_correction(False)
        logger.info("Message history cleared")

    def _show_entry(self):
        text = self._entries[self._index]
        logger.debug("Showing history entry %d/%d", self._index + 1, len(self._entries))
        self._buffer.set_text(text)
        self._set_correction(self._correction)

    def _restore_draft(self):
        logger.debug("Restoring draft (%d chars)", len(self._draft))
        self._buffer.set_text(self._draft)
        self._set_correction(False)

    def _set_correction(self, value: bool):
        self._correction = value
        if self._on_correction_changed is not None:
            self._on_correction_changed(value)
