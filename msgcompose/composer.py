"""Composer state — ties one buffer to its history navigator and capitalizer."""
import logging
from typing import Callable, Dict, Optional

from msgcompose.buffer import MemoryTextBuffer
from msgcompose.capitalizer import CapitalizationEngine
from msgcompose.history import HistoryNavigator, MAX_MESSAGE_HISTORY
from msgcompose.config import (
    CMD_SHOW_PREV, CMD_SHOW_NEXT, CMD_SHOW_FIRST, CMD_SHOW_LAST, CMD_CHANGE_CASE,
)

logger = logging.getLogger(__name__)


class ComposerState:
    """Per-conversation composer state.

    Owns the message history, the draft and the capitalization engine for
    one buffer. Nothing here is shared between composers. Call dispose()
    when the conversation goes away.
    """

    def __init__(self, buffer=None, config=None,
                 on_correction_changed: Optional[Callable[[bool], None]] = None):
        self.buffer = buffer if buffer is not None else MemoryTextBuffer()
        self.config = config
        max_size = config.max_message_history if config is not None else MAX_MESSAGE_HISTORY
        self.history = HistoryNavigator(
            self.buffer,
            max_size=max_size,
            on_correction_changed=on_correction_changed,
        )
        self.capitalizer = CapitalizationEngine(self.buffer)
        self.capitalizer.attach()
        self._disposed = False

        if config is not None:
            self.apply_config(config)
            config.add_listener(self._on_option_changed)

    @property
    def correction(self) -> bool:
        return self.history.correction

    def apply_config(self, config):
        self.set_auto_capitalize(config.auto_capitalize)

    def _on_option_changed(self, key: str):
        if key == "auto_capitalize":
            self.set_auto_capitalize(self.config.auto_capitalize)

    def set_auto_capitalize(self, enabled: bool):
        self.capitalizer.set_enabled(enabled)

    # Bindable commands

    def show_previous(self):
        with self.capitalizer.suppressed():
            self.history.show_previous()

    def show_next(self):
        with self.capitalizer.suppressed():
            self.history.show_next()

    def show_first(self):
        with self.capitalizer.suppressed():
            self.history.show_first()

    def show_last(self):
        with self.capitalizer.suppressed():
            self.history.show_last()

    def toggle_case(self):
        self.capitalizer.toggle_case()

    def commands(self) -> Dict[str, Callable[[], None]]:
        """Command name → action, for a shortcut registry to bind."""
        return {
            CMD_SHOW_PREV: self.show_previous,
            CMD_SHOW_NEXT: self.show_next,
            CMD_SHOW_FIRST: self.show_first,
            CMD_SHOW_LAST: self.show_last,
            CMD_CHANGE_CASE: self.toggle_case,
        }

    # Editing

    def send(self) -> Optional[str]:
        """Record the buffer text as sent and clear the buffer.

        Returns the sent text, or None if the buffer was blank (the
        buffer is left untouched then).
        """
        text = self.buffer.text()
        if not text.strip():
            return None
        self.history.record_sent(text)
        self.clear_text()
        logger.debug("Sent message (%d chars)", len(text))
        return text

    def clear_text(self):
        with self.capitalizer.suppressed():
            self.buffer.set_text("")

    def undo(self) -> bool:
        with self.capitalizer.suppressed():
            return self.buffer.undo()

    def dispose(self):
        if self._disposed:
            return
        self._disposed = True
        self.capitalizer.detach()
        self.history.clear()
        if self.config is not None:
            self.config.remove_listener(self._on_option_changed)
