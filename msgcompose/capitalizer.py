"""Auto-capitalization — uppercases the first letter typed after a sentence end."""
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

TERMINATORS = '!?'
PERIOD = '.'


def ends_sentence(text: str, pos: int) -> bool:
    """True if a sentence boundary in text ends exactly at pos.

    A boundary is a whitespace run preceded by one of:
      * '!' or '?'
      * one or more periods after at least two non-period characters
      * one or more periods after a single non-period character that
        opens the text ("a. ")

    Runs of periods count like a single one, so "Wait... no" behaves like
    "Wait. no". A lone character between periods ("e.g. ") is treated as
    an abbreviation.
    """
    i = min(pos, len(text)) - 1

    # whitespace run
    ws_start = i
    while i >= 0 and text[i].isspace():
        i -= 1
    if i == ws_start:
        return False
    if i < 0:
        return False

    if text[i] in TERMINATORS:
        return True

    # period run
    period_end = i
    while i >= 0 and text[i] == PERIOD:
        i -= 1
    if i == period_end:
        return False

    # non-period characters before the periods, whitespace included
    before = 0
    while i >= 0 and text[i] != PERIOD and before < 2:
        before += 1
        i -= 1
    if before >= 2:
        return True
    return before == 1 and i < 0


class CapitalizationEngine:
    """Watches buffer edits and capitalizes letters that start a sentence.

    Only live typing at the end of the buffer is considered: a mid-text
    edit or a multi-character paste is left alone. All rewrites the engine
    makes itself go through replace_char() inside a suppressed region, so
    the change notifications they trigger are ignored.
    """

    def __init__(self, buffer, enabled: bool = True):
        self._buffer = buffer
        self._enabled = enabled
        self._suppressed = 0
        self._attached = False

    def attach(self):
        if not self._attached:
            self._buffer.add_listener(self.on_buffer_changed)
            self._attached = True

    def detach(self):
        if self._attached:
            self._buffer.remove_listener(self.on_buffer_changed)
            self._attached = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, val: bool):
        self.set_enabled(val)

    def set_enabled(self, enabled: bool):
        enabled = bool(enabled)
        if enabled != self._enabled:
            logger.info("Auto-capitalization %s", "enabled" if enabled else "disabled")
        self._enabled = enabled

    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def is_suppressed(self) -> bool:
        return self._suppressed > 0

    @contextmanager
    def suppressed(self):
        """Ignore buffer notifications for the duration of the block."""
        self._suppressed += 1
        try:
            yield
        finally:
            self._suppressed -= 1

    def on_buffer_changed(self, position: int, chars_removed: int, chars_added: int):
        if not self._enabled or self._suppressed:
            return
        if chars_added == 0:
            return
        # Edit in the middle of the text
        if not self._buffer.at_end():
            return

        if position == 0 and chars_added < 3:
            # first letter after the previous message was sent
            capitalize = True
        elif chars_added > 1:
            # pasted text keeps its own casing
            return
        else:
            capitalize = ends_sentence(self._buffer.text(), position)

        if not capitalize:
            return

        char = self._buffer.char_at(position)
        if not char.isalpha() or not char.islower():
            return
        logger.debug("Capitalizing %r at %d", char, position)
        self._change_char(position, char.upper())

    def toggle_case(self):
        """Swap the case of every letter in the selection (or the whole text).

        The cursor position is restored afterwards; the selection is not.
        """
        buf = self._buffer
        pos = buf.cursor_position()
        begin, end = buf.selection() or (0, buf.length())

        changed = 0
        with self.suppressed():
            for i in range(begin, end):
                char = buf.char_at(i)
                if not char.isalpha():
                    continue
                if char.islower():
                    self._change_char(i, char.upper())
                else:
                    self._change_char(i, char.lower())
                changed += 1
            buf.set_cursor_position(pos)
        logger.debug("Toggled case of %d letters in [%d, %d)", changed, begin, end)

    def _change_char(self, pos: int, char: str):
        # 'ß'.upper() == 'SS': a case change must not alter the length
        if len(char) != 1:
            return
        with self.suppressed():
            self._buffer.replace_char(pos, char)
