"""Chat message editor widget (Qt)."""
import logging

from PyQt5.QtWidgets import QTextEdit, QAction
from PyQt5.QtGui import QKeySequence, QTextOption
from PyQt5.QtCore import Qt, QEvent, pyqtSignal

from msgcompose.composer import ComposerState
from msgcompose.qt_buffer import QtTextBuffer

logger = logging.getLogger(__name__)


class ChatEdit(QTextEdit):
    """Plain-text message composer with history recall and auto-capitalization.

    Enter sends, Shift+Enter inserts a newline, Ctrl+U wipes the text.
    While a recalled message is shown over a saved draft the widget's
    "correction" property is True, so a stylesheet can use
    ChatEdit[correction="true"] to tint the background.
    """

    messageSent = pyqtSignal(str)

    def __init__(self, config=None, parent=None):
        super().__init__(parent)
        self.config = config

        self.setWordWrapMode(QTextOption.WordWrap)
        self.setAcceptRichText(False)
        self.setReadOnly(False)
        self.setUndoRedoEnabled(True)
        self.setMinimumHeight(48)
        self.setProperty("correction", False)

        self._buffer = QtTextBuffer(self)
        self.composer = ComposerState(
            self._buffer,
            config=config,
            on_correction_changed=self._update_background,
        )
        self._actions = {}
        self._init_actions()

    def _init_actions(self):
        for command, handler in self.composer.commands().items():
            action = QAction(self)
            action.setObjectName(command)
            action.setShortcutContext(Qt.WidgetShortcut)
            action.triggered.connect(handler)
            self.addAction(action)
            self._actions[command] = action
        self.set_shortcuts()

    def set_shortcuts(self):
        if self.config is None:
            return
        for command, action in self._actions.items():
            action.setShortcut(QKeySequence(self.config.shortcut(command)))

    def action(self, command: str) -> QAction:
        return self._actions[command]

    def event(self, event):
        # Text controls grab key events before shortcuts get a chance
        if event.type() == QEvent.ShortcutOverride:
            return False
        return super().event(event)

    def keyPressEvent(self, e):
        if e.key() == Qt.Key_U and (e.modifiers() & Qt.ControlModifier):
            self.composer.clear_text()
        elif e.key() in (Qt.Key_Return, Qt.Key_Enter) and not (e.modifiers() & Qt.ShiftModifier):
            self.send()
        else:
            super().keyPressEvent(e)

    def send(self):
        text = self.composer.send()
        if text is not None:
            self.messageSent.emit(text)

    def _update_background(self, correction: bool):
        self.setProperty("correction", correction)
        self.style().unpolish(self)
        self.style().polish(self)
        self.update()

    def dispose(self):
        self.composer.dispose()
        self._buffer.close()
