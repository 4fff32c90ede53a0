"""Configuration management — JSON-based, stored in ~/.config/msgcompose/."""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CMD_SHOW_PREV = "chat.show-messagePrev"
CMD_SHOW_NEXT = "chat.show-messageNext"
CMD_SHOW_FIRST = "chat.show-messageFirst"
CMD_SHOW_LAST = "chat.show-messageLast"
CMD_CHANGE_CASE = "chat.change-case"

DEFAULT_SHORTCUTS = {
    CMD_SHOW_PREV: "Ctrl+Up",
    CMD_SHOW_NEXT: "Ctrl+Down",
    CMD_SHOW_FIRST: "Ctrl+PgUp",
    CMD_SHOW_LAST: "Ctrl+PgDown",
    CMD_CHANGE_CASE: "Ctrl+Shift+K",
}

DEFAULT_CONFIG = {
    "auto_capitalize": True,
    "max_message_history": 50,
    "shortcuts": dict(DEFAULT_SHORTCUTS),
    "debug_logging": False,
}

CONFIG_DIR = Path.home() / ".config" / "msgcompose"
CONFIG_FILE = CONFIG_DIR / "config.json"


class Config:
    def __init__(self, path=None):
        self._path = Path(path) if path is not None else CONFIG_FILE
        self._data = json.loads(json.dumps(DEFAULT_CONFIG))
        self._listeners = []
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    def load(self):
        if self._path.exists():
            try:
                with open(self._path, "r") as f:
                    stored = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self._path, e)
                return
            if not isinstance(stored, dict):
                logger.warning("Ignoring config %s: not a JSON object", self._path)
                return
            shortcuts = stored.pop("shortcuts", None)
            self._data.update(stored)
            if isinstance(shortcuts, dict):
                self._data["shortcuts"].update(shortcuts)

    def save(self):
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def add_listener(self, listener):
        """listener(key) is called after an option is changed."""
        self._listeners.append(listener)

    def remove_listener(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self.save()
        for listener in list(self._listeners):
            listener(key)

    def _typed(self, key, kind):
        value = self._data.get(key)
        if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
            logger.warning("Config %s has invalid value %r, using default", key, value)
            return DEFAULT_CONFIG[key]
        return value

    @property
    def auto_capitalize(self) -> bool:
        return self._typed("auto_capitalize", bool)

    @auto_capitalize.setter
    def auto_capitalize(self, val):
        self.set("auto_capitalize", bool(val))

    @property
    def max_message_history(self) -> int:
        return max(1, self._typed("max_message_history", int))

    @property
    def debug_logging(self) -> bool:
        return self._typed("debug_logging", bool)

    def shortcut(self, command: str) -> str:
        shortcuts = self._data.get("shortcuts")
        if not isinstance(shortcuts, dict):
            shortcuts = DEFAULT_SHORTCUTS
        return shortcuts.get(command, DEFAULT_SHORTCUTS.get(command, ""))

    def set_shortcut(self, command: str, sequence: str):
        shortcuts = dict(self._data.get("shortcuts") or {})
        shortcuts[command] = sequence
        self.set("shortcuts", shortcuts)
