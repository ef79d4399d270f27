import json
import logging
from pathlib import Path

from burmafoodie.schemas.chat import ChatMessage

logger = logging.getLogger("burmafoodie")

HISTORY_KEY = "chatHistory"


class LocalStorage:
    """Keyed string records kept in one JSON file on disk."""

    def __init__(self, path: Path | str):
        self._path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self._path} is not a JSON object")
        return data

    def _write(self, data: dict[str, str]):
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self._path)

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str):
        try:
            data = self._read()
        except ValueError:
            logger.warning("Overwriting unreadable storage file %s", self._path)
            data = {}
        data[key] = value
        self._write(data)

    def remove_item(self, key: str):
        try:
            data = self._read()
        except ValueError:
            data = {}
        if key in data:
            del data[key]
            self._write(data)


def sanitize_history(history: list[ChatMessage]) -> list[dict]:
    """Persistable copy: no loading placeholders, no image payloads."""
    return [msg.to_storage() for msg in history if not msg.is_loading]


def save_history(storage: LocalStorage, history: list[ChatMessage]):
    entries = sanitize_history(history)
    if entries:
        storage.set_item(HISTORY_KEY, json.dumps(entries, ensure_ascii=False))
    else:
        storage.remove_item(HISTORY_KEY)


def load_history(storage: LocalStorage) -> list[ChatMessage]:
    """Saved history, or an empty list if it is missing or unreadable."""
    try:
        raw = storage.get_item(HISTORY_KEY)
        if not raw:
            return []
        entries = json.loads(raw)
        history = []
        for entry in entries:
            entry = {k: v for k, v in entry.items() if k != "image"}
            if entry.get("isLoading"):
                continue
            history.append(ChatMessage.model_validate(entry))
        return history
    except Exception as e:
        logger.error("Failed to load chat history, starting empty: %s", e)
        return []
