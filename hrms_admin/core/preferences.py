"""UI preferences persisted through a swappable key/value store."""
import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from hrms_admin.core.logging_config import get_logger

logger = get_logger(__name__)

SIDEBAR_COLLAPSED_KEY = "sidebar_collapsed"
APPRAISAL_SEARCH_TERM_KEY = "appraisal_search_term"


class KeyValueStore(ABC):
    """String key/value persistence; last write wins."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """Keeps all keys in one JSON object on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class Preferences:
    """
    The two persisted console preferences.

    - sidebar_collapsed: stored as a JSON boolean
    - appraisal_search_term: stored as a plain string
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    @property
    def sidebar_collapsed(self) -> bool:
        raw = self.store.get(SIDEBAR_COLLAPSED_KEY)
        if raw is None:
            return False
        try:
            return json.loads(raw) is True
        except json.JSONDecodeError:
            return False

    @sidebar_collapsed.setter
    def sidebar_collapsed(self, value: bool) -> None:
        self.store.set(SIDEBAR_COLLAPSED_KEY, json.dumps(bool(value)))

    @property
    def appraisal_search_term(self) -> str:
        return self.store.get(APPRAISAL_SEARCH_TERM_KEY) or ""

    @appraisal_search_term.setter
    def appraisal_search_term(self, value: str) -> None:
        self.store.set(APPRAISAL_SEARCH_TERM_KEY, value or "")

    def as_dict(self) -> Dict[str, object]:
        return {
            SIDEBAR_COLLAPSED_KEY: self.sidebar_collapsed,
            APPRAISAL_SEARCH_TERM_KEY: self.appraisal_search_term,
        }


def build_store(preferences_file: Optional[str]) -> KeyValueStore:
    """File-backed store when a path is configured, otherwise in-memory."""
    if preferences_file:
        return JsonFileStore(Path(preferences_file))
    return InMemoryStore()
