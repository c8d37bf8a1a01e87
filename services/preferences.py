"""Small persisted UI preferences (sidebar collapsed, table minimized).

Each flag has exactly one owning component. Values live in a single JSON
document under the configured preferences directory.
"""
import json
import os
import tempfile
import shutil
import logging
from typing import Any, Dict

from config import settings

PREFS_FILE = 'ui_preferences.json'
DATA_DIR = os.path.normpath(settings.preferences_dir)

logger = logging.getLogger(__name__)


def _path() -> str:
    return os.path.join(DATA_DIR, PREFS_FILE)


def load_all() -> Dict[str, Any]:
    file_path = _path()
    if not os.path.exists(file_path):
        return {}
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable preferences file %s: %s", file_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def atomic_write(data: Dict[str, Any]):
    file_path = _path()
    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(
        prefix='tmp_', suffix='.json', dir=os.path.dirname(file_path))
    with os.fdopen(tmp_fd, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    shutil.move(tmp_path, file_path)


def load(key: str, default: Any = False) -> Any:
    return load_all().get(key, default)


def save(key: str, value: Any):
    data = load_all()
    data[key] = value
    atomic_write(data)


def toggle(key: str) -> bool:
    """Flip a boolean preference, persist it and return the new value."""
    new_value = not bool(load(key, False))
    save(key, new_value)
    return new_value
