import json

from services import preferences
from domain.constants import PREF_SIDEBAR_COLLAPSED, PREF_COURSE_TABLE_MINIMIZED


def test_toggle_persists_and_restores(tmp_path, monkeypatch):
    monkeypatch.setattr(preferences, "DATA_DIR", str(tmp_path))
    assert preferences.load(PREF_SIDEBAR_COLLAPSED) is False

    assert preferences.toggle(PREF_SIDEBAR_COLLAPSED) is True
    # a fresh read from disk sees the stored value
    assert preferences.load_all() == {PREF_SIDEBAR_COLLAPSED: True}

    assert preferences.toggle(PREF_SIDEBAR_COLLAPSED) is False
    assert preferences.load(PREF_SIDEBAR_COLLAPSED) is False


def test_flags_are_independent(tmp_path, monkeypatch):
    monkeypatch.setattr(preferences, "DATA_DIR", str(tmp_path))
    preferences.toggle(PREF_COURSE_TABLE_MINIMIZED)
    assert preferences.load(PREF_COURSE_TABLE_MINIMIZED) is True
    assert preferences.load(PREF_SIDEBAR_COLLAPSED) is False


def test_corrupt_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setattr(preferences, "DATA_DIR", str(tmp_path))
    (tmp_path / preferences.PREFS_FILE).write_text("{not json", encoding="utf-8")
    assert preferences.load_all() == {}
    preferences.save(PREF_SIDEBAR_COLLAPSED, True)
    with open(tmp_path / preferences.PREFS_FILE, encoding="utf-8") as f:
        assert json.load(f) == {PREF_SIDEBAR_COLLAPSED: True}


def test_atomic_write_leaves_no_temp_files(tmp_path, monkeypatch):
    monkeypatch.setattr(preferences, "DATA_DIR", str(tmp_path / "nested"))
    preferences.save("x", 1)
    files = [p.name for p in (tmp_path / "nested").iterdir()]
    assert files == [preferences.PREFS_FILE]
