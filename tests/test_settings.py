"""Persisted settings record."""

import json

from chordface.config import FaceConfig
from chordface.settings import SETTINGS_VERSION, SettingsStore


def test_missing_file_gives_defaults(tmp_path):
    store = SettingsStore(tmp_path / "missing.json")
    assert store.load() == FaceConfig()


def test_save_then_load(tmp_path):
    path = tmp_path / "sub" / "settings.json"
    store = SettingsStore(path)
    cfg = FaceConfig(vertex_count=24, vertex_shift=5, background_color=0x000000)
    store.save(cfg)

    assert SettingsStore(path).load() == cfg
    record = json.loads(path.read_text())
    assert record["version"] == SETTINGS_VERSION
    assert record["vertex_count"] == 24
    # no temp files left behind
    assert [p.name for p in path.parent.iterdir()] == ["settings.json"]


def test_save_overwrites_previous_record(tmp_path):
    store = SettingsStore(tmp_path / "s.json")
    store.save(FaceConfig(vertex_count=24))
    store.save(FaceConfig(vertex_count=36))
    assert store.load().vertex_count == 36


def test_corrupt_json_gives_defaults(tmp_path):
    path = tmp_path / "s.json"
    path.write_text("{not json")
    assert SettingsStore(path).load() == FaceConfig()


def test_invalid_record_gives_defaults(tmp_path):
    path = tmp_path / "s.json"
    record = {"version": SETTINGS_VERSION, **FaceConfig().to_dict(), "vertex_count": 1}
    path.write_text(json.dumps(record))
    assert SettingsStore(path).load() == FaceConfig()


def test_incomplete_record_gives_defaults(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({"version": SETTINGS_VERSION, "vertex_count": 24}))
    assert SettingsStore(path).load() == FaceConfig()


def test_wrong_version_or_shape_gives_defaults(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({**FaceConfig(vertex_count=24).to_dict(), "version": 99}))
    assert SettingsStore(path).load() == FaceConfig()

    path.write_text(json.dumps([1, 2, 3]))
    assert SettingsStore(path).load() == FaceConfig()
