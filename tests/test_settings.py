import datetime
import json
import pathlib

from quern.settings import Settings


def test_missing_file_gives_defaults(tmp_path: pathlib.Path):
    settings = Settings.load(tmp_path / "nope.json")
    assert settings.auto_save
    assert settings.auto_save_interval == datetime.timedelta(seconds=30)
    assert settings.tab_width == 8
    assert settings.kill_ring_max == 60


def test_save_and_load(tmp_path: pathlib.Path):
    path = tmp_path / "settings.json"
    settings = Settings(_path=path, tab_width=4, auto_save_interval=datetime.timedelta(minutes=2), macros_path=tmp_path / "m.json")
    settings.save()
    raw = json.loads(path.read_text())
    assert raw["auto_save_interval"] == "2m"
    assert raw["macros_path"] == str(tmp_path / "m.json")
    assert "_path" not in raw

    loaded = Settings.load(path)
    assert loaded == settings


def test_interval_as_seconds(tmp_path: pathlib.Path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"auto_save_interval": 45, "show_line_numbers": True}))
    settings = Settings.load(path)
    assert settings.auto_save_interval == datetime.timedelta(seconds=45)
    assert settings.show_line_numbers


def test_values_are_clamped(tmp_path: pathlib.Path):
    settings = Settings(_path=tmp_path / "s.json", tab_width=40, auto_save_interval=datetime.timedelta(seconds=1), kill_ring_max=0)
    assert settings.tab_width == 16
    assert settings.auto_save_interval == datetime.timedelta(seconds=10)
    assert settings.kill_ring_max == 1


def test_unreadable_file_gives_defaults(tmp_path: pathlib.Path):
    path = tmp_path / "settings.json"
    path.write_text("{oops")
    assert Settings.load(path).tab_width == 8
    path.write_text(json.dumps({"tab_width": "wide"}))
    assert Settings.load(path).tab_width == 8


def test_for_test(tmp_path: pathlib.Path):
    settings = Settings.for_test(tmp_path)
    assert not settings.auto_save
    assert settings.macros_path == tmp_path / "test.macros.json"
