import dataclasses
import datetime
import json
import logging
import pathlib
import typing

import cattrs

from .durations import format_duration, parse_duration

logger = logging.getLogger(__name__)

CONFIG_DIR = pathlib.Path("~/.config/quern").expanduser()
DEFAULT_SETTINGS_PATH = CONFIG_DIR / "settings.json"
DEFAULT_MACROS_PATH = CONFIG_DIR / "macros.json"

MIN_AUTO_SAVE_INTERVAL = datetime.timedelta(seconds=10)
TAB_WIDTH_RANGE = (1, 16)


def timedelta_seconds(seconds: datetime.timedelta | int | str) -> datetime.timedelta:
    if isinstance(seconds, datetime.timedelta):
        return seconds
    if isinstance(seconds, int):
        return datetime.timedelta(seconds=seconds)
    return parse_duration(seconds)


settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(datetime.timedelta, format_duration)
settings_converter.register_structure_hook(datetime.timedelta, lambda d, _: timedelta_seconds(d))
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v).expanduser())


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    auto_save: bool = True
    auto_save_interval: datetime.timedelta = datetime.timedelta(seconds=30)
    tab_width: int = 8
    show_line_numbers: bool = False
    warn_unsaved: bool = True
    kill_ring_max: int = 60
    macros_path: pathlib.Path = DEFAULT_MACROS_PATH

    def __post_init__(self):
        if self.auto_save_interval < MIN_AUTO_SAVE_INTERVAL:
            self.auto_save_interval = MIN_AUTO_SAVE_INTERVAL
        low, high = TAB_WIDTH_RANGE
        self.tab_width = min(max(self.tab_width, low), high)
        self.kill_ring_max = max(self.kill_ring_max, 1)

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("w") as out:
            json.dump(raw, out, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path = DEFAULT_SETTINGS_PATH):
        if not src.exists():
            logger.debug("No settings file at %s; using defaults", src)
            return cls(_path=src)
        try:
            with src.open() as f:
                raw = json.load(f)
            raw["_path"] = src
            return settings_converter.structure(raw, cls)
        except (ValueError, cattrs.BaseValidationError) as e:
            logger.warning("Unable to read settings from %s (%s); using defaults", src, e)
            return cls(_path=src)

    @classmethod
    def for_test(cls, tmp_path: typing.Optional[pathlib.Path] = None):
        base = pathlib.Path(".") if tmp_path is None else tmp_path
        return settings_converter.structure(
            {
                "_path": str(base / "test.settings.json"),
                "auto_save": False,
                "auto_save_interval": "30s",
                "macros_path": str(base / "test.macros.json"),
            },
            cls,
        )


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
