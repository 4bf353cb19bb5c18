"""Persistent application settings."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

CONFIG_VERSION = 3

_REPEAT_KINDS = ("Once", "EveryDay", "Custom")
_U8_MAX = 2**8 - 1
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_MISSING = object()


def _value(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key, default)
    if value is _MISSING:
        raise ValueError(f"missing field {key!r}")
    return value


def _int(data: Mapping[str, Any], key: str, maximum: int, default: Any = _MISSING) -> int:
    value = _value(data, key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an integer")
    if not 0 <= value <= maximum:
        raise ValueError(f"field {key!r} out of range: {value}")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _value(data, key, _MISSING)
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _bool(data: Mapping[str, Any], key: str, default: Any = _MISSING) -> bool:
    value = _value(data, key, default)
    if not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be a boolean")
    return value


def _list(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"field {key!r} must be a list")
    return value


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be a mapping")
    return value


@dataclass(frozen=True)
class PomodoroDefaults:
    work_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15


@dataclass(frozen=True)
class SavedClock:
    timezone: str
    city_name: str
    is_local: bool


@dataclass(frozen=True)
class SavedRepeatMode:
    """How an alarm repeats: "Once", "EveryDay" or "Custom" with day names."""

    kind: str = "Once"
    days: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.kind not in _REPEAT_KINDS:
            raise ValueError(f"unknown repeat mode {self.kind!r}")
        object.__setattr__(self, "days", tuple(self.days))

    def to_data(self) -> Any:
        if self.kind == "Custom":
            return {"Custom": list(self.days)}
        return self.kind

    @classmethod
    def from_data(cls, data: Any) -> SavedRepeatMode:
        if data in ("Once", "EveryDay"):
            return cls(data)
        if isinstance(data, Mapping) and set(data) == {"Custom"}:
            days = data["Custom"]
            if not isinstance(days, list) or not all(isinstance(d, str) for d in days):
                raise ValueError("custom repeat days must be a list of strings")
            return cls("Custom", tuple(days))
        raise ValueError(f"invalid repeat mode: {data!r}")


@dataclass(frozen=True)
class SavedAlarm:
    hour: int
    minute: int
    label: str
    is_enabled: bool
    repeat_mode: SavedRepeatMode
    sound: str
    snooze_minutes: int
    ring_minutes: int


@dataclass(frozen=True)
class SavedTimer:
    label: str
    duration_secs: int
    repeat_enabled: bool
    repeat_count: int
    sound: str


@dataclass(frozen=True)
class SavedPomodoro:
    label: str
    work_minutes: int
    short_break_minutes: int
    long_break_minutes: int
    sound: str


def _clock_from_dict(data: Any) -> SavedClock:
    data = _mapping(data, "world clock")
    return SavedClock(_str(data, "timezone"), _str(data, "city_name"), _bool(data, "is_local"))


def _alarm_to_dict(alarm: SavedAlarm) -> dict[str, Any]:
    return {
        "hour": alarm.hour,
        "minute": alarm.minute,
        "label": alarm.label,
        "is_enabled": alarm.is_enabled,
        "repeat_mode": alarm.repeat_mode.to_data(),
        "sound": alarm.sound,
        "snooze_minutes": alarm.snooze_minutes,
        "ring_minutes": alarm.ring_minutes,
    }


def _alarm_from_dict(data: Any) -> SavedAlarm:
    data = _mapping(data, "alarm")
    return SavedAlarm(
        hour=_int(data, "hour", _U8_MAX),
        minute=_int(data, "minute", _U8_MAX),
        label=_str(data, "label"),
        is_enabled=_bool(data, "is_enabled"),
        repeat_mode=SavedRepeatMode.from_data(_value(data, "repeat_mode", _MISSING)),
        sound=_str(data, "sound"),
        snooze_minutes=_int(data, "snooze_minutes", _U8_MAX),
        ring_minutes=_int(data, "ring_minutes", _U8_MAX),
    )


def _timer_from_dict(data: Any) -> SavedTimer:
    data = _mapping(data, "timer")
    return SavedTimer(
        label=_str(data, "label"),
        duration_secs=_int(data, "duration_secs", _U64_MAX),
        repeat_enabled=_bool(data, "repeat_enabled"),
        repeat_count=_int(data, "repeat_count", _U32_MAX),
        sound=_str(data, "sound"),
    )


def _pomodoro_from_dict(data: Any) -> SavedPomodoro:
    data = _mapping(data, "pomodoro")
    return SavedPomodoro(
        label=_str(data, "label"),
        work_minutes=_int(data, "work_minutes", _U32_MAX),
        short_break_minutes=_int(data, "short_break_minutes", _U32_MAX),
        long_break_minutes=_int(data, "long_break_minutes", _U32_MAX),
        sound=_str(data, "sound"),
    )


def _defaults_from_dict(data: Any) -> PomodoroDefaults:
    data = _mapping(data, "pomodoro defaults")
    return PomodoroDefaults(
        work_minutes=_int(data, "work_minutes", _U32_MAX),
        short_break_minutes=_int(data, "short_break_minutes", _U32_MAX),
        long_break_minutes=_int(data, "long_break_minutes", _U32_MAX),
    )


@dataclass
class Config:
    """Everything the application keeps between runs."""

    world_clocks: list[SavedClock] = field(default_factory=list)
    alarms: list[SavedAlarm] = field(default_factory=list)
    timers: list[SavedTimer] = field(default_factory=list)
    pomodoros: list[SavedPomodoro] = field(default_factory=list)
    pomodoro_defaults: PomodoroDefaults = field(default_factory=PomodoroDefaults)
    use_12h: bool = False
    confirm_delete_alarm: bool = True
    confirm_delete_timer: bool = True
    confirm_delete_world_clock: bool = True
    confirm_delete_pomodoro: bool = True
    confirm_clear_stopwatch: bool = True
    auto_sort_alarms: bool = False
    auto_sort_world_clocks: bool = False

    def to_dict(self) -> dict[str, Any]:
        defaults = self.pomodoro_defaults
        return {
            "world_clocks": [
                {"timezone": c.timezone, "city_name": c.city_name, "is_local": c.is_local}
                for c in self.world_clocks
            ],
            "alarms": [_alarm_to_dict(a) for a in self.alarms],
            "timers": [
                {
                    "label": t.label,
                    "duration_secs": t.duration_secs,
                    "repeat_enabled": t.repeat_enabled,
                    "repeat_count": t.repeat_count,
                    "sound": t.sound,
                }
                for t in self.timers
            ],
            "pomodoros": [
                {
                    "label": p.label,
                    "work_minutes": p.work_minutes,
                    "short_break_minutes": p.short_break_minutes,
                    "long_break_minutes": p.long_break_minutes,
                    "sound": p.sound,
                }
                for p in self.pomodoros
            ],
            "pomodoro_defaults": {
                "work_minutes": defaults.work_minutes,
                "short_break_minutes": defaults.short_break_minutes,
                "long_break_minutes": defaults.long_break_minutes,
            },
            "use_12h": self.use_12h,
            "confirm_delete_alarm": self.confirm_delete_alarm,
            "confirm_delete_timer": self.confirm_delete_timer,
            "confirm_delete_world_clock": self.confirm_delete_world_clock,
            "confirm_delete_pomodoro": self.confirm_delete_pomodoro,
            "confirm_clear_stopwatch": self.confirm_clear_stopwatch,
            "auto_sort_alarms": self.auto_sort_alarms,
            "auto_sort_world_clocks": self.auto_sort_world_clocks,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build a config; absent fields take their default values."""
        data = _mapping(data, "config")
        defaults = data.get("pomodoro_defaults")
        return cls(
            world_clocks=[_clock_from_dict(c) for c in _list(data, "world_clocks")],
            alarms=[_alarm_from_dict(a) for a in _list(data, "alarms")],
            timers=[_timer_from_dict(t) for t in _list(data, "timers")],
            pomodoros=[_pomodoro_from_dict(p) for p in _list(data, "pomodoros")],
            pomodoro_defaults=(
                PomodoroDefaults() if defaults is None else _defaults_from_dict(defaults)
            ),
            use_12h=_bool(data, "use_12h", False),
            confirm_delete_alarm=_bool(data, "confirm_delete_alarm", True),
            confirm_delete_timer=_bool(data, "confirm_delete_timer", True),
            confirm_delete_world_clock=_bool(data, "confirm_delete_world_clock", True),
            confirm_delete_pomodoro=_bool(data, "confirm_delete_pomodoro", True),
            confirm_clear_stopwatch=_bool(data, "confirm_clear_stopwatch", True),
            auto_sort_alarms=_bool(data, "auto_sort_alarms", False),
            auto_sort_world_clocks=_bool(data, "auto_sort_world_clocks", False),
        )


def load_config(path: str | os.PathLike) -> Config:
    """Read a config file; a missing file gives the default config."""
    path = Path(path)
    if not path.exists():
        return Config()
    return Config.from_dict(json.loads(path.read_text(encoding="utf-8")))


def save_config(config: Config, path: str | os.PathLike) -> None:
    """Write a config file atomically."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", delete=False
    ) as handle:
        json.dump(config.to_dict(), handle, indent=2)
        temp_name = handle.name
    try:
        os.replace(temp_name, path)
    except OSError:
        os.unlink(temp_name)
        raise