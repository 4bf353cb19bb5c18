"""Conversion between the saved config and the runtime alarm state."""

from __future__ import annotations

from dataclasses import replace

from .alarm import AlarmEntry, AlarmState, DayOfWeek, RepeatKind, RepeatMode
from .config import Config, SavedAlarm, SavedRepeatMode

LEGACY_DEFAULT_SOUND = "Default"
MIGRATED_SOUND = "Bell"

_DAYS_BY_SHORT_NAME = {day.short_name: day for day in DayOfWeek}


def migrate_sound(sound: str) -> str:
    """Replace the old "Default" sound name with "Bell"."""
    return MIGRATED_SOUND if sound == LEGACY_DEFAULT_SOUND else sound


def _saved_repeat_mode(mode: RepeatMode) -> SavedRepeatMode:
    if mode.kind is RepeatKind.ONCE:
        return SavedRepeatMode("Once")
    if mode.kind is RepeatKind.EVERY_DAY:
        return SavedRepeatMode("EveryDay")
    return SavedRepeatMode("Custom", tuple(day.short_name for day in mode.days))


def _runtime_repeat_mode(saved: SavedRepeatMode) -> RepeatMode:
    if saved.kind == "Once":
        return RepeatMode.once()
    if saved.kind == "EveryDay":
        return RepeatMode.every_day()
    # Unknown day names are dropped; a custom mode with no days left is one-off.
    days = [_DAYS_BY_SHORT_NAME[name] for name in saved.days if name in _DAYS_BY_SHORT_NAME]
    return RepeatMode.custom(days) if days else RepeatMode.once()


def alarms_to_saved(state: AlarmState) -> list[SavedAlarm]:
    """The alarms of ``state`` in the form they are stored, in list order."""
    return [
        SavedAlarm(
            hour=alarm.hour,
            minute=alarm.minute,
            label=alarm.label,
            is_enabled=alarm.is_enabled,
            repeat_mode=_saved_repeat_mode(alarm.repeat_mode),
            sound=alarm.sound,
            snooze_minutes=alarm.snooze_minutes,
            ring_minutes=alarm.ring_minutes,
        )
        for alarm in state.alarms
    ]


def restore_alarms(config: Config) -> AlarmState:
    """Alarm state rebuilt from a config; alarms are numbered from 1."""
    alarms = [
        AlarmEntry(
            id=number,
            hour=saved.hour,
            minute=saved.minute,
            label=saved.label,
            is_enabled=saved.is_enabled,
            repeat_mode=_runtime_repeat_mode(saved.repeat_mode),
            sound=migrate_sound(saved.sound),
            snooze_minutes=saved.snooze_minutes,
            ring_minutes=saved.ring_minutes,
        )
        for number, saved in enumerate(config.alarms, start=1)
    ]
    return AlarmState(alarms=alarms, next_id=len(alarms) + 1)


def build_config(state: AlarmState, base: Config | None = None) -> Config:
    """A config holding the alarms of ``state`` and every other setting of ``base``."""
    return replace(base if base is not None else Config(), alarms=alarms_to_saved(state))