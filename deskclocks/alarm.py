"""Alarms: entries, editing, scheduling, ringing and snoozing."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

DEFAULT_LABEL = "Alarm"
DEFAULT_SOUND = "Bell"
MIN_EDIT_MINUTES = 1
MAX_EDIT_MINUTES = 30


def _now(now: float | None) -> float:
    return time.monotonic() if now is None else now


class DayOfWeek(Enum):
    """Days of the week; the value is the English short name used in config."""

    MONDAY = "Mon"
    TUESDAY = "Tue"
    WEDNESDAY = "Wed"
    THURSDAY = "Thu"
    FRIDAY = "Fri"
    SATURDAY = "Sat"
    SUNDAY = "Sun"

    @property
    def short_name(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_short_name(cls, name: str) -> DayOfWeek:
        """Day for a short name such as ``"Mon"``; ValueError if unknown."""
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"unknown day name {name!r}") from None

    @classmethod
    def from_weekday(cls, weekday: int) -> DayOfWeek:
        """Day for ``date.weekday()`` numbering: Monday is 0, Sunday is 6."""
        if isinstance(weekday, bool) or not isinstance(weekday, int) or not 0 <= weekday <= 6:
            raise ValueError(f"weekday must be an integer from 0 to 6, not {weekday!r}")
        return list(cls)[weekday]


class RepeatKind(Enum):
    ONCE = "Once"
    EVERY_DAY = "EveryDay"
    CUSTOM = "Custom"


@dataclass(frozen=True)
class RepeatMode:
    """When an alarm repeats; ``days`` is used only for the custom kind."""

    kind: RepeatKind = RepeatKind.ONCE
    days: tuple[DayOfWeek, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "days", tuple(self.days))
        if self.kind is not RepeatKind.CUSTOM and self.days:
            raise ValueError("only a custom repeat mode has days")

    @classmethod
    def once(cls) -> RepeatMode:
        return cls(RepeatKind.ONCE)

    @classmethod
    def every_day(cls) -> RepeatMode:
        return cls(RepeatKind.EVERY_DAY)

    @classmethod
    def custom(cls, days: Iterable[DayOfWeek]) -> RepeatMode:
        return cls(RepeatKind.CUSTOM, tuple(days))

    def display_name(self) -> str:
        if self.kind is RepeatKind.ONCE:
            return "Once"
        if self.kind is RepeatKind.EVERY_DAY:
            return "Every day"
        return " ".join(day.display_name for day in self.days)

    def __str__(self) -> str:
        return self.display_name()


@dataclass
class AlarmEntry:
    id: int
    hour: int
    minute: int
    label: str
    is_enabled: bool = True
    repeat_mode: RepeatMode = field(default_factory=RepeatMode.once)
    sound: str = DEFAULT_SOUND
    snooze_minutes: int = 5
    ring_minutes: int = 1


@dataclass(frozen=True)
class AlarmTriggerInfo:
    """What is needed to ring an alarm that has just gone off."""

    alarm_id: int
    label: str
    sound: str
    ring_secs: int
    snooze_minutes: int


@dataclass
class RingingAlarm:
    alarm_id: int
    label: str
    sound: str
    ring_secs: int
    snooze_minutes: int
    started_at: float


@dataclass
class SnoozedAlarm:
    alarm_id: int
    label: str
    sound: str
    ring_minutes: int
    snooze_minutes: int
    retrigger_at: float


@dataclass
class AlarmEdit:
    """The alarm form; ``id`` is None for a new alarm."""

    id: int | None
    hour: int
    minute: int
    is_pm: bool
    label: str
    repeat_mode: RepeatMode
    sound: str
    snooze_minutes: int
    ring_minutes: int


def hour24_to_12(hour24: int) -> tuple[int, bool]:
    """Convert a 24-hour hour (0-23) to a 12-hour hour (1-12) and PM flag."""
    is_pm = hour24 >= 12
    if hour24 == 0:
        return 12, is_pm
    if hour24 <= 12:
        return hour24, is_pm
    return hour24 - 12, is_pm


def hour12_to_24(hour12: int, is_pm: bool) -> int:
    """Convert a 12-hour hour (1-12) and PM flag to a 24-hour hour (0-23)."""
    if hour12 == 12:
        return 12 if is_pm else 0
    return hour12 + 12 if is_pm else hour12


@dataclass
class AlarmState:
    """All alarms plus the form, ringing and snooze state of the alarm page."""

    alarms: list[AlarmEntry] = field(default_factory=list)
    next_id: int = 1
    editing: AlarmEdit | None = None
    last_triggered_minute: tuple[int, int] | None = None
    ringing: list[RingingAlarm] = field(default_factory=list)
    snoozed: list[SnoozedAlarm] = field(default_factory=list)
    edit_mode: bool = False
    dragging_index: int | None = None
    pre_drag_order: list[int] = field(default_factory=list)

    def _find(self, alarm_id: int) -> AlarmEntry | None:
        return next((a for a in self.alarms if a.id == alarm_id), None)

    # --- list actions ---

    def toggle_alarm(self, alarm_id: int) -> None:
        alarm = self._find(alarm_id)
        if alarm is not None:
            alarm.is_enabled = not alarm.is_enabled

    def delete_alarm(self, alarm_id: int) -> None:
        self.alarms = [a for a in self.alarms if a.id != alarm_id]

    # --- editing form ---

    def start_new_alarm(self) -> None:
        self.editing = AlarmEdit(
            id=None,
            hour=8,
            minute=0,
            is_pm=False,
            label="",
            repeat_mode=RepeatMode.once(),
            sound=DEFAULT_SOUND,
            snooze_minutes=5,
            ring_minutes=1,
        )

    def start_edit_alarm(self, alarm_id: int, use_12h: bool) -> None:
        alarm = self._find(alarm_id)
        if alarm is None:
            return
        hour, is_pm = hour24_to_12(alarm.hour) if use_12h else (alarm.hour, False)
        self.editing = AlarmEdit(
            id=alarm.id,
            hour=hour,
            minute=alarm.minute,
            is_pm=is_pm,
            label=alarm.label,
            repeat_mode=alarm.repeat_mode,
            sound=alarm.sound,
            snooze_minutes=alarm.snooze_minutes,
            ring_minutes=alarm.ring_minutes,
        )

    def cancel_edit(self) -> None:
        self.editing = None

    def save_alarm(self, use_12h: bool) -> AlarmEntry | None:
        """Apply the form; returns the created or updated alarm, if any."""
        edit, self.editing = self.editing, None
        if edit is None:
            return None
        hour = hour12_to_24(edit.hour, edit.is_pm) if use_12h else edit.hour
        if edit.id is not None:
            alarm = self._find(edit.id)
            if alarm is None:
                return None
            alarm.hour = hour
            alarm.minute = edit.minute
            alarm.label = edit.label
            alarm.repeat_mode = edit.repeat_mode
            alarm.sound = edit.sound
            alarm.snooze_minutes = edit.snooze_minutes
            alarm.ring_minutes = edit.ring_minutes
            return alarm
        alarm = AlarmEntry(
            id=self.next_id,
            hour=hour,
            minute=edit.minute,
            label=edit.label or DEFAULT_LABEL,
            is_enabled=True,
            repeat_mode=edit.repeat_mode,
            sound=edit.sound,
            snooze_minutes=edit.snooze_minutes,
            ring_minutes=edit.ring_minutes,
        )
        self.alarms.append(alarm)
        self.next_id += 1
        return alarm

    def increment_hour(self, use_12h: bool) -> None:
        if self.editing is None:
            return
        hour = self.editing.hour
        if use_12h:
            self.editing.hour = 1 if hour == 12 else hour + 1
        else:
            self.editing.hour = (hour + 1) % 24

    def decrement_hour(self, use_12h: bool) -> None:
        if self.editing is None:
            return
        hour = self.editing.hour
        if use_12h:
            self.editing.hour = 12 if hour == 1 else hour - 1
        else:
            self.editing.hour = 23 if hour == 0 else hour - 1

    def increment_minute(self) -> None:
        if self.editing is not None:
            self.editing.minute = (self.editing.minute + 1) % 60

    def decrement_minute(self) -> None:
        if self.editing is not None:
            minute = self.editing.minute
            self.editing.minute = 59 if minute == 0 else minute - 1

    def set_label(self, label: str) -> None:
        if self.editing is not None:
            self.editing.label = label

    def set_repeat_once(self) -> None:
        if self.editing is not None:
            self.editing.repeat_mode = RepeatMode.once()

    def set_repeat_every_day(self) -> None:
        if self.editing is not None:
            self.editing.repeat_mode = RepeatMode.every_day()

    def toggle_day(self, day: DayOfWeek) -> None:
        """Add or remove a day; removing the last one makes the alarm one-off."""
        if self.editing is None:
            return
        mode = self.editing.repeat_mode
        if mode.kind is not RepeatKind.CUSTOM:
            self.editing.repeat_mode = RepeatMode.custom([day])
            return
        if day in mode.days:
            days = list(mode.days)
            days.remove(day)
            self.editing.repeat_mode = RepeatMode.custom(days) if days else RepeatMode.once()
        else:
            self.editing.repeat_mode = RepeatMode.custom(mode.days + (day,))

    def set_sound(self, sound: str) -> None:
        if self.editing is not None:
            self.editing.sound = sound

    def set_snooze_minutes(self, minutes: int) -> None:
        if self.editing is not None:
            self.editing.snooze_minutes = min(max(minutes, MIN_EDIT_MINUTES), MAX_EDIT_MINUTES)

    def set_ring_minutes(self, minutes: int) -> None:
        if self.editing is not None:
            self.editing.ring_minutes = min(max(minutes, MIN_EDIT_MINUTES), MAX_EDIT_MINUTES)

    def set_pm(self, is_pm: bool) -> None:
        if self.editing is not None:
            self.editing.is_pm = is_pm

    # --- reordering ---

    def toggle_edit_mode(self) -> None:
        self.edit_mode = not self.edit_mode
        self.dragging_index = None
        self.pre_drag_order.clear()

    def start_drag(self, index: int) -> None:
        self.pre_drag_order = [a.id for a in self.alarms]
        self.dragging_index = index

    def reorder(self, src: int, dst: int) -> None:
        count = len(self.alarms)
        if 0 <= src < count and 0 <= dst < count and src != dst:
            self.alarms.insert(dst, self.alarms.pop(src))
            self.dragging_index = dst

    def finish_drag(self) -> None:
        self.dragging_index = None
        self.pre_drag_order.clear()

    def cancel_drag(self) -> None:
        """Restore the order from before the drag began."""
        if self.pre_drag_order:
            by_id = {a.id: a for a in self.alarms}
            restored = [by_id.pop(i) for i in self.pre_drag_order if i in by_id]
            restored.extend(a for a in self.alarms if a.id in by_id)
            self.alarms = restored
        self.dragging_index = None
        self.pre_drag_order.clear()

    # --- ringing and snoozing ---

    def snooze(self, alarm_id: int, now: float | None = None) -> None:
        ringing = next((r for r in self.ringing if r.alarm_id == alarm_id), None)
        if ringing is None:
            return
        self.ringing.remove(ringing)
        self.snoozed.append(
            SnoozedAlarm(
                alarm_id=ringing.alarm_id,
                label=ringing.label,
                sound=ringing.sound,
                ring_minutes=max(ringing.ring_secs // 60, 1),
                snooze_minutes=ringing.snooze_minutes,
                retrigger_at=_now(now) + ringing.snooze_minutes * 60,
            )
        )

    def dismiss(self, alarm_id: int) -> None:
        self.ringing = [r for r in self.ringing if r.alarm_id != alarm_id]

    def check_triggers(
        self, hour: int, minute: int, weekday: DayOfWeek | int
    ) -> list[AlarmTriggerInfo]:
        """Alarms due at this minute; each minute is checked only once.

        One-off alarms are disabled when they go off.
        """
        current = (hour, minute)
        if self.last_triggered_minute == current:
            return []
        self.last_triggered_minute = current
        day = weekday if isinstance(weekday, DayOfWeek) else DayOfWeek.from_weekday(weekday)

        triggered = []
        for alarm in self.alarms:
            if not alarm.is_enabled or (alarm.hour, alarm.minute) != current:
                continue
            mode = alarm.repeat_mode
            if mode.kind is RepeatKind.CUSTOM and day not in mode.days:
                continue
            triggered.append(
                AlarmTriggerInfo(
                    alarm_id=alarm.id,
                    label=alarm.label,
                    sound=alarm.sound,
                    ring_secs=alarm.ring_minutes * 60,
                    snooze_minutes=alarm.snooze_minutes,
                )
            )
            if mode == RepeatMode.once():
                alarm.is_enabled = False
        return triggered

    def check_snoozed(self, now: float | None = None) -> list[AlarmTriggerInfo]:
        """Remove and return the snoozed alarms whose snooze has run out."""
        moment = _now(now)
        due = [s for s in self.snoozed if moment >= s.retrigger_at]
        self.snoozed = [s for s in self.snoozed if moment < s.retrigger_at]
        return [
            AlarmTriggerInfo(
                alarm_id=s.alarm_id,
                label=s.label,
                sound=s.sound,
                ring_secs=s.ring_minutes * 60,
                snooze_minutes=s.snooze_minutes,
            )
            for s in due
        ]

    def check_ring_expired(self, now: float | None = None) -> list[int]:
        """Ids of ringing alarms that have rung their full duration."""
        moment = _now(now)
        return [
            r.alarm_id
            for r in self.ringing
            if int(max(moment - r.started_at, 0.0)) >= r.ring_secs
        ]

    def start_ringing(self, info: AlarmTriggerInfo, now: float | None = None) -> None:
        """Start ringing an alarm unless it is already ringing."""
        if any(r.alarm_id == info.alarm_id for r in self.ringing):
            return
        self.ringing.append(
            RingingAlarm(
                alarm_id=info.alarm_id,
                label=info.label,
                sound=info.sound,
                ring_secs=info.ring_secs,
                snooze_minutes=info.snooze_minutes,
                started_at=_now(now),
            )
        )