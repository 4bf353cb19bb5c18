"""Presentation of the alarm page: list rows, header actions and form fields."""

from __future__ import annotations

from dataclasses import dataclass

from .alarm import AlarmEdit, AlarmEntry, AlarmState, DayOfWeek, RepeatKind, hour24_to_12

TITLE = "Alarms"
CREATE_ALARM = "Create alarm"
AM = "AM"
PM = "PM"
PLACEHOLDER_LINE = "-" * 24
DRAG_HANDLE = "≡"
DELETE_MARK = "[x]"
CHEVRON = ">"


@dataclass(frozen=True)
class AlarmRow:
    """One row of the alarm list as it is shown.

    In edit mode rows carry a delete button and, when the order is manual,
    a drag handle; the row being dragged collapses to a drop indicator.
    """

    alarm_id: int
    label: str
    time: str
    repeat: str
    is_enabled: bool
    deletable: bool = False
    drag_handle: bool = False
    drop_indicator: bool = False


@dataclass(frozen=True)
class DayToggle:
    """A day button in the alarm form."""

    day: DayOfWeek
    label: str
    selected: bool


def format_alarm_time(alarm: AlarmEntry, use_12h: bool) -> str:
    """Alarm time as ``HH:MM`` or, in 12-hour mode, ``HH:MM AM``/``PM``."""
    if use_12h:
        hour, is_pm = hour24_to_12(alarm.hour)
        return f"{hour:02}:{alarm.minute:02} {PM if is_pm else AM}"
    return f"{alarm.hour:02}:{alarm.minute:02}"


def alarm_rows(state: AlarmState, use_12h: bool, auto_sort: bool) -> list[AlarmRow]:
    """Rows for every alarm, in list order, for the current mode."""
    editing = state.edit_mode
    dragging = None if (auto_sort or not editing) else state.dragging_index
    rows = []
    for index, alarm in enumerate(state.alarms):
        rows.append(
            AlarmRow(
                alarm_id=alarm.id,
                label=alarm.label,
                time=format_alarm_time(alarm, use_12h),
                repeat=str(alarm.repeat_mode),
                is_enabled=alarm.is_enabled,
                deletable=editing,
                drag_handle=editing and not auto_sort,
                drop_indicator=dragging == index,
            )
        )
    return rows


def header_actions(state: AlarmState) -> tuple[str, ...]:
    """Buttons in the page header: edit or done (when there are alarms), then add."""
    if not state.alarms:
        return ("add",)
    return ("done" if state.edit_mode else "edit", "add")


def day_toggles(edit: AlarmEdit) -> list[DayToggle]:
    """A toggle for each day of the week, marking the days the form repeats on."""
    mode = edit.repeat_mode
    selected = set(mode.days) if mode.kind is RepeatKind.CUSTOM else set()
    return [DayToggle(day, day.display_name, day in selected) for day in DayOfWeek]


def time_fields(edit: AlarmEdit) -> tuple[str, str]:
    """The hour and minute shown in the form, each as two digits."""
    return f"{edit.hour:02}", f"{edit.minute:02}"


def _render_row(row: AlarmRow) -> str:
    if row.drop_indicator:
        return PLACEHOLDER_LINE
    parts = []
    if row.drag_handle:
        parts.append(DRAG_HANDLE)
    parts.extend((row.time, row.label, f"({row.repeat})"))
    if row.deletable:
        parts.append(DELETE_MARK)
    else:
        parts.extend(("on" if row.is_enabled else "off", CHEVRON))
    return "  ".join(parts)


def render_alarm_list(state: AlarmState, use_12h: bool, auto_sort: bool) -> str:
    """The alarm page as plain text: header, then rows or the empty state."""
    actions = " ".join(f"[{action}]" for action in header_actions(state))
    lines = [f"{TITLE}  {actions}"]
    rows = alarm_rows(state, use_12h, auto_sort)
    if not rows:
        lines.append(f"[{CREATE_ALARM}]")
    else:
        lines.extend(_render_row(row) for row in rows)
    return "\n".join(lines)