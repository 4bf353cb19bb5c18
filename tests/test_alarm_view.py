import pytest

from deskclocks.alarm import AlarmEntry, AlarmState, DayOfWeek, RepeatMode
from deskclocks.alarm_view import (
    AlarmRow,
    DayToggle,
    alarm_rows,
    day_toggles,
    format_alarm_time,
    header_actions,
    render_alarm_list,
    time_fields,
)


def _state(*alarms, edit_mode=False):
    state = AlarmState(alarms=list(alarms), next_id=len(alarms) + 1)
    state.edit_mode = edit_mode
    return state


def _alarm(alarm_id, hour, minute, label="Wake", **kwargs):
    return AlarmEntry(id=alarm_id, hour=hour, minute=minute, label=label, **kwargs)


def test_format_24h():
    assert format_alarm_time(_alarm(1, 7, 5), False) == "07:05"


@pytest.mark.parametrize(
    "hour,expected",
    [(0, "12:00 AM"), (12, "12:00 PM"), (19, "07:00 PM")],
)
def test_format_12h(hour, expected):
    assert format_alarm_time(_alarm(1, hour, 0), True) == expected


def test_format_12h_marks_period_consistently():
    for hour in range(24):
        text = format_alarm_time(_alarm(1, hour, 30), True)
        assert text.endswith("PM" if hour >= 12 else "AM")
        assert text.startswith(format_alarm_time(_alarm(1, hour, 30), True)[:2])


def test_list_mode_rows():
    state = _state(_alarm(1, 6, 0, "A"), _alarm(2, 9, 15, "B", is_enabled=False))
    rows = alarm_rows(state, False, False)
    assert [r.alarm_id for r in rows] == [1, 2]
    assert [r.label for r in rows] == ["A", "B"]
    assert [r.is_enabled for r in rows] == [True, False]
    assert not any(r.deletable or r.drag_handle or r.drop_indicator for r in rows)


def test_edit_mode_rows_have_handles_when_manual():
    state = _state(_alarm(1, 6, 0), _alarm(2, 7, 0), edit_mode=True)
    rows = alarm_rows(state, False, False)
    assert all(r.deletable and r.drag_handle for r in rows)


def test_edit_mode_auto_sort_hides_handles_and_indicator():
    state = _state(_alarm(1, 6, 0), _alarm(2, 7, 0), edit_mode=True)
    state.dragging_index = 0
    rows = alarm_rows(state, False, True)
    assert all(r.deletable for r in rows)
    assert not any(r.drag_handle or r.drop_indicator for r in rows)


def test_dragged_row_becomes_indicator():
    state = _state(_alarm(1, 6, 0), _alarm(2, 7, 0), edit_mode=True)
    state.dragging_index = 1
    rows = alarm_rows(state, False, False)
    assert [r.drop_indicator for r in rows] == [False, True]


def test_row_repeat_text_matches_mode():
    mode = RepeatMode.custom([DayOfWeek.MONDAY, DayOfWeek.FRIDAY])
    state = _state(_alarm(1, 6, 0, repeat_mode=mode))
    (row,) = alarm_rows(state, False, False)
    assert row.repeat == mode.display_name()


def test_header_actions():
    assert header_actions(_state()) == ("add",)
    assert header_actions(_state(_alarm(1, 1, 1))) == ("edit", "add")
    assert header_actions(_state(_alarm(1, 1, 1), edit_mode=True)) == ("done", "add")


def test_day_toggles_follow_custom_days():
    state = AlarmState()
    state.start_new_alarm()
    state.toggle_day(DayOfWeek.TUESDAY)
    toggles = day_toggles(state.editing)
    assert [t.day for t in toggles] == list(DayOfWeek)
    assert [t.day for t in toggles if t.selected] == [DayOfWeek.TUESDAY]
    assert toggles[0] == DayToggle(DayOfWeek.MONDAY, DayOfWeek.MONDAY.display_name, False)


def test_day_toggles_none_selected_for_every_day():
    state = AlarmState()
    state.start_new_alarm()
    state.set_repeat_every_day()
    assert not any(t.selected for t in day_toggles(state.editing))


def test_time_fields_pad_digits():
    state = AlarmState()
    state.start_new_alarm()
    state.decrement_minute()
    hour, minute = time_fields(state.editing)
    assert hour == "08"
    assert minute == "59"


def test_render_empty_state():
    text = render_alarm_list(_state(), False, False)
    lines = text.splitlines()
    assert lines[0].startswith("Alarms")
    assert "[add]" in lines[0]
    assert "[edit]" not in lines[0]
    assert len(lines) == 2


def test_render_rows_in_order():
    state = _state(_alarm(1, 6, 0, "First"), _alarm(2, 7, 0, "Second"))
    lines = render_alarm_list(state, False, False).splitlines()
    assert len(lines) == 3
    assert "First" in lines[1] and "06:00" in lines[1]
    assert "Second" in lines[2]


def test_render_edit_mode_shows_indicator_for_dragged_row():
    state = _state(_alarm(1, 6, 0, "First"), _alarm(2, 7, 0, "Second"), edit_mode=True)
    state.dragging_index = 0
    lines = render_alarm_list(state, False, False).splitlines()
    assert "First" not in lines[1]
    assert "Second" in lines[2]
    assert "[done]" in lines[0]


def test_rows_are_value_objects():
    state = _state(_alarm(1, 6, 0, "A"))
    assert alarm_rows(state, True, False) == [
        AlarmRow(1, "A", format_alarm_time(state.alarms[0], True), "Once", True)
    ]
    with pytest.raises(AttributeError):
        alarm_rows(state, True, False)[0].label = "B"