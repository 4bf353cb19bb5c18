# deskclocks

The core of a desktop clocks application. It covers alarms (editing,
triggering, ringing, snoozing and reordering), the formatting of durations,
drag-to-reorder geometry, and the saved settings stored as JSON. It needs
nothing beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `deskclocks.duration`: `format_duration`, `format_duration_parts` and
  `format_duration_hms` turn a non-negative `datetime.timedelta` into
  `HH:MM:SS.d`, `("HH:MM:", "SS", ".d")` or `HH:MM:SS`. A negative duration
  raises `ValueError`.
- `deskclocks.config`: the saved settings. These are `Config`, `SavedAlarm`,
  `SavedRepeatMode`, `SavedTimer`, `SavedPomodoro`, `SavedClock` and
  `PomodoroDefaults`. `Config.to_dict` and `Config.from_dict` convert to and
  from plain data. `from_dict` fills in defaults for absent fields and raises
  `ValueError` for malformed ones. `load_config(path)` reads a JSON file and
  returns the default config if the file does not exist. `save_config(config, path)`
  writes the file atomically.
- `deskclocks.alarm`: `AlarmState` holds the alarm list, the edit form
  (`AlarmEdit`), ringing alarms and snoozed alarms, and provides:
  - form methods: `start_new_alarm`, `start_edit_alarm`, `save_alarm`,
    `cancel_edit`, `increment_hour`, `decrement_hour`, `increment_minute`,
    `decrement_minute`, `set_label`, `set_repeat_once`,
    `set_repeat_every_day`, `toggle_day`, `set_sound`,
    `set_snooze_minutes` and `set_ring_minutes` (both clamped to 1–30), and
    `set_pm`;
  - list methods: `toggle_alarm`, `delete_alarm`, `toggle_edit_mode`,
    `start_drag`, `reorder`, `finish_drag` and `cancel_drag`;
  - scheduling methods: `check_triggers(hour, minute, weekday)`, which checks
    each minute once and disables one-off alarms when they go off,
    `start_ringing`, `check_ring_expired`, `snooze`, `check_snoozed` and
    `dismiss`. The time arguments default to `time.monotonic()`.

  The module also has `DayOfWeek`, `RepeatMode`, `hour24_to_12` and
  `hour12_to_24`.
- `deskclocks.alarm_view`: data for displaying the alarm page.
  `format_alarm_time` formats an alarm's time. `alarm_rows` gives an
  `AlarmRow` for each alarm. `header_actions` lists the header buttons.
  `day_toggles` gives a `DayToggle` for each day. `time_fields` gives the
  hour and minute of the edit form. `render_alarm_list` draws the page as
  plain text.
- `deskclocks.reorder`: drag-to-reorder for lists of equally tall rows.
  `insertion_index` and `pressed_item_index` map a position to a row.
  `drag_started` applies the 8-pixel drag threshold. `DragTracker` follows
  the press, drag, finish and cancel states.
- `deskclocks.persistence`: converts between alarm state and saved settings.
  `alarms_to_saved` turns alarms into saved entries. `restore_alarms(config)`
  rebuilds the state, numbering alarms from 1, dropping unknown day names and
  renaming the old `"Default"` sound to `"Bell"`. `build_config(state, base)`
  returns a copy of `base` with the alarms of `state` in it.

## Example

```python
from datetime import timedelta

from deskclocks.alarm import AlarmState
from deskclocks.alarm_view import render_alarm_list
from deskclocks.config import load_config, save_config
from deskclocks.duration import format_duration
from deskclocks.persistence import build_config, restore_alarms

print(format_duration(timedelta(hours=1, minutes=2, seconds=3, milliseconds=400)))
# 01:02:03.4

state = AlarmState()
state.start_new_alarm()
state.increment_minute()
state.save_alarm(use_12h=False)
print(render_alarm_list(state, use_12h=False, auto_sort=False))
# Alarms  [edit] [add]
# 08:01  Alarm  (Once)  on  >

save_config(build_config(state), "clocks.json")
restored = restore_alarms(load_config("clocks.json"))
print(restored.alarms[0].hour, restored.alarms[0].minute)
# 8 1
```

## What this package does not do

- It has no graphical interface and no command-line program. The alarm page
  is only available as data and as plain text.
- It plays no sounds and sends no desktop notifications. `sound` fields are
  stored and passed along as names or paths, and nothing else is done with
  them.
- It has no running logic for timers, pomodoros, the stopwatch or world
  clocks. `Config` stores their settings and nothing more. Keyboard shortcuts
  are not handled either.
- Alarms never fire by themselves. The caller has to call `check_triggers`,
  `check_snoozed` and `check_ring_expired` on a regular tick.