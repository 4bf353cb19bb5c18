import pytest

from deskclocks.config import (
    Config,
    PomodoroDefaults,
    SavedAlarm,
    SavedClock,
    SavedPomodoro,
    SavedRepeatMode,
    SavedTimer,
    load_config,
    save_config,
)


def _sample_config():
    return Config(
        world_clocks=[
            SavedClock("Europe/Paris", "Paris", True),
            SavedClock("Asia/Tokyo", "Tokyo", False),
        ],
        alarms=[
            SavedAlarm(7, 30, "Wake", True, SavedRepeatMode("EveryDay"), "Bell", 5, 1),
            SavedAlarm(
                18, 0, "Gym", False, SavedRepeatMode("Custom", ("Mon", "Thu")), "Chime", 10, 2
            ),
            SavedAlarm(6, 5, "Train", True, SavedRepeatMode(), "/tmp/x.wav", 3, 4),
        ],
        timers=[SavedTimer("Tea", 180, True, 3, "Alert")],
        pomodoros=[SavedPomodoro("Focus", 50, 10, 20, "Gentle")],
        pomodoro_defaults=PomodoroDefaults(30, 6, 18),
        use_12h=True,
        confirm_delete_timer=False,
        auto_sort_alarms=True,
    )


def test_defaults_match_source():
    config = Config()
    assert config.pomodoro_defaults == PomodoroDefaults(25, 5, 15)
    assert config.use_12h is False
    assert config.confirm_delete_alarm and config.confirm_clear_stopwatch
    assert not config.auto_sort_alarms and not config.auto_sort_world_clocks


def test_dict_round_trip():
    config = _sample_config()
    assert Config.from_dict(config.to_dict()) == config


def test_empty_dict_gives_defaults():
    assert Config.from_dict({}) == Config()


def test_missing_confirmation_flags_default_to_true():
    data = Config(confirm_delete_alarm=False).to_dict()
    del data["confirm_delete_alarm"]
    del data["auto_sort_alarms"]
    restored = Config.from_dict(data)
    assert restored.confirm_delete_alarm is True
    assert restored.auto_sort_alarms is False


@pytest.mark.parametrize("kind", ["Once", "EveryDay"])
def test_unit_repeat_modes_serialize_as_names(kind):
    mode = SavedRepeatMode(kind)
    assert mode.to_data() == kind
    assert SavedRepeatMode.from_data(mode.to_data()) == mode


def test_custom_repeat_mode_serialization():
    mode = SavedRepeatMode("Custom", ["Mon", "Tue"])
    assert mode.to_data() == {"Custom": ["Mon", "Tue"]}
    assert SavedRepeatMode.from_data({"Custom": ["Mon", "Tue"]}) == mode


@pytest.mark.parametrize("data", ["Weekly", {"Custom": "Mon"}, {"Other": []}, 3, None])
def test_invalid_repeat_mode_rejected(data):
    with pytest.raises(ValueError):
        SavedRepeatMode.from_data(data)


def test_unknown_repeat_kind_rejected():
    with pytest.raises(ValueError):
        SavedRepeatMode("Sometimes")


def test_alarm_hour_out_of_range_rejected():
    data = _sample_config().to_dict()
    data["alarms"][0]["hour"] = -1
    with pytest.raises(ValueError):
        Config.from_dict(data)


def test_alarm_missing_field_rejected():
    data = _sample_config().to_dict()
    del data["alarms"][0]["label"]
    with pytest.raises(ValueError):
        Config.from_dict(data)


def test_wrong_flag_type_rejected():
    with pytest.raises(ValueError):
        Config.from_dict({"use_12h": "yes"})


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = _sample_config()
    save_config(config, path)
    assert load_config(path) == config
    assert [p.name for p in path.parent.iterdir()] == ["config.json"]


def test_load_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "absent.json") == Config()


def test_load_invalid_json_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)