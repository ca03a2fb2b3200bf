"""
Test the alarm value type
Run with: uv run pytest test/test_alarm_model.py
"""

import pytest

from alarm.exceptions import AlarmError, MalformedTimeError
from alarm.model import AlarmModel


@pytest.mark.parametrize(
  "hour,minute",
  [(0, 0), (9, 30), (12, 5), (23, 59)],
)
def test_serialize_then_parse_gives_same_model(hour, minute):
  model = AlarmModel(hour=hour, minute=minute, enabled=True)
  assert AlarmModel.parse(model.serialize(), enabled=True) == model


def test_serialize_has_no_padding():
  assert AlarmModel(hour=9, minute=5).serialize() == "9:5"
  assert AlarmModel(hour=21, minute=30).serialize() == "21:30"


@pytest.mark.parametrize(
  "value",
  ["25:00", "bad", "9", "9:30:00", "9:60", "-1:10", "a:b", ":", ""],
)
def test_parse_rejects_malformed(value):
  with pytest.raises(MalformedTimeError):
    AlarmModel.parse(value)


def test_malformed_time_is_value_error_and_alarm_error():
  with pytest.raises(ValueError):
    AlarmModel.parse("bad")
  with pytest.raises(AlarmError) as exc_info:
    AlarmModel.parse("25:00")
  assert exc_info.value.name == "MALFORMED_TIME"
  assert exc_info.value.source == "model"


def test_parse_rejects_non_string():
  with pytest.raises(MalformedTimeError):
    AlarmModel.parse(930)  # type: ignore[arg-type]


def test_defaults():
  model = AlarmModel()
  assert (model.hour, model.minute, model.enabled) == (9, 30, False)


@pytest.mark.parametrize(
  "hour,minute,ampm,text",
  [
    (0, 0, "AM", "12:00"),
    (9, 30, "AM", "09:30"),
    (11, 59, "AM", "11:59"),
    (12, 0, "PM", "12:00"),
    (13, 5, "PM", "01:05"),
    (23, 45, "PM", "11:45"),
  ],
)
def test_format_twelve_hour_clock(hour, minute, ampm, text):
  display = AlarmModel(hour=hour, minute=minute).format()
  assert display.ampm_text == ampm
  assert display.time_text == text


def test_on_off_text():
  assert AlarmModel(enabled=True).format().on_off_text == "Turn alarm off"
  assert AlarmModel(enabled=False).format().on_off_text == "Turn alarm on"


def test_model_is_immutable():
  model = AlarmModel()
  with pytest.raises(Exception):
    model.enabled = True  # type: ignore[misc]
