"""
Alarm value type
Holds the configured time of day and the on/off flag, plus display and
storage representations
"""

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import MalformedTimeError


class AlarmDisplay(NamedTuple):
  """Strings a presenter needs to draw the alarm"""

  hour_text: str
  ampm_text: str
  time_text: str
  on_off_text: str


class AlarmModel(BaseModel):
  """The single alarm slot: time of day and whether it is armed"""

  model_config = ConfigDict(frozen=True)

  hour: int = Field(9, ge=0, le=23)
  minute: int = Field(30, ge=0, le=59)
  enabled: bool = False

  @property
  def display_hour(self) -> int:
    """Hour on a 12-hour clock, midnight and noon shown as 12"""
    return self.hour % 12 or 12

  @property
  def ampm_text(self) -> str:
    return "AM" if self.hour < 12 else "PM"

  @property
  def time_text(self) -> str:
    return f"{self.display_hour:02d}:{self.minute:02d}"

  @property
  def on_off_text(self) -> str:
    return "Turn alarm off" if self.enabled else "Turn alarm on"

  def format(self) -> AlarmDisplay:
    return AlarmDisplay(
      hour_text=str(self.display_hour),
      ampm_text=self.ampm_text,
      time_text=self.time_text,
      on_off_text=self.on_off_text,
    )

  def serialize(self) -> str:
    """Canonical stored form, "H:M" without padding"""
    return f"{self.hour}:{self.minute}"

  @classmethod
  def of(cls, hour: int, minute: int, enabled: bool = False) -> "AlarmModel":
    """Build a model, raising MalformedTimeError for out-of-range values"""
    try:
      return cls(hour=hour, minute=minute, enabled=enabled)
    except ValidationError as e:
      raise MalformedTimeError(
        f"Time out of range: {hour}:{minute}",
        caused_by=f"ValidationError: {e.error_count()} error(s)",
      ) from e

  @classmethod
  def parse(cls, value: str, enabled: bool = False) -> "AlarmModel":
    """
    Parse the canonical "H:M" form

    Args:
        value: Stored time string, e.g. "9:30" or "21:05"
        enabled: On/off flag stored next to the time

    Raises:
        MalformedTimeError: If the string is not two integers joined by ":"
          or the values are out of range
    """
    if not isinstance(value, str):
      raise MalformedTimeError(f"Time must be a string, got: {value!r}")
    parts = value.split(":")
    if len(parts) != 2:
      raise MalformedTimeError(f"Time must be in H:M format, got: {value!r}")
    try:
      hour, minute = int(parts[0]), int(parts[1])
    except ValueError as e:
      raise MalformedTimeError.from_exception(e, context=f"Invalid time {value!r}") from e
    return cls.of(hour, minute, enabled)


DEFAULT_ALARM = AlarmModel()
