"""Single daily alarm: persisted state kept in step with the OS scheduler"""

from .context import (
  AlarmContext,
  load_reconciled_model,
  on_fire,
  toggle,
  update_time,
)
from .exceptions import AlarmError, MalformedTimeError, PersistenceError, SchedulingError
from .model import AlarmDisplay, AlarmModel

__all__ = [
  "AlarmContext",
  "AlarmDisplay",
  "AlarmError",
  "AlarmModel",
  "MalformedTimeError",
  "PersistenceError",
  "SchedulingError",
  "load_reconciled_model",
  "on_fire",
  "toggle",
  "update_time",
]
