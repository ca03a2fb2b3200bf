"""
On/off transitions of the alarm
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from .exceptions import PersistenceError, SchedulingError
from .model import AlarmModel
from .scheduler import SchedulerGateway, next_fire, to_epoch_millis
from .store import PersistenceStore

logger = logging.getLogger(__name__)


class AlarmState(str, Enum):
  OFF = "off"
  ON = "on"

  @classmethod
  def of(cls, model: AlarmModel) -> "AlarmState":
    return cls.ON if model.enabled else cls.OFF


class ToggleStateMachine:
  """Drives the alarm between OFF and ON.

  The scheduler call always happens before the persisted write, so an
  interrupted transition can only leave "persisted off, maybe registered",
  which reconciliation repairs on the next load.
  """

  def __init__(
    self,
    store: PersistenceStore,
    gateway: SchedulerGateway,
    now: Callable[[], datetime] = datetime.now,
  ):
    self.store = store
    self.gateway = gateway
    self.now = now

  def turn_on(self, model: AlarmModel) -> AlarmModel:
    """Arm the alarm at model's time, replacing any earlier registration.

    Raises:
      SchedulingError: Registration failed; nothing was persisted
      PersistenceError: The write failed; the new registration is withdrawn
    """
    fire_at = next_fire(model.hour, model.minute, self.now())
    self.gateway.register_daily(to_epoch_millis(fire_at))
    try:
      saved = self.store.save(model.hour, model.minute, True)
    except PersistenceError:
      try:
        self.gateway.cancel_registration()
      except SchedulingError as e:
        logger.warning(f"Could not withdraw registration after failed save: {e}")
      raise
    logger.info(f"Alarm on at {saved.serialize()}, next fire {fire_at.isoformat()}")
    return saved

  def turn_off(self, model: AlarmModel) -> AlarmModel:
    """Disarm the alarm.

    Raises:
      SchedulingError: Cancellation failed; nothing was persisted
      PersistenceError: The write failed
    """
    self.gateway.cancel_registration()
    saved = self.store.save(model.hour, model.minute, False)
    logger.info(f"Alarm off ({saved.serialize()})")
    return saved

  def toggle(self, current: AlarmModel) -> AlarmModel:
    """Flip the latest persisted state; `current` is what the caller last saw."""
    latest = self.store.load()
    if latest != current:
      logger.info(
        f"Caller state {current.serialize()}/{AlarmState.of(current).value} is stale, "
        f"using {latest.serialize()}/{AlarmState.of(latest).value}"
      )
    if AlarmState.of(latest) is AlarmState.ON:
      return self.turn_off(latest)
    return self.turn_on(latest)

  def change_time(self, hour: int, minute: int) -> AlarmModel:
    """Store a new time. Time edits always land in OFF; re-enable to arm.

    Raises:
      PersistenceError: The write failed; nothing else was touched
      SchedulingError: The new time is stored as off but the old registration
        is still live; reconciliation cancels it
    """
    saved = self.store.save(hour, minute, False)
    self.gateway.cancel_registration()
    logger.info(f"Alarm time changed to {saved.serialize()}")
    return saved
