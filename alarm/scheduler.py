"""
Gateway to the external trigger registration facility
"""

import logging
from datetime import datetime, timedelta

from os_interfaces.base import TimerManager

from .config import AlarmConfig
from .exceptions import SchedulingError

logger = logging.getLogger(__name__)


def next_fire(hour: int, minute: int, now: datetime) -> datetime:
  """Today's instant at hour:minute, or tomorrow's if that is not after `now`"""
  candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
  if candidate <= now:
    candidate += timedelta(days=1)
  return candidate


def to_epoch_millis(dt: datetime) -> int:
  return int(dt.timestamp() * 1000)


def from_epoch_millis(ms: int) -> datetime:
  return datetime.fromtimestamp(ms / 1000)


class SchedulerGateway:
  """Registers, cancels and peeks the alarm's daily trigger.

  All three calls are idempotent. Platform failures are raised as
  SchedulingError.
  """

  def __init__(
    self,
    timer_manager: TimerManager,
    identifier: int = AlarmConfig.REQUEST_CODE,
    fire_command: str = AlarmConfig.FIRE_COMMAND,
  ):
    self.timer_manager = timer_manager
    self.identifier = identifier
    self.fire_command = fire_command

  def peek_registration(self) -> bool:
    try:
      return self.timer_manager.exists(self.identifier)
    except Exception as e:
      logger.error(f"Failed to query registration {self.identifier}: {e}")
      raise SchedulingError.from_exception(
        e, name="PEEK_FAILED", context="Failed to query alarm registration"
      ) from e

  def register_daily(self, fire_at_ms: int, identifier: int | None = None) -> None:
    identifier = self.identifier if identifier is None else identifier
    fire_at = from_epoch_millis(fire_at_ms)
    try:
      self.timer_manager.register_daily(identifier, fire_at, self.fire_command, [])
    except Exception as e:
      logger.error(f"Failed to register alarm {identifier}: {e}")
      raise SchedulingError.from_exception(
        e, name="REGISTER_FAILED", context="Failed to register alarm"
      ) from e
    logger.info(f"Alarm {identifier} registered daily from {fire_at.isoformat()}")

  def cancel_registration(self, identifier: int | None = None) -> None:
    identifier = self.identifier if identifier is None else identifier
    try:
      self.timer_manager.cancel(identifier)
    except Exception as e:
      logger.error(f"Failed to cancel alarm {identifier}: {e}")
      raise SchedulingError.from_exception(
        e, name="CANCEL_FAILED", context="Failed to cancel alarm"
      ) from e
    logger.info(f"Alarm {identifier} cancelled")
