"""
Alarm persistence on top of a key-value ConfigStorage
"""

import logging

from os_interfaces.base import ConfigStorage

from .config import AlarmConfig
from .exceptions import MalformedTimeError, PersistenceError
from .model import AlarmModel

logger = logging.getLogger(__name__)


class PersistenceStore:
  """Loads and saves the alarm's two persisted fields"""

  def __init__(
    self,
    storage: ConfigStorage,
    time_key: str = AlarmConfig.TIME_KEY,
    enabled_key: str = AlarmConfig.ENABLED_KEY,
  ):
    self.storage = storage
    self.time_key = time_key
    self.enabled_key = enabled_key

  def load(self) -> AlarmModel:
    """
    Read the persisted alarm

    Missing time defaults to 9:30 and a missing flag to off. A corrupt time
    string is replaced: the default time is written back with the flag off.

    Raises:
      PersistenceError: If the storage cannot be read, or a corrupt record
        cannot be rewritten
    """
    try:
      raw = self.storage.load()
    except Exception as e:
      logger.error(f"Failed to load alarm: {e}")
      raise PersistenceError.from_exception(e, context="Failed to load alarm") from e

    raw_time = raw.get(self.time_key, AlarmConfig.DEFAULT_TIME)
    enabled = raw.get(self.enabled_key, False)
    if not isinstance(enabled, bool):
      logger.warning(f"Ignoring non-boolean {self.enabled_key}={enabled!r}")
      enabled = False

    try:
      model = AlarmModel.parse(raw_time, enabled=enabled)
    except MalformedTimeError as e:
      logger.warning(f"Corrupt alarm time, resetting to {AlarmConfig.DEFAULT_TIME} off: {e}")
      default = AlarmModel.parse(AlarmConfig.DEFAULT_TIME)
      model = self.save(default.hour, default.minute, False)

    logger.debug(f"Loaded alarm {model.serialize()} enabled={model.enabled}")
    return model

  def save(self, hour: int, minute: int, enabled: bool) -> AlarmModel:
    """
    Write time and flag in a single storage update

    Raises:
      MalformedTimeError: If hour/minute are out of range (nothing is written)
      PersistenceError: If the storage cannot be written
    """
    model = AlarmModel.of(hour, minute, enabled)
    try:
      self.storage.update(
        {self.time_key: model.serialize(), self.enabled_key: model.enabled}
      )
    except Exception as e:
      logger.error(f"Failed to save alarm: {e}")
      raise PersistenceError.from_exception(e, context="Failed to save alarm") from e

    logger.debug(f"Saved alarm {model.serialize()} enabled={model.enabled}")
    return model
