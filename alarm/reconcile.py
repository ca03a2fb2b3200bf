"""
Load-time repair of the persisted flag against the scheduler

  persisted on,  registered     -> nothing to do
  persisted on,  not registered -> persist off (alarm was lost externally)
  persisted off, registered     -> cancel the stray registration
  persisted off, not registered -> nothing to do
"""

import logging

from .model import AlarmModel
from .scheduler import SchedulerGateway
from .store import PersistenceStore

logger = logging.getLogger(__name__)


def reconcile(
  model: AlarmModel, store: PersistenceStore, gateway: SchedulerGateway
) -> AlarmModel:
  """Return a model whose `enabled` matches the scheduler's registration.

  Corrections are logged, not raised. If the corrective write or cancel
  itself fails, its PersistenceError/SchedulingError propagates.
  """
  registered = gateway.peek_registration()

  if model.enabled and not registered:
    logger.warning(
      f"Alarm {model.serialize()} is on but not registered; switching it off"
    )
    return store.save(model.hour, model.minute, False)

  if not model.enabled and registered:
    logger.warning(f"Alarm {model.serialize()} is off but registered; cancelling")
    gateway.cancel_registration()
    return model

  logger.debug(f"Alarm consistent (enabled={model.enabled})")
  return model
