"""Android bootstrap for the alarm.

Wires the Android OS interfaces, repairs the persisted state against
AlarmManager and routes alarm broadcasts to the fire handler. The returned
context is what the app's UI calls `toggle`/`update_time` with.
"""

from __future__ import annotations

import asyncio
import logging

from alarm import AlarmContext, load_reconciled_model, on_fire
from alarm.config import configure_logging
from os_interfaces.base import OSImplementations
from os_interfaces.android import (
  AndroidConfigStorage,
  AndroidNotificationManager,
  AndroidTimerManager,
  register_fire_receiver,
)

logger = logging.getLogger(__name__)


def main() -> AlarmContext:
  configure_logging()
  os_impl = OSImplementations(
    notification_manager_cls=AndroidNotificationManager,
    timer_manager_cls=AndroidTimerManager,
    config_storage_cls=AndroidConfigStorage,
  )
  ctx = AlarmContext.from_os(os_impl)
  model = load_reconciled_model(ctx)
  logger.info(f"Alarm loaded: {model.serialize()} enabled={model.enabled}")

  register_fire_receiver(lambda: asyncio.run(on_fire(ctx)))
  return ctx


if __name__ == "__main__":
  main()
