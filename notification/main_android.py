"""Android entrypoint for the alarm fire-event worker."""

import asyncio

from os_interfaces.base import OSImplementations
from notification.main import main
from os_interfaces.android import (
  AndroidConfigStorage,
  AndroidNotificationManager,
  AndroidTimerManager,
)


def run() -> None:
  os_impl = OSImplementations(
    notification_manager_cls=AndroidNotificationManager,
    timer_manager_cls=AndroidTimerManager,
    config_storage_cls=AndroidConfigStorage,
  )
  asyncio.run(main(os_impl=os_impl, argv=[]))


if __name__ == "__main__":
  run()
