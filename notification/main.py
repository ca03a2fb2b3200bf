"""
Alarm fire-event worker.

The scheduler runs this program when the alarm's trigger fires (systemd runs
`daybreak-fire` from the alarm's service unit). It shows the wake-up alert
and exits.

Usage:
    uv run python -m notification.main
"""

import argparse
import asyncio
import logging

from alarm import AlarmContext, on_fire
from alarm.config import configure_logging
from os_interfaces.base import OSImplementations

logger = logging.getLogger(__name__)


def _linux_impl() -> OSImplementations:
  from os_interfaces.linux import (
    LinuxConfigStorage,
    LinuxNotificationManager,
    LinuxTimerManager,
  )

  return OSImplementations(
    notification_manager_cls=LinuxNotificationManager,
    timer_manager_cls=LinuxTimerManager,
    config_storage_cls=LinuxConfigStorage,
  )


async def main(
  os_impl: OSImplementations | None = None, argv: list[str] | None = None
) -> None:
  """Main entrypoint function.

  Args:
      os_impl: Platform implementations (Linux when omitted)
      argv: Command line arguments (sys.argv when omitted)
  """
  parser = argparse.ArgumentParser(description="Show the daybreak wake-up alert.")
  parser.add_argument(
    "--linger",
    type=float,
    default=0.0,
    help="Seconds to keep running so click/dismiss callbacks can be delivered",
  )
  parser.add_argument("--log-level", default=None)
  args = parser.parse_args(argv)
  configure_logging(args.log_level)

  ctx = AlarmContext.from_os(os_impl or _linux_impl())
  await on_fire(ctx)

  if args.linger > 0:
    logger.info(f"Waiting {args.linger}s for notification interaction...")
    await asyncio.sleep(args.linger)


def run() -> None:
  asyncio.run(main())


if __name__ == "__main__":
  run()
