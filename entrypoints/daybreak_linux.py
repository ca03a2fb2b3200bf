"""Linux entrypoint for the `daybreak` command.

This entrypoint injects Linux OS interface implementations, or in-memory ones
with `--backend memory` for a dry run.
"""

from __future__ import annotations

import sys

from entrypoints.daybreak_core import main as run_cli
from os_interfaces.base import OSImplementations
from os_interfaces.memory import (
  InMemoryConfigStorage,
  InMemoryNotificationManager,
  InMemoryTimerManager,
)


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


def _memory_impl() -> OSImplementations:
  return OSImplementations(
    notification_manager_cls=InMemoryNotificationManager,
    timer_manager_cls=InMemoryTimerManager,
    config_storage_cls=InMemoryConfigStorage,
  )


BACKENDS = {"linux": _linux_impl, "memory": _memory_impl}


def main(argv: list[str] | None = None) -> None:
  sys.exit(run_cli(argv=argv, backends=BACKENDS))


if __name__ == "__main__":
  main()
