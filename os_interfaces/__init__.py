"""OS interface module - platform-specific implementations

Since we build separate executables for each platform,
import the appropriate implementation directly in the main entry points:
- entrypoints.daybreak_linux imports from os_interfaces.linux
- entrypoints.daybreak_android imports from os_interfaces.android
"""

from .base import ConfigStorage, NotificationManager, OSImplementations, TimerManager

__all__ = [
  "ConfigStorage",
  "NotificationManager",
  "OSImplementations",
  "TimerManager",
]
