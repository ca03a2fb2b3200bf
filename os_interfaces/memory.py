"""
In-memory OS interfaces for testing and development
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from .base import ConfigStorage, NotificationManager, TimerManager


@dataclass
class Registration:
  """A trigger held by the in-memory scheduler"""

  identifier: int
  fire_at: datetime
  command: str
  args: List[str] = field(default_factory=list)
  interval: timedelta = timedelta(days=1)


@dataclass
class ShownNotification:
  title: str
  body: str
  notification_id: int
  channel_id: str


class InMemoryTimerManager(TimerManager):
  """Dict-backed scheduler.

  `fail_next` makes the next register/cancel raise, to simulate the platform
  refusing a call. `fire` delivers a fire event the way the platform would.
  """

  def __init__(self, app_name: str = "daybreak"):
    self.app_name = app_name
    self.registrations: Dict[int, Registration] = {}
    self.fail_next: Optional[Exception] = None
    self.calls: List[str] = []

  def _maybe_fail(self) -> None:
    if self.fail_next is not None:
      error, self.fail_next = self.fail_next, None
      raise error

  def register_daily(
    self, identifier: int, fire_at: datetime, command: str, args: list[str]
  ) -> None:
    self.calls.append("register")
    self._maybe_fail()
    self.registrations[identifier] = Registration(identifier, fire_at, command, list(args))

  def cancel(self, identifier: int) -> None:
    self.calls.append("cancel")
    self._maybe_fail()
    self.registrations.pop(identifier, None)

  def exists(self, identifier: int) -> bool:
    return identifier in self.registrations

  def forget(self, identifier: int) -> None:
    """Drop a registration behind the caller's back (reinstall, OS cleanup)"""
    self.registrations.pop(identifier, None)

  def fire(self, identifier: int, handler: Callable[[Registration], Any]) -> Any:
    """Deliver a fire event for `identifier` and advance it by one interval"""
    registration = self.registrations[identifier]
    result = handler(registration)
    registration.fire_at += registration.interval
    return result


class InMemoryNotificationManager(NotificationManager):
  """Keeps channels and shown notifications in dicts"""

  def __init__(self, app_name: str = "daybreak"):
    self.app_name = app_name
    self.channels: Dict[str, str] = {}
    self.shown: Dict[int, ShownNotification] = {}
    self.posted: int = 0

  def channel_exists(self, channel_id: str) -> bool:
    return channel_id in self.channels

  def create_channel(self, channel_id: str, name: str, importance: str = "high") -> None:
    self.channels.setdefault(channel_id, name)

  async def create_notification(
    self,
    title: str,
    body: str,
    notification_id: int,
    channel_id: str,
    on_clicked: Optional[Callable] = None,
    on_dismissed: Optional[Callable] = None,
  ) -> None:
    if channel_id not in self.channels:
      raise ValueError(f"Unknown channel: {channel_id}")
    self.shown[notification_id] = ShownNotification(title, body, notification_id, channel_id)
    self.posted += 1


class InMemoryConfigStorage(ConfigStorage):
  """Dict-backed key-value storage; `available = False` simulates an outage"""

  def __init__(self, app_name: str = "daybreak", config_name: str = "time"):
    self.config_name = config_name
    self._config: Dict[str, Any] = {}
    self.available = True

  def _check(self) -> None:
    if not self.available:
      raise OSError(f"Storage '{self.config_name}' is unavailable")

  def load(self) -> dict:
    self._check()
    return self._config.copy()

  def save(self, config: dict) -> None:
    self._check()
    self._config = config.copy()

  def get(self, key: str, default: Any = None) -> Any:
    self._check()
    return self._config.get(key, default)

  def set(self, key: str, value: Any) -> None:
    self.update({key: value})

  def update(self, values) -> None:
    self._check()
    self._config = {**self._config, **values}
