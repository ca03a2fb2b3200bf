"""Abstract base classes for OS-specific interfaces"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional


class NotificationManager(ABC):
  """Abstract base class for notification management"""

  @abstractmethod
  def channel_exists(self, channel_id: str) -> bool:
    """Return True if the alert channel is already registered"""
    raise NotImplementedError

  @abstractmethod
  def create_channel(self, channel_id: str, name: str, importance: str = "high") -> None:
    """Register an alert channel.

    Creating a channel that already exists must be a no-op.

    Args:
      channel_id: Stable channel identifier
      name: User visible channel name
      importance: "high" or "default"
    """
    raise NotImplementedError

  @abstractmethod
  async def create_notification(
    self,
    title: str,
    body: str,
    notification_id: int,
    channel_id: str,
    on_clicked: Optional[Callable] = None,
    on_dismissed: Optional[Callable] = None,
  ) -> None:
    """Create and show a notification

    A notification posted with an id that is still shown replaces it.

    Args:
      title: Notification title
      body: Notification body text
      notification_id: Fixed id, used to replace an undismissed notification
      channel_id: Channel the notification is posted to
      on_clicked: Optional callback when notification is clicked
      on_dismissed: Optional callback when notification is dismissed
    """
    raise NotImplementedError


class TimerManager(ABC):
  """Abstract base class for timer/alarm management"""

  @abstractmethod
  def register_daily(
    self, identifier: int, fire_at: datetime, command: str, args: list[str]
  ) -> None:
    """Register a trigger that fires at `fire_at` and then every 24 hours.

    This method is idempotent - registering the same identifier again replaces
    the previous registration.

    Args:
      identifier: Fixed request identifier of the registration
      fire_at: First fire instant (local wall clock)
      command: Command the scheduler runs when the trigger fires
      args: List of command arguments
    """
    raise NotImplementedError

  @abstractmethod
  def cancel(self, identifier: int) -> None:
    """Remove a registration. No-op when nothing is registered.

    Args:
      identifier: Fixed request identifier of the registration
    """
    raise NotImplementedError

  @abstractmethod
  def exists(self, identifier: int) -> bool:
    """Check whether a live registration exists without creating one"""
    raise NotImplementedError


class ConfigStorage(ABC):
  """Abstract base class for key-value storage"""

  @abstractmethod
  def load(self) -> dict:
    """Load all values from storage"""
    raise NotImplementedError

  @abstractmethod
  def save(self, config: dict) -> None:
    """Replace all values in storage"""
    raise NotImplementedError

  @abstractmethod
  def get(self, key: str, default: Any = None) -> Any:
    """Get a value by key"""
    raise NotImplementedError

  @abstractmethod
  def set(self, key: str, value: Any) -> None:
    """Set a single value"""
    raise NotImplementedError

  def update(self, values: Mapping[str, Any]) -> None:
    """Write several values in one step.

    Backends override this when a single write primitive exists; the default
    rewrites the whole mapping through `save`.
    """
    config = self.load()
    config.update(values)
    self.save(config)


@dataclass
class OSImplementations:
  """Bundle of platform classes injected into the entrypoints"""

  notification_manager_cls: Callable[..., NotificationManager]
  timer_manager_cls: Callable[..., TimerManager]
  config_storage_cls: Callable[..., ConfigStorage]

  def notification_manager(self, app_name: str) -> NotificationManager:
    return self.notification_manager_cls(app_name=app_name)

  def timer_manager(self, app_name: str) -> TimerManager:
    return self.timer_manager_cls(app_name=app_name)

  def config_storage(self, app_name: str, config_name: str) -> ConfigStorage:
    return self.config_storage_cls(app_name=app_name, config_name=config_name)
