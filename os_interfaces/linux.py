"""Linux-specific implementations of OS interfaces"""

import logging
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import yaml
from desktop_notifier import DesktopNotifier
from platformdirs import user_config_dir
from pystemd.dbuslib import DBus
from pystemd.systemd1 import Manager

from .base import ConfigStorage, NotificationManager, TimerManager

logger = logging.getLogger(__name__)


class LinuxNotificationManager(NotificationManager):
  """Linux notification manager using desktop-notifier

  The freedesktop notification spec has no channels, so channels are only
  tracked in-process to keep the same contract as Android. The platform id
  of each shown notification is kept in a ConfigStorage, because every fire
  event runs in a fresh process.
  """

  def __init__(self, app_name: str, storage: Optional[ConfigStorage] = None):
    self.notifier = DesktopNotifier(app_name=app_name)
    if storage is None:
      storage = LinuxConfigStorage(app_name, "notifications")
    self.storage = storage
    self._channels: dict[str, str] = {}

  @staticmethod
  def _shown_key(notification_id: int) -> str:
    return f"notification_{notification_id}"

  def channel_exists(self, channel_id: str) -> bool:
    return channel_id in self._channels

  def create_channel(self, channel_id: str, name: str, importance: str = "high") -> None:
    if channel_id in self._channels:
      return
    self._channels[channel_id] = name
    logger.debug(f"Registered channel {channel_id} ({name})")

  async def _clear_previous(self, notification_id: int) -> None:
    try:
      previous = self.storage.get(self._shown_key(notification_id))
      if previous is not None:
        await self.notifier.clear(previous)
        logger.debug(f"Cleared notification {previous}")
    except Exception as e:
      logger.warning(f"Could not clear previous notification {notification_id}: {e}")

  async def create_notification(
    self,
    title: str,
    body: str,
    notification_id: int,
    channel_id: str,
    on_clicked: Optional[Callable] = None,
    on_dismissed: Optional[Callable] = None,
  ) -> None:
    """Create and show a notification using desktop-notifier

    Args:
      title: Notification title
      body: Notification body text
      notification_id: Fixed id; a still shown notification with it is cleared first
      channel_id: Channel name (informational on Linux)
      on_clicked: Optional callback when notification is clicked
      on_dismissed: Optional callback when notification is dismissed
    """
    await self._clear_previous(notification_id)
    try:
      platform_id = await self.notifier.send(
        title=title, message=body, on_clicked=on_clicked, on_dismissed=on_dismissed
      )
    except Exception as e:
      logger.error(f"Failed to send notification: {e}")
      raise
    try:
      self.storage.set(self._shown_key(notification_id), platform_id)
    except Exception as e:
      logger.warning(f"Could not remember notification {platform_id}: {e}")
    logger.info(f"Notification sent: {title}")


class LinuxTimerManager(TimerManager):
  """Linux timer manager using persistent systemd user units"""

  def __init__(self, app_name: str):
    self.app_name = app_name

  # ---- helpers ----
  @contextmanager
  def _connect_systemd(self):
    with DBus(user_mode=True) as bus:
      manager = Manager(bus=bus)
      manager.load()
      yield manager

  def _user_unit_dir(self) -> Path:
    return Path.home() / ".config/systemd/user"

  def _write_unit(self, name: str, content: str) -> Path:
    d = self._user_unit_dir()
    d.mkdir(parents=True, exist_ok=True)
    p = d / name
    p.write_text(content)
    return p

  def _remove_unit(self, name: str) -> None:
    (self._user_unit_dir() / name).unlink(missing_ok=True)

  def _list_unit_files(self, manager: Manager) -> list[tuple[bytes, bytes]]:
    return [(u[0], u[1]) for u in manager.Manager.ListUnitFiles()]

  def _timer_state(self, manager: Manager, base: str) -> bytes | None:
    for path, state in self._list_unit_files(manager):
      if path.endswith(f"{base}.timer".encode()):
        return state
    return None

  def _unit_name(self, identifier: int) -> str:
    return f"{self.app_name}-alarm-{identifier}"

  def _service_content(self, base: str, command: str, args: list[str]) -> str:
    exec_line = " ".join([command, *args])
    return (
      "[Unit]\n"
      f"Description={self.app_name} alarm {base}\n"
      "\n[Service]\n"
      "Type=oneshot\n"
      f"ExecStart={exec_line}\n"
    )

  def _timer_content(self, base: str, on_calendar: str) -> str:
    return (
      "[Unit]\n"
      f"Description={self.app_name} alarm timer {base}\n"
      "\n[Timer]\n"
      f"OnCalendar={on_calendar}\n"
      "Persistent=true\n"
      f"Unit={base}.service\n"
      "\n[Install]\n"
      "WantedBy=timers.target\n"
    )

  # ---- public API ----
  def register_daily(
    self, identifier: int, fire_at: datetime, command: str, args: list[str]
  ) -> None:
    """Write the units for `identifier`, replacing any previous ones, and start the timer."""
    base = self._unit_name(identifier)
    on_cal = f"*-*-* {fire_at.strftime('%H:%M')}:00"

    service_txt = self._service_content(base, command, args)
    timer_txt = self._timer_content(base, on_cal)

    with self._connect_systemd() as m:
      self._write_unit(f"{base}.service", service_txt)
      self._write_unit(f"{base}.timer", timer_txt)
      m.Manager.Reload()
      m.Manager.EnableUnitFiles([f"{base}.timer".encode()], False, True)
      m.Manager.RestartUnit(f"{base}.timer".encode(), b"replace")

    logger.info(f"Registered daily timer {base} at {on_cal}")

  def cancel(self, identifier: int) -> None:
    """Stop, disable and remove the timer units. No-op when they are absent."""
    base = self._unit_name(identifier)
    with self._connect_systemd() as m:
      if self._timer_state(m, base) is None:
        logger.debug(f"Timer {base} not installed, nothing to cancel")
        return
      m.Manager.StopUnit(f"{base}.timer".encode(), b"replace")
      m.Manager.DisableUnitFiles([f"{base}.timer".encode()], False)
      self._remove_unit(f"{base}.timer")
      self._remove_unit(f"{base}.service")
      m.Manager.Reload()
    logger.info(f"Cancelled timer {base}")

  def exists(self, identifier: int) -> bool:
    base = self._unit_name(identifier)
    with self._connect_systemd() as m:
      return self._timer_state(m, base) == b"enabled"


class LinuxConfigStorage(ConfigStorage):
  """Linux key-value storage using a YAML file in the user config directory"""

  def __init__(self, app_name: str, config_name: str):
    self.config_dir = Path(user_config_dir(app_name, ensure_exists=True))
    self.config_file = self.config_dir / f"{config_name}.yaml"
    self._config: dict = {}

  def _read(self) -> dict:
    if not self.config_file.exists():
      return {}
    with open(self.config_file, "r") as f:
      data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
      raise yaml.YAMLError(f"Expected a mapping in {self.config_file}")
    logger.debug(f"Loaded config from {self.config_file}")
    return data

  def _write(self, config: dict) -> None:
    self.config_dir.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=self.config_dir, prefix=".", suffix=".yaml")
    try:
      with os.fdopen(fd, "w") as f:
        yaml.safe_dump(config, f, default_flow_style=False)
      os.replace(tmp, self.config_file)
    except BaseException:
      Path(tmp).unlink(missing_ok=True)
      raise
    logger.debug(f"Saved config to {self.config_file}")

  def load(self) -> dict:
    self._config = self._read()
    return self._config.copy()

  def save(self, config: dict) -> None:
    self._write(config)
    self._config = config.copy()

  def get(self, key: str, default: Any = None) -> Any:
    return self.load().get(key, default)

  def set(self, key: str, value: Any) -> None:
    self.update({key: value})

  def update(self, values: Mapping[str, Any]) -> None:
    config = self._read()
    config.update(values)
    self.save(config)
