"""Android-specific implementations of OS interfaces."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from jnius import PythonJavaClass, autoclass, java_method  # type: ignore

from .base import ConfigStorage, NotificationManager, TimerManager

logger = logging.getLogger(__name__)


# --- PyJNIus handles ---
PythonActivity = autoclass("org.kivy.android.PythonActivity")
Intent = autoclass("android.content.Intent")
IntentFilter = autoclass("android.content.IntentFilter")
PendingIntent = autoclass("android.app.PendingIntent")
NotificationManagerJava = autoclass("android.app.NotificationManager")
NotificationChannel = autoclass("android.app.NotificationChannel")
BuildVersion = autoclass("android.os.Build$VERSION")
NotificationCompatBuilder = autoclass("androidx.core.app.NotificationCompat$Builder")
NotificationCompat = autoclass("androidx.core.app.NotificationCompat")
NotificationManagerCompat = autoclass("androidx.core.app.NotificationManagerCompat")
AlarmManagerJava = autoclass("android.app.AlarmManager")
AndroidRDrawable = autoclass("android.R$drawable")
Context = autoclass("android.content.Context")

ACTION_ALARM_FIRE = "com.daybreak.ALARM_FIRED"

_IMPORTANCE = {
  "high": NotificationManagerJava.IMPORTANCE_HIGH,
  "default": NotificationManagerJava.IMPORTANCE_DEFAULT,
}


def _context():
  return PythonActivity.mActivity.getApplicationContext()


def _flags(base: int) -> int:
  return base | PendingIntent.FLAG_IMMUTABLE


def _compat(ctx):
  # `from` is a Python keyword
  return getattr(NotificationManagerCompat, "from")(ctx)


def _millis(dt: datetime) -> int:
  return int(dt.timestamp() * 1000)


class _AlarmReceiver(PythonJavaClass):
  __javainterfaces__ = ["android/content/BroadcastReceiver"]
  __javacontext__ = "app"

  def __init__(self, on_fire: Callable[[], None]):
    super().__init__()
    self.on_fire = on_fire

  @java_method("(Landroid/content/Context;Landroid/content/Intent;)V")
  def onReceive(self, _context, intent):
    if intent.getAction() != ACTION_ALARM_FIRE:
      return
    try:
      self.on_fire()
    except Exception:  # pragma: no cover - runs on the Java side
      logger.exception("Alarm fire handler failed")


_alarm_receiver: _AlarmReceiver | None = None


def register_fire_receiver(on_fire: Callable[[], None]) -> None:
  """Route ACTION_ALARM_FIRE broadcasts to `on_fire`; safe to call once per process."""
  global _alarm_receiver
  if _alarm_receiver is not None:
    return
  _alarm_receiver = _AlarmReceiver(on_fire)
  intent_filter = IntentFilter()
  intent_filter.addAction(ACTION_ALARM_FIRE)
  _context().registerReceiver(_alarm_receiver, intent_filter)


class AndroidNotificationManager(NotificationManager):
  """Android notification manager using NotificationManagerCompat."""

  def __init__(self, app_name: str):
    self.app_name = app_name
    self.ctx = _context()
    self.manager = self.ctx.getSystemService(Context.NOTIFICATION_SERVICE)

  def channel_exists(self, channel_id: str) -> bool:
    if BuildVersion.SDK_INT < 26:
      return True
    return self.manager.getNotificationChannel(channel_id) is not None

  def create_channel(self, channel_id: str, name: str, importance: str = "high") -> None:
    # Channels only exist from API 26; createNotificationChannel is a no-op
    # for an existing id.
    if BuildVersion.SDK_INT < 26:
      return
    channel = NotificationChannel(channel_id, name, _IMPORTANCE[importance])
    _compat(self.ctx).createNotificationChannel(channel)

  async def create_notification(
    self,
    title: str,
    body: str,
    notification_id: int,
    channel_id: str,
    on_clicked: Optional[Callable] = None,
    on_dismissed: Optional[Callable] = None,
  ) -> None:
    icon = self.ctx.getApplicationInfo().icon or AndroidRDrawable.ic_dialog_info
    builder = (
      NotificationCompatBuilder(self.ctx, channel_id)
      .setSmallIcon(icon)
      .setContentTitle(title)
      .setContentText(body)
      .setAutoCancel(True)
      .setPriority(NotificationCompat.PRIORITY_HIGH)
    )
    _compat(self.ctx).notify(notification_id, builder.build())
    logger.info("Notification %s posted", notification_id)


class AndroidTimerManager(TimerManager):
  """Android timer manager using AlarmManager.setInexactRepeating."""

  def __init__(self, app_name: str):
    self.app_name = app_name
    self.ctx = _context()
    self.alarm_manager = self.ctx.getSystemService(Context.ALARM_SERVICE)

  def _intent(self):
    intent = Intent(ACTION_ALARM_FIRE)
    intent.setPackage(self.ctx.getPackageName())
    return intent

  def _pending_intent(self, identifier: int, flag: int):
    return PendingIntent.getBroadcast(self.ctx, identifier, self._intent(), _flags(flag))

  def register_daily(
    self, identifier: int, fire_at: datetime, command: str, args: list[str]
  ) -> None:
    # FLAG_UPDATE_CURRENT reuses the PendingIntent for the same request code,
    # so AlarmManager replaces the earlier alarm.
    pending_intent = self._pending_intent(identifier, PendingIntent.FLAG_UPDATE_CURRENT)
    self.alarm_manager.setInexactRepeating(
      AlarmManagerJava.RTC_WAKEUP,
      _millis(fire_at),
      AlarmManagerJava.INTERVAL_DAY,
      pending_intent,
    )
    logger.info("Registered daily alarm %s from %s", identifier, fire_at.isoformat())

  def cancel(self, identifier: int) -> None:
    pending_intent = self._pending_intent(identifier, PendingIntent.FLAG_NO_CREATE)
    if pending_intent is None:
      return
    self.alarm_manager.cancel(pending_intent)
    pending_intent.cancel()
    logger.info("Cancelled alarm %s", identifier)

  def exists(self, identifier: int) -> bool:
    return self._pending_intent(identifier, PendingIntent.FLAG_NO_CREATE) is not None


class AndroidConfigStorage(ConfigStorage):
  """SharedPreferences-backed storage; values are strings or booleans."""

  def __init__(self, app_name: str, config_name: str):
    self.ctx = _context()
    self.prefs = self.ctx.getSharedPreferences(config_name, Context.MODE_PRIVATE)

  def load(self) -> dict:
    values = self.prefs.getAll()
    return {str(k): values.get(k) for k in values.keySet().toArray()}

  def save(self, config: dict) -> None:
    editor = self.prefs.edit().clear()
    self._put_all(editor, config)
    if not editor.commit():
      raise OSError("SharedPreferences commit failed")

  def get(self, key: str, default: Any = None) -> Any:
    return self.load().get(key, default)

  def set(self, key: str, value: Any) -> None:
    self.update({key: value})

  def update(self, values: Mapping[str, Any]) -> None:
    editor = self.prefs.edit()
    self._put_all(editor, values)
    if not editor.commit():
      raise OSError("SharedPreferences commit failed")

  @staticmethod
  def _put_all(editor, values: Mapping[str, Any]) -> None:
    for key, value in values.items():
      if isinstance(value, bool):
        editor.putBoolean(key, value)
      else:
        editor.putString(key, str(value))
