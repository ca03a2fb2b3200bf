"""
Test the fire-event handler
Run with: uv run pytest test/test_trigger.py
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from alarm.config import AlarmConfig
from alarm.trigger import ensure_channel, handle_fire
from os_interfaces.base import NotificationManager


@pytest.mark.asyncio
async def test_fire_creates_channel_and_alert(notifier):
  await handle_fire(notifier)

  assert notifier.channels == {AlarmConfig.CHANNEL_ID: AlarmConfig.CHANNEL_NAME}
  shown = notifier.shown[AlarmConfig.NOTIFICATION_ID]
  assert shown.title == AlarmConfig.NOTIFICATION_TITLE
  assert shown.body == AlarmConfig.NOTIFICATION_BODY
  assert shown.channel_id == AlarmConfig.CHANNEL_ID


@pytest.mark.asyncio
async def test_repeated_fire_replaces_alert(notifier):
  await handle_fire(notifier)
  await handle_fire(notifier)

  assert notifier.posted == 2
  assert list(notifier.shown) == [AlarmConfig.NOTIFICATION_ID]
  assert len(notifier.channels) == 1


def test_ensure_channel_skips_existing():
  notifier = MagicMock(spec=NotificationManager)
  notifier.channel_exists.return_value = True

  ensure_channel(notifier)

  notifier.create_channel.assert_not_called()


def test_ensure_channel_creates_missing():
  notifier = MagicMock(spec=NotificationManager)
  notifier.channel_exists.return_value = False

  ensure_channel(notifier)

  notifier.create_channel.assert_called_once_with(
    AlarmConfig.CHANNEL_ID, AlarmConfig.CHANNEL_NAME, "high"
  )


@pytest.mark.asyncio
async def test_fire_does_not_touch_persisted_state(ctx, storage, timers):
  from alarm import on_fire

  storage.available = False
  timers.register_daily(1000, datetime(2026, 10, 20, 9, 30), "daybreak-fire", [])

  await timers.fire(1000, lambda _registration: on_fire(ctx))

  assert ctx.notifier.posted == 1
  assert timers.registrations[1000].fire_at == datetime(2026, 10, 21, 9, 30)


@pytest.mark.asyncio
async def test_fire_propagates_presentation_failure():
  notifier = MagicMock(spec=NotificationManager)
  notifier.channel_exists.return_value = True
  notifier.create_notification = AsyncMock(side_effect=RuntimeError("no session bus"))

  with pytest.raises(RuntimeError):
    await handle_fire(notifier)


@pytest.mark.asyncio
async def test_fire_worker_posts_alert(notifier, timers, storage):
  from notification.main import main
  from os_interfaces.base import OSImplementations

  os_impl = OSImplementations(
    notification_manager_cls=lambda app_name: notifier,
    timer_manager_cls=lambda app_name: timers,
    config_storage_cls=lambda app_name, config_name: storage,
  )

  await main(os_impl=os_impl, argv=[])

  assert notifier.posted == 1
  assert storage.load() == {}
