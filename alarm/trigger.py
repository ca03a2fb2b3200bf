"""
Handles a fire event delivered by the scheduler
"""

import logging

from os_interfaces.base import NotificationManager

from .config import AlarmConfig

logger = logging.getLogger(__name__)


def ensure_channel(
  notifier: NotificationManager,
  channel_id: str = AlarmConfig.CHANNEL_ID,
  name: str = AlarmConfig.CHANNEL_NAME,
) -> None:
  """Create the alert channel unless it already exists"""
  if notifier.channel_exists(channel_id):
    return
  notifier.create_channel(channel_id, name, AlarmConfig.CHANNEL_IMPORTANCE)
  logger.info(f"Created alert channel {channel_id}")


async def handle_fire(notifier: NotificationManager) -> None:
  """Show the wake-up alert.

  Independent of the persisted on/off flag: whatever the scheduler holds is
  what fires. The fixed notification id makes a repeat replace the last one.
  """
  ensure_channel(notifier)
  await notifier.create_notification(
    title=AlarmConfig.NOTIFICATION_TITLE,
    body=AlarmConfig.NOTIFICATION_BODY,
    notification_id=AlarmConfig.NOTIFICATION_ID,
    channel_id=AlarmConfig.CHANNEL_ID,
  )
  logger.info("Alarm alert dispatched")
