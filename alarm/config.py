"""
Configuration module for the daybreak alarm
Settings come from the environment, optionally seeded from a .env file
"""

import os
import logging

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AlarmConfig:
  """Alarm settings"""

  APP_NAME = os.getenv("DAYBREAK_APP_NAME", "daybreak")

  # Storage (preferences name and keys)
  STORE_NAME = os.getenv("DAYBREAK_STORE_NAME", "time")
  TIME_KEY = "alarm"
  ENABLED_KEY = "onOff"
  DEFAULT_TIME = "9:30"

  # Scheduler
  REQUEST_CODE = int(os.getenv("DAYBREAK_REQUEST_CODE", "1000"))
  FIRE_COMMAND = os.getenv("DAYBREAK_FIRE_COMMAND", "daybreak-fire")

  # Alert
  CHANNEL_ID = os.getenv("DAYBREAK_CHANNEL_ID", "1000")
  CHANNEL_NAME = os.getenv("DAYBREAK_CHANNEL_NAME", "Wake-up alarm")
  CHANNEL_IMPORTANCE = "high"
  NOTIFICATION_ID = int(os.getenv("DAYBREAK_NOTIFICATION_ID", "100"))
  NOTIFICATION_TITLE = os.getenv("DAYBREAK_NOTIFICATION_TITLE", "Alarm")
  NOTIFICATION_BODY = os.getenv("DAYBREAK_NOTIFICATION_BODY", "Time to wake up.")

  # Logging
  LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configure_logging(level: str | None = None) -> None:
  """Set up root logging for the command line entrypoints"""
  logging.basicConfig(
    level=getattr(logging, (level or AlarmConfig.LOG_LEVEL).upper(), logging.INFO),
    format=LOG_FORMAT,
  )
