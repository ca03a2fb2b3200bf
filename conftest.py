"""Shared fixtures: an alarm context wired to in-memory OS interfaces"""

from datetime import datetime

import pytest

from alarm import AlarmContext
from alarm.scheduler import SchedulerGateway
from alarm.store import PersistenceStore
from os_interfaces.memory import (
  InMemoryConfigStorage,
  InMemoryNotificationManager,
  InMemoryTimerManager,
)


class FakeClock:
  """Callable clock the tests can move"""

  def __init__(self, now: datetime):
    self.current = now

  def __call__(self) -> datetime:
    return self.current


@pytest.fixture
def clock():
  return FakeClock(datetime(2026, 10, 19, 10, 0))


@pytest.fixture
def storage():
  return InMemoryConfigStorage()


@pytest.fixture
def timers():
  return InMemoryTimerManager()


@pytest.fixture
def notifier():
  return InMemoryNotificationManager()


@pytest.fixture
def store(storage):
  return PersistenceStore(storage)


@pytest.fixture
def gateway(timers):
  return SchedulerGateway(timers, identifier=1000, fire_command="daybreak-fire")


@pytest.fixture
def ctx(store, gateway, notifier, clock):
  return AlarmContext(store=store, gateway=gateway, notifier=notifier, now=clock)
