"""Alarm context and the entry points offered to presenters.

A presenter only ever calls:
- `load_reconciled_model(ctx)`
- `toggle(ctx, current)`
- `update_time(ctx, hour, minute)`
- `on_fire(ctx)` (from the fire-event worker)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from os_interfaces.base import NotificationManager, OSImplementations

from .config import AlarmConfig
from .exceptions import AlarmError
from .model import DEFAULT_ALARM, AlarmModel
from .reconcile import reconcile
from .scheduler import SchedulerGateway
from .store import PersistenceStore
from .toggle import ToggleStateMachine
from .trigger import handle_fire

logger = logging.getLogger(__name__)


@dataclass
class AlarmContext:
  """The alarm slot plus the collaborators every operation needs"""

  store: PersistenceStore
  gateway: SchedulerGateway
  notifier: NotificationManager
  now: Callable[[], datetime] = datetime.now
  model: AlarmModel = DEFAULT_ALARM
  reconciled: bool = field(default=False, init=False)

  @property
  def machine(self) -> ToggleStateMachine:
    return ToggleStateMachine(self.store, self.gateway, now=self.now)

  @classmethod
  def from_os(cls, os_impl: OSImplementations, app_name: str | None = None) -> AlarmContext:
    """Wire the platform implementations into a context"""
    app_name = app_name or AlarmConfig.APP_NAME
    storage = os_impl.config_storage(app_name, AlarmConfig.STORE_NAME)
    return cls(
      store=PersistenceStore(storage),
      gateway=SchedulerGateway(os_impl.timer_manager(app_name)),
      notifier=os_impl.notification_manager(app_name),
    )


def load_reconciled_model(ctx: AlarmContext) -> AlarmModel:
  """Load the persisted alarm and repair any divergence from the scheduler"""
  ctx.model = reconcile(ctx.store.load(), ctx.store, ctx.gateway)
  ctx.reconciled = True
  return ctx.model


def _require_reconciled(ctx: AlarmContext) -> None:
  if not ctx.reconciled:
    load_reconciled_model(ctx)


def toggle(ctx: AlarmContext, current: AlarmModel) -> AlarmModel:
  """Flip the alarm on/off.

  Raises:
    SchedulingError: The scheduler refused the call; persisted state unchanged
    PersistenceError: The store could not be written
  """
  _require_reconciled(ctx)
  try:
    ctx.model = ctx.machine.toggle(current)
  except AlarmError:
    ctx.reconciled = False
    raise
  return ctx.model


def update_time(ctx: AlarmContext, hour: int, minute: int) -> AlarmModel:
  """Set a new alarm time; the alarm is left off until toggled on again.

  Raises:
    SchedulingError: The old registration could not be cancelled; the next
      entry point reconciles before acting
    PersistenceError: The store could not be written
  """
  _require_reconciled(ctx)
  try:
    ctx.model = ctx.machine.change_time(hour, minute)
  except AlarmError:
    ctx.reconciled = False
    raise
  return ctx.model


async def on_fire(ctx: AlarmContext) -> None:
  """Dispatch the alert for a fire event delivered by the scheduler"""
  await handle_fire(ctx.notifier)
