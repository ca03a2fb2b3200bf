"""
Test on/off transitions and next-fire computation
Run with: uv run pytest test/test_toggle.py
"""

from datetime import datetime

import pytest

from alarm.exceptions import PersistenceError, SchedulingError
from alarm.model import AlarmModel
from alarm.scheduler import from_epoch_millis, next_fire, to_epoch_millis
from alarm.toggle import AlarmState, ToggleStateMachine


@pytest.fixture
def machine(store, gateway, clock):
  return ToggleStateMachine(store, gateway, now=clock)


class TestNextFire:
  """Tests for next_fire"""

  def test_past_time_moves_to_tomorrow(self):
    now = datetime(2026, 10, 19, 10, 0)
    assert next_fire(9, 30, now) == datetime(2026, 10, 20, 9, 30)

  def test_future_time_stays_today(self):
    now = datetime(2026, 10, 19, 8, 0)
    assert next_fire(9, 30, now) == datetime(2026, 10, 19, 9, 30)

  def test_exactly_now_moves_to_tomorrow(self):
    now = datetime(2026, 10, 19, 9, 30)
    assert next_fire(9, 30, now) == datetime(2026, 10, 20, 9, 30)

  def test_seconds_are_dropped(self):
    now = datetime(2026, 10, 19, 9, 29, 59, 999)
    assert next_fire(9, 30, now) == datetime(2026, 10, 19, 9, 30)

  def test_rolls_over_month_end(self):
    now = datetime(2026, 10, 31, 23, 0)
    assert next_fire(6, 0, now) == datetime(2026, 11, 1, 6, 0)

  def test_epoch_millis(self):
    dt = datetime(2026, 10, 19, 9, 30)
    assert from_epoch_millis(to_epoch_millis(dt)) == dt


class TestToggleStateMachine:
  """Tests for ToggleStateMachine"""

  def test_turn_on_past_time_registers_tomorrow(self, machine, store, timers):
    result = machine.turn_on(AlarmModel(hour=9, minute=30))

    assert result.enabled is True
    assert store.load().enabled is True
    registration = timers.registrations[1000]
    assert registration.fire_at == datetime(2026, 10, 20, 9, 30)
    assert registration.command == "daybreak-fire"

  def test_turn_on_future_time_registers_today(self, machine, clock, timers):
    clock.current = datetime(2026, 10, 19, 8, 0)

    machine.turn_on(AlarmModel(hour=9, minute=30))

    assert timers.registrations[1000].fire_at == datetime(2026, 10, 19, 9, 30)

  def test_register_happens_before_save(self, machine, store, timers, storage):
    order = []
    original_update = storage.update
    storage.update = lambda values: (order.append("save"), original_update(values))
    timers.register_daily = lambda *a: order.append("register")

    machine.turn_on(AlarmModel(hour=6, minute=0))

    assert order == ["register", "save"]

  def test_failed_register_leaves_persisted_off(self, machine, store, timers):
    store.save(6, 0, False)
    timers.fail_next = RuntimeError("AlarmManager refused")

    with pytest.raises(SchedulingError) as exc_info:
      machine.turn_on(AlarmModel(hour=6, minute=0))

    assert exc_info.value.name == "REGISTER_FAILED"
    assert store.load().enabled is False
    assert timers.registrations == {}

  def test_failed_save_withdraws_registration(self, machine, storage, timers):
    storage.available = False

    with pytest.raises(PersistenceError):
      machine.turn_on(AlarmModel(hour=6, minute=0))

    assert timers.registrations == {}

  def test_turn_off_cancels_then_saves(self, machine, store, timers):
    on = machine.turn_on(AlarmModel(hour=6, minute=0))

    off = machine.turn_off(on)

    assert off == AlarmModel(hour=6, minute=0, enabled=False)
    assert store.load() == off
    assert timers.registrations == {}

  def test_turn_off_when_nothing_registered(self, machine, store, timers):
    off = machine.turn_off(AlarmModel(hour=6, minute=0, enabled=True))
    assert off.enabled is False
    assert timers.calls == ["cancel"]

  def test_failed_cancel_leaves_persisted_on(self, machine, store, timers):
    on = machine.turn_on(AlarmModel(hour=6, minute=0))
    timers.fail_next = RuntimeError("dbus down")

    with pytest.raises(SchedulingError):
      machine.turn_off(on)

    assert store.load().enabled is True
    assert 1000 in timers.registrations

  def test_on_off_on_leaves_one_registration(self, machine, store, gateway, timers):
    model = store.save(6, 0, False)
    model = machine.toggle(model)
    model = machine.toggle(model)
    model = machine.toggle(model)

    assert model.enabled is True
    assert gateway.peek_registration() is True
    assert list(timers.registrations) == [1000]

    gateway.register_daily(to_epoch_millis(datetime(2026, 10, 21, 6, 0)))
    assert len(timers.registrations) == 1

  def test_toggle_uses_latest_persisted_state(self, machine, store):
    store.save(6, 0, True)
    stale = AlarmModel(hour=6, minute=0, enabled=False)

    result = machine.toggle(stale)

    assert result.enabled is False

  def test_change_time_lands_off(self, machine, store, timers):
    machine.turn_on(AlarmModel(hour=6, minute=0))

    result = machine.change_time(7, 45)

    assert result == AlarmModel(hour=7, minute=45, enabled=False)
    assert store.load() == result
    assert timers.registrations == {}

  def test_change_time_cancel_failure_is_raised(self, machine, store, timers):
    machine.turn_on(AlarmModel(hour=6, minute=0))
    timers.fail_next = RuntimeError("dbus down")

    with pytest.raises(SchedulingError) as exc_info:
      machine.change_time(7, 45)

    assert exc_info.value.name == "CANCEL_FAILED"
    assert store.load() == AlarmModel(hour=7, minute=45, enabled=False)
    assert 1000 in timers.registrations

  def test_state_of(self):
    assert AlarmState.of(AlarmModel(enabled=True)) is AlarmState.ON
    assert AlarmState.of(AlarmModel()) is AlarmState.OFF
