"""Platform-agnostic command line front end for the alarm.

The platform-specific entrypoints (Linux/Android) import this module and
provide the correct OS-interface implementations.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Iterable, Mapping

from alarm import (
  AlarmContext,
  AlarmError,
  AlarmModel,
  load_reconciled_model,
  toggle,
  update_time,
)
from alarm.config import configure_logging
from os_interfaces.base import OSImplementations

logger = logging.getLogger(__name__)


def render(model: AlarmModel) -> str:
  display = model.format()
  state = "on" if model.enabled else "off"
  return f"{display.ampm_text} {display.time_text} [{state}] ({display.on_off_text})"


def _parse_time(value: str) -> tuple[int, int]:
  try:
    model = AlarmModel.parse(value)
  except AlarmError as e:
    raise argparse.ArgumentTypeError(e.description) from e
  return model.hour, model.minute


def build_parser(backends: Iterable[str] = ("linux", "memory")) -> argparse.ArgumentParser:
  backends = list(backends)
  parser = argparse.ArgumentParser(
    prog="daybreak", description="Daily wake-up alarm kept in sync with the OS scheduler."
  )
  parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL)")
  parser.add_argument(
    "--backend",
    choices=backends,
    default=backends[0],
    help="OS interfaces to use; memory is a dry run that touches nothing",
  )
  sub = parser.add_subparsers(dest="command", required=True)
  sub.add_parser("status", help="Show the alarm after repairing any divergence")
  sub.add_parser("toggle", help="Turn the alarm on or off")
  set_parser = sub.add_parser("set", help="Change the alarm time (leaves the alarm off)")
  set_parser.add_argument("time", type=_parse_time, help="Time as H:M, 24-hour clock")
  sub.add_parser("reconcile", help="Re-check the alarm against the scheduler")
  return parser


def main(
  os_impl: OSImplementations | None = None,
  argv: list[str] | None = None,
  backends: Mapping[str, Callable[[], OSImplementations]] | None = None,
) -> int:
  """Run one command. `os_impl` wins over `--backend` when given."""
  parser = build_parser(backends or ("linux", "memory"))
  args = parser.parse_args(argv)
  configure_logging(args.log_level)

  if os_impl is None:
    if not backends:
      parser.error("no OS interfaces available")
    os_impl = backends[args.backend]()
    logger.debug(f"Using {args.backend} backend")

  ctx = AlarmContext.from_os(os_impl)
  try:
    model = load_reconciled_model(ctx)
    match args.command:
      case "toggle":
        model = toggle(ctx, model)
      case "set":
        hour, minute = args.time
        model = update_time(ctx, hour, minute)
      case "status" | "reconcile":
        pass
  except AlarmError as e:
    logger.error(f"{args.command} failed: {e.description}")
    print(e.to_response().model_dump_json(indent=2), file=sys.stderr)
    return 1

  print(render(model))
  return 0
