#!/usr/bin/env python3
"""
Generate a bulk batch of synthetic factory machine events.

The batch is the load-test payload for the factory-events ingestion API:
1000 events, one minute apart, starting at a fixed anchor time. Machine, line
and factory ids cycle with the event index; received-time lag, duration and
defect count are random.

Output (stdout):
  JSON array (default), JSONL or CSV
Columns: eventId, eventTime, receivedTime, machineId, lineId, factoryId,
         durationMs, defectCount
"""

import argparse
import io
import json
import logging
import random
import sys
from datetime import datetime, timedelta, timezone
from typing import Dict, List, NamedTuple, Optional, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

ANCHOR_TIME = datetime(2026, 1, 16, 8, 0, 0, tzinfo=timezone.utc)
NUM_EVENTS = 1000
EVENT_SPACING = timedelta(minutes=1)

MAX_RECEIVE_LAG_MS = 5000
MIN_DURATION_MS = 1000
DURATION_SPAN_MS = 20000
MAX_DEFECTS = 10

NUM_MACHINES = 10
NUM_LINES = 5
NUM_FACTORIES = 3

FORMATS = ["json", "jsonl", "csv"]


def iso_millis(ts: datetime) -> str:
    """Return a UTC timestamp as YYYY-MM-DDTHH:MM:SS.mmmZ."""
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S") + f".{ts.microsecond // 1000:03d}Z"


class FactoryEvent(NamedTuple):
    eventId: str
    eventTime: datetime
    receivedTime: datetime
    machineId: str
    lineId: str
    factoryId: str
    durationMs: int
    defectCount: int

    def to_dict(self) -> Dict[str, object]:
        row = self._asdict()
        row["eventTime"] = iso_millis(self.eventTime)
        row["receivedTime"] = iso_millis(self.receivedTime)
        return dict(row)


def make_event(index: int, rng: random.Random) -> FactoryEvent:
    event_time = ANCHOR_TIME + index * EVENT_SPACING
    # received 0..5s after the event happened
    received_time = event_time + timedelta(milliseconds=rng.randrange(MAX_RECEIVE_LAG_MS))
    return FactoryEvent(
        eventId=f"bulk-event-{index:04d}",
        eventTime=event_time,
        receivedTime=received_time,
        machineId=f"machine-{index % NUM_MACHINES}",
        lineId=f"line-{(index % NUM_LINES) + 1}",
        factoryId=f"factory-{index % NUM_FACTORIES}",
        durationMs=rng.randrange(DURATION_SPAN_MS) + MIN_DURATION_MS,
        defectCount=rng.randrange(MAX_DEFECTS),
    )


def generate_events(rng: Optional[random.Random] = None) -> List[FactoryEvent]:
    """
    Build the full batch in index order.

    Without an explicit rng the random fields come from a fresh, unseeded
    generator, so only ids, event times and machine/line/factory ids repeat
    between runs.
    """
    if rng is None:
        rng = random.Random()
    return [make_event(i, rng) for i in range(NUM_EVENTS)]


def serialize(events: Sequence[FactoryEvent], fmt: str = "json") -> str:
    rows = [e.to_dict() for e in events]
    if fmt == "json":
        return json.dumps(rows, indent=2)
    if fmt == "jsonl":
        return "\n".join(json.dumps(r) for r in rows)
    if fmt == "csv":
        buf = io.StringIO()
        pd.DataFrame(rows, columns=list(FactoryEvent._fields)).to_csv(
            buf, index=False, lineterminator="\n"
        )
        return buf.getvalue().rstrip("\n")
    raise ValueError(f"unknown output format: {fmt!r}")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a bulk batch of synthetic factory events.")
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible durations/defects/lag (default: unseeded).",
    )
    p.add_argument("--format", choices=FORMATS, default="json", help="Output encoding.")
    p.add_argument("--verbose", action="store_true", help="Log progress to stderr.")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(format="%(message)s")
    logger.setLevel(logging.INFO if args.verbose else logging.WARNING)

    events = generate_events(random.Random(args.seed))
    logger.info("[✓] Generated %d factory events from %s", len(events), iso_millis(ANCHOR_TIME))

    sys.stdout.write(serialize(events, args.format) + "\n")
    logger.info("[✓] Wrote %s batch to stdout", args.format)


if __name__ == "__main__":
    main()
