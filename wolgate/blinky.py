"""A tick-driven model of the blinky demo: one queue, one timer, two tasks."""

from __future__ import annotations

import argparse
from collections import deque
from enum import IntEnum

from wolgate.config import KernelConfig

QUEUE_LENGTH = 2
TASK_SEND_FREQUENCY_MS = 200
TIMER_SEND_FREQUENCY_MS = 2000

FROM_TASK = "Message received from task"
FROM_TIMER = "Message received from software timer"
UNEXPECTED = "Unexpected message"


class Source(IntEnum):
    """Values placed on the queue by each sender."""

    TASK = 100
    TIMER = 200


def describe_value(value: int) -> str:
    """The line the receive task prints for a value taken from the queue."""
    if value == Source.TASK:
        return FROM_TASK
    if value == Source.TIMER:
        return FROM_TIMER
    return UNEXPECTED


class BlinkyDemo:
    """Periodic send task and auto-reload timer feeding a receive task.

    The receive task runs at a higher priority than the send task, and the
    timer service task above both, so each value is consumed as soon as it is
    queued; when the timer and the send task fall due on the same tick, the
    timer's value is handled first.
    """

    def __init__(self, config: KernelConfig | None = None, queue_length: int = QUEUE_LENGTH) -> None:
        if queue_length < 1:
            raise ValueError("queue length must be at least 1")
        self.config = config if config is not None else KernelConfig()
        self.queue_length = queue_length
        self.task_period = self.config.ms_to_ticks(TASK_SEND_FREQUENCY_MS)
        self.timer_period = self.config.ms_to_ticks(TIMER_SEND_FREQUENCY_MS)
        if self.task_period < 1 or self.timer_period < 1:
            raise ValueError("tick rate too low for the demo periods")
        self.tick_count = 0
        self._next_send = self.task_period
        self._next_timer = self.timer_period
        self._queue: deque[int] = deque()
        self.dropped = 0
        self.output: list[str] = []

    def _send(self, value: int) -> list[str]:
        # A zero block time: a full queue means the value is lost.
        if len(self._queue) >= self.queue_length:
            self.dropped += 1
            return []
        self._queue.append(value)
        lines = []
        while self._queue:
            lines.append(describe_value(self._queue.popleft()))
        return lines

    def tick(self) -> list[str]:
        """Advance one tick and return the lines printed during it."""
        self.tick_count += 1
        lines: list[str] = []
        if self.tick_count == self._next_timer:
            self._next_timer += self.timer_period
            lines += self._send(Source.TIMER)
        if self.tick_count == self._next_send:
            self._next_send += self.task_period
            lines += self._send(Source.TASK)
        self.output.extend(lines)
        return lines

    def run(self, ticks: int) -> list[str]:
        """Advance ``ticks`` ticks and return every line printed meanwhile."""
        if ticks < 0:
            raise ValueError("cannot run a negative number of ticks")
        lines: list[str] = []
        for _ in range(ticks):
            lines.extend(self.tick())
        return lines


def main(argv: list[str] | None = None) -> int:
    """Run the demo for a number of simulated ticks and print its output."""
    parser = argparse.ArgumentParser(description="Run the queue and timer demo.")
    parser.add_argument("--ticks", type=int, default=10_000)
    parser.add_argument("--xlen", type=int, choices=(32, 64), default=32)
    args = parser.parse_args(argv)
    demo = BlinkyDemo(KernelConfig.for_xlen(args.xlen))
    for line in demo.run(args.ticks):
        print(line, end="\r\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())