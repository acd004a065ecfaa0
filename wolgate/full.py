"""The full demo's check task and register-test entry points."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from wolgate.config import KernelConfig

CHECK_TASK_PERIOD_MS = 5000

REG_TEST_TASK_1_PARAMETER = 0x12345678
REG_TEST_TASK_2_PARAMETER = 0x87654321

SUCCESS_MESSAGE = "FreeRTOS Demo SUCCESS:"
BANNER = "FreeRTOS Demo Start\r\n"
BANNER_WITH_FPU = "FreeRTOS Demo Start (With FPU and vector)\r\n"
REG_TEST_ERRORS = {
    1: "FreeRTOS Demo ERROR: Register test 1.\r\n",
    2: "FreeRTOS Demo ERROR: Register test 2.\r\n",
}

TIMER_CHECK = "xAreTimerDemoTasksStillRunning"

# The buffer checks form a chain of their own; the main chain that follows
# is evaluated regardless and its failure message wins.
_BUFFER_CHECKS = (
    "xAreStreamBufferTasksStillRunning",
    "xAreMessageBufferTasksStillRunning",
)
_MAIN_CHECKS = (
    "xAreGenericQueueTasksStillRunning",
    "xIsCreateTaskStillRunning",
    "xAreBlockTimeTestTasksStillRunning",
    "xAreSemaphoreTasksStillRunning",
    "xArePollingQueuesStillRunning",
    "xAreQueuePeekTasksStillRunning",
    "xAreRecursiveMutexTasksStillRunning",
    "xAreQueueSetTasksStillRunning",
    "xAreEventGroupTasksStillRunning",
    "xAreAbortDelayTestTasksStillRunning",
    "xAreCountingSemaphoreTasksStillRunning",
    "xAreDynamicPriorityTasksStillRunning",
    "xAreMessageBufferAMPTasksStillRunning",
    "xIsQueueOverwriteTaskStillRunning",
    "xAreQueueSetPollTasksStillRunning",
    "xAreStaticAllocationTasksStillRunning",
    "xAreTaskNotificationTasksStillRunning",
    "xAreTaskNotificationArrayTasksStillRunning",
    TIMER_CHECK,
    "xIsInterruptStreamBufferDemoStillRunning",
    "xAreInterruptSemaphoreTasksStillRunning",
)

_COUNTER_MASK = 0xFFFFFFFF


def check_names() -> list[str]:
    """Names of the demo health checks, in the order the check task runs them."""
    return [*_BUFFER_CHECKS, *_MAIN_CHECKS]


def _failure_message(name: str) -> str:
    return f"FreeRTOS Demo ERROR: {name}() returned false"


@dataclass
class RegTestCounters:
    """Loop counters advanced by the two register test tasks."""

    reg1: int = 0
    reg2: int = 0

    def increment(self, which: int) -> int:
        """Advance counter 1 or 2, wrapping at 32 bits; return the new value."""
        if which == 1:
            self.reg1 = (self.reg1 + 1) & _COUNTER_MASK
            return self.reg1
        if which == 2:
            self.reg2 = (self.reg2 + 1) & _COUNTER_MASK
            return self.reg2
        raise ValueError(f"no register test {which}")


def reg_test_entry(parameter: int, expected: int, implementation: Callable[[], object]) -> bool:
    """Run ``implementation`` only if the task received the expected parameter."""
    if parameter != expected:
        return False
    implementation()
    return True


class CheckTask:
    """Periodically verifies every demo and reports the first failure found.

    ``checks`` maps check names to callables returning truth; the timer check
    is passed the task period in ticks, the others no argument. Checks that
    are not given are taken to pass. Once an error is reported the message
    stays until a later failure replaces it.
    """

    def __init__(
        self,
        checks: Mapping[str, Callable[..., bool]] | None = None,
        counters: RegTestCounters | None = None,
        config: KernelConfig | None = None,
    ) -> None:
        checks = dict(checks or {})
        unknown = set(checks) - set(check_names())
        if unknown:
            raise ValueError(f"unknown checks: {', '.join(sorted(unknown))}")
        self.checks = checks
        self.counters = counters if counters is not None else RegTestCounters()
        self.config = config if config is not None else KernelConfig()
        self.period = self.config.ms_to_ticks(CHECK_TASK_PERIOD_MS)
        self.message = SUCCESS_MESSAGE
        self._last_reg1 = 0
        self._last_reg2 = 0

    def start_banner(self, has_fpu: bool = False) -> str:
        """The line printed when the check task starts."""
        return BANNER_WITH_FPU if has_fpu else BANNER

    def _passes(self, name: str) -> bool:
        check = self.checks.get(name)
        if check is None:
            return True
        if name == TIMER_CHECK:
            return bool(check(self.period))
        return bool(check())

    def _first_failure(self, names) -> str | None:
        return next((name for name in names if not self._passes(name)), None)

    def run_cycle(self, tick_count: int) -> str:
        """Run one round of checks and return the status line for it."""
        failed = self._first_failure(_BUFFER_CHECKS)
        if failed is not None:
            self.message = _failure_message(failed)

        failed = self._first_failure(_MAIN_CHECKS)
        if failed is not None:
            self.message = _failure_message(failed)
        elif self._last_reg1 == self.counters.reg1:
            self.message = REG_TEST_ERRORS[1]
        elif self._last_reg2 == self.counters.reg2:
            self.message = REG_TEST_ERRORS[2]

        self._last_reg1 = self.counters.reg1
        self._last_reg2 = self.counters.reg2
        return f"{self.message} : {tick_count}\r\n"