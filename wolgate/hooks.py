"""Application hooks the kernel calls: console output, fatal errors, task memory."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from wolgate.blinky import BlinkyDemo
from wolgate.config import NS16550_ADDR, KernelConfig
from wolgate.full import CheckTask
from wolgate.uart import NS16550, LineStatus, MemoryBus, Register

IDLE_TASK_NAME = "IDLE"
TIMER_TASK_NAME = "Tmr Svc"


class DemoMode(Enum):
    """Which demo application the board starts."""

    BLINKY = "blinky"
    FULL = "full"


class KernelHalt(Exception):
    """The kernel disabled interrupts and stopped: nothing more will run."""


class MallocFailed(KernelHalt):
    """A kernel allocation failed."""

    def __init__(self) -> None:
        super().__init__("Malloc failed")


class StackOverflow(KernelHalt):
    """A task overran its stack."""

    def __init__(self, task_name: str) -> None:
        super().__init__(f"Stack overflow in {task_name}")
        self.task_name = task_name


class AssertionFailed(KernelHalt):
    """A kernel assertion did not hold."""

    def __init__(self, file_name: str, line: int) -> None:
        super().__init__(f"ASSERT! Line {line}, file {file_name}")
        self.file_name = file_name
        self.line = line


@dataclass
class TaskMemory:
    """Statically allocated control block and stack of a kernel task."""

    name: str
    stack_depth: int
    stack: list[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.stack_depth < 1:
            raise ValueError("a task stack needs at least one word")
        if not self.stack:
            self.stack = [0] * self.stack_depth
        elif len(self.stack) != self.stack_depth:
            raise ValueError("stack length does not match its depth")


def _default_uart() -> NS16550:
    bus = MemoryBus()
    bus.write_byte(NS16550_ADDR + Register.LSR, LineStatus.THRE | LineStatus.TEMT)
    return NS16550(bus, NS16550_ADDR)


class Application:
    """The board-level application: output, hooks and demo selection."""

    def __init__(
        self,
        uart=None,
        config: KernelConfig | None = None,
        mode: DemoMode = DemoMode.FULL,
        tick_hook: Callable[[], object] | None = None,
    ) -> None:
        self.uart = uart if uart is not None else _default_uart()
        self.config = config if config is not None else KernelConfig()
        self.mode = DemoMode(mode)
        self.tick_hook = tick_hook
        self.interrupts_enabled = True
        self._idle_memory: TaskMemory | None = None
        self._timer_memory: TaskMemory | None = None

    def write(self, text: str | bytes) -> int:
        """Send text to the console byte by byte; return the number of bytes."""
        data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        for byte in data:
            self.uart.put_char(byte)
        return len(data)

    def _halt(self, error: KernelHalt) -> None:
        self.interrupts_enabled = False
        raise error

    def malloc_failed(self) -> None:
        """Report a failed allocation and halt."""
        self.write("\r\n\r\nMalloc failed\r\n")
        self._halt(MallocFailed())

    def stack_overflow(self, task_name: str) -> None:
        """Report a stack overflow in ``task_name`` and halt."""
        self.write(f"\r\n\r\nStack overflow in {task_name}\r\n")
        self._halt(StackOverflow(task_name))

    def tick(self) -> bool:
        """Run the tick hook if the full demo is active; return whether it ran."""
        if not self.config.use_tick_hook or self.mode is DemoMode.BLINKY:
            return False
        if self.tick_hook is None:
            return False
        self.tick_hook()
        return True

    def assert_called(self, file_name: str, line: int) -> None:
        """Report a failed assertion and halt."""
        self.write(f"ASSERT! Line {int(line)}, file {file_name}\r\n")
        self._halt(AssertionFailed(file_name, int(line)))

    def idle_task_memory(self) -> TaskMemory:
        """The idle task's static memory; the same block on every call."""
        if self._idle_memory is None:
            self._idle_memory = TaskMemory(IDLE_TASK_NAME, self.config.minimal_stack_size)
        return self._idle_memory

    def timer_task_memory(self) -> TaskMemory:
        """The timer service task's static memory; the same block on every call."""
        if self._timer_memory is None:
            self._timer_memory = TaskMemory(
                TIMER_TASK_NAME, self.config.timer_task_stack_depth()
            )
        return self._timer_memory

    def select_demo(self) -> BlinkyDemo | CheckTask:
        """Build the demo chosen by the mode."""
        if self.mode is DemoMode.BLINKY:
            return BlinkyDemo(self.config)
        return CheckTask(config=self.config)