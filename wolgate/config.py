"""Kernel configuration and memory map of the RISC-V virt board."""

from __future__ import annotations

from dataclasses import dataclass

PRIM_HART = 0

CLINT_ADDR = 0x02000000
CLINT_MSIP = 0x0000
CLINT_MTIMECMP = 0x4000
CLINT_MTIME = 0xBFF8

NS16550_ADDR = 0x10000000


@dataclass(frozen=True)
class RegisterLayout:
    """Width of a general purpose register and the instructions that move it."""

    size: int
    shift: int
    load: str
    store: str


_LAYOUTS = {
    32: RegisterLayout(size=4, shift=2, load="lw", store="sw"),
    64: RegisterLayout(size=8, shift=3, load="ld", store="sd"),
}


def register_layout(xlen: int) -> RegisterLayout:
    """Return the register layout for a 32 or 64 bit hart."""
    try:
        return _LAYOUTS[xlen]
    except KeyError:
        raise ValueError(f"unsupported register width: {xlen}") from None


@dataclass(frozen=True)
class KernelConfig:
    """Scheduler settings for the demo application."""

    xlen: int = 32
    cpu_clock_hz: int = 25_000_000
    tick_rate_hz: int = 1000
    minimal_stack_size: int = 120
    total_heap_size: int = 80 * 1024
    isr_stack_size_words: int = 300
    use_preemption: bool = True
    use_idle_hook: bool = False
    use_tick_hook: bool = True
    use_malloc_failed_hook: bool = True
    check_for_stack_overflow: int = 2
    max_task_name_len: int = 12
    max_priorities: int = 9
    max_co_routine_priorities: int = 2
    queue_registry_size: int = 10
    support_static_allocation: bool = True
    use_timers: bool = True
    timer_queue_length: int = 20
    use_task_notifications: bool = True
    task_notification_array_entries: int = 3
    use_mutexes: bool = True
    use_recursive_mutexes: bool = True
    use_counting_semaphores: bool = True
    use_queue_sets: bool = True
    use_trace_facility: bool = True
    run_additional_tests: bool = True
    stream_buffer_trigger_level_test_margin: int = 2
    clint_addr: int = CLINT_ADDR

    def __post_init__(self) -> None:
        register_layout(self.xlen)
        if self.tick_rate_hz <= 0:
            raise ValueError("tick rate must be positive")

    @classmethod
    def for_xlen(cls, xlen: int) -> KernelConfig:
        """Return the configuration used on a 32 or 64 bit hart."""
        register_layout(xlen)
        if xlen == 64:
            return cls(xlen=64, minimal_stack_size=240, total_heap_size=220 * 1024)
        return cls(xlen=32, minimal_stack_size=120, total_heap_size=80 * 1024)

    @property
    def layout(self) -> RegisterLayout:
        return register_layout(self.xlen)

    @property
    def timer_task_priority(self) -> int:
        return self.max_priorities - 3

    @property
    def interrupt_queue_higher_priority(self) -> int:
        return self.max_priorities - 5

    @property
    def block_time_primary_priority(self) -> int:
        return self.max_priorities - 4

    @property
    def block_time_secondary_priority(self) -> int:
        return self.max_priorities - 5

    def ms_to_ticks(self, ms: int) -> int:
        """Convert milliseconds to whole ticks, rounding down."""
        if ms < 0:
            raise ValueError("a duration cannot be negative")
        return (int(ms) * self.tick_rate_hz) // 1000

    def timer_task_stack_depth(self) -> int:
        """Stack depth, in words, of the timer service task."""
        return self.minimal_stack_size * 2

    def mtime_address(self) -> int:
        """Address of the machine timer register."""
        return self.clint_addr + CLINT_MTIME

    def mtimecmp_address(self) -> int:
        """Address of the machine timer compare register."""
        return self.clint_addr + CLINT_MTIMECMP