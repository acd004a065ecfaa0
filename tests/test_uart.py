import pytest

from wolgate.uart import NS16550, LineStatus, MemoryBus, Register

BASE = 0x10000000


class _SlowBus:
    """Reports a busy transmitter for a number of status reads."""

    def __init__(self, busy_reads):
        self.busy_reads = busy_reads
        self.lsr_reads = 0
        self.writes = []

    def read_byte(self, addr):
        if addr == BASE + Register.LSR:
            self.lsr_reads += 1
            return 0 if self.lsr_reads <= self.busy_reads else int(LineStatus.THRE)
        return 0

    def write_byte(self, addr, value):
        self.writes.append((addr, value))


class _RecordingBus:
    """Always ready; records every address read and written."""

    def __init__(self):
        self.reads = []
        self.writes = []

    def read_byte(self, addr):
        self.reads.append(addr)
        return 0x20

    def write_byte(self, addr, value):
        self.writes.append((addr, value))


def _ready_bus():
    bus = MemoryBus()
    bus.write_byte(BASE + Register.LSR, LineStatus.THRE | LineStatus.TEMT)
    return bus


def test_register_offsets_from_datasheet():
    bus = _RecordingBus()
    uart = NS16550(bus, BASE)
    uart.put_char("Q")
    assert bus.reads == [BASE + 5]
    assert bus.writes == [(BASE + 0, ord("Q"))]


def test_memory_bus_unwritten_reads_zero():
    assert MemoryBus().read_byte(1234) == 0


def test_memory_bus_round_trip():
    bus = MemoryBus()
    bus.write_byte(10, 0xAB)
    assert bus.read_byte(10) == 0xAB


def test_memory_bus_rejects_non_byte():
    with pytest.raises(ValueError):
        MemoryBus().write_byte(0, 256)


def test_put_char_writes_holding_register():
    bus = _ready_bus()
    uart = NS16550(bus, BASE)
    uart.put_char("A")
    assert bus.read_byte(BASE + Register.THR) == ord("A")
    assert uart.transmitted() == b"A"


def test_transmitted_keeps_order():
    uart = NS16550(_ready_bus(), BASE)
    for c in "hey":
        uart.put_char(c)
    uart.put_char(ord("!"))
    assert uart.transmitted() == b"hey!"


def test_put_char_waits_for_empty_holding_register():
    bus = _SlowBus(busy_reads=3)
    uart = NS16550(bus, BASE)
    uart.put_char(b"x")
    assert bus.lsr_reads == 4
    assert bus.writes == [(BASE + Register.THR, ord("x"))]


def test_put_char_times_out_when_never_ready():
    uart = NS16550(MemoryBus(), BASE, max_polls=5)
    with pytest.raises(TimeoutError):
        uart.put_char("z")
    assert uart.transmitted() == b""


def test_put_char_rejects_multiple_characters():
    uart = NS16550(_ready_bus(), BASE)
    with pytest.raises(ValueError):
        uart.put_char("ab")