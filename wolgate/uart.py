"""A driver for the 16550 serial port over a byte-addressed memory bus."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class Register(IntEnum):
    """Register offsets from the device base address."""

    RBR = 0x00
    THR = 0x00
    IER = 0x01
    IIR = 0x02
    FCR = 0x02
    LCR = 0x03
    MCR = 0x04
    LSR = 0x05
    MSR = 0x06
    SCR = 0x07
    BRDL = 0x00
    BRDH = 0x01


class LineStatus(IntFlag):
    """Bits of the line status register."""

    DR = 0x01
    OE = 0x02
    PE = 0x04
    FE = 0x08
    BI = 0x10
    THRE = 0x20
    TEMT = 0x40
    EIRF = 0x80


class MemoryBus:
    """Sparse byte memory; unwritten addresses read as zero."""

    def __init__(self) -> None:
        self._memory: dict[int, int] = {}

    def read_byte(self, addr: int) -> int:
        return self._memory.get(addr, 0)

    def write_byte(self, addr: int, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"not a byte: {value}")
        if addr < 0:
            raise ValueError(f"negative address: {addr}")
        self._memory[addr] = value


def _as_byte(c: int | str | bytes) -> int:
    if isinstance(c, int):
        if not 0 <= c <= 0xFF:
            raise ValueError(f"not a byte: {c}")
        return c
    if isinstance(c, str):
        c = c.encode("latin-1")
    if len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")
    return c[0]


class NS16550:
    """Transmit side of a 16550 serial port."""

    def __init__(self, bus, addr: int, max_polls: int | None = None) -> None:
        self.bus = bus
        self.addr = addr
        self.max_polls = max_polls
        self._sent = bytearray()

    def _wait_until_ready(self) -> None:
        polls = 0
        while not self.bus.read_byte(self.addr + Register.LSR) & LineStatus.THRE:
            polls += 1
            if self.max_polls is not None and polls >= self.max_polls:
                raise TimeoutError("transmitter holding register never emptied")

    def put_char(self, c: int | str | bytes) -> None:
        """Wait for the holding register to empty, then write one byte."""
        byte = _as_byte(c)
        self._wait_until_ready()
        self.bus.write_byte(self.addr + Register.THR, byte)
        self._sent.append(byte)

    def transmitted(self) -> bytes:
        """All bytes written by this driver so far."""
        return bytes(self._sent)