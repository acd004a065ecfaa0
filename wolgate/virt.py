"""The RISC-V virt board: hart identity and a console on its serial port."""

from __future__ import annotations

import threading

from wolgate.config import NS16550_ADDR, PRIM_HART
from wolgate.uart import NS16550, LineStatus, MemoryBus, Register


class VirtMachine:
    """A single hart with its console UART."""

    def __init__(self, hart_id: int = PRIM_HART, bus=None) -> None:
        if bus is None:
            bus = MemoryBus()
            bus.write_byte(NS16550_ADDR + Register.LSR, LineStatus.THRE | LineStatus.TEMT)
        self.hart_id = hart_id
        self.bus = bus
        self.uart = NS16550(bus, NS16550_ADDR)
        self._critical = threading.RLock()

    def core_id(self) -> int:
        """The hart that is running."""
        return self.hart_id

    def send_string(self, text: str) -> None:
        """Write text, up to any NUL, and a newline to the console as one unit."""
        data = text.split("\0", 1)[0].encode("utf-8")
        with self._critical:
            for byte in data:
                self.uart.put_char(byte)
            self.uart.put_char(b"\n")

    def console_output(self) -> str:
        """Everything written to the console so far."""
        return self.uart.transmitted().decode("utf-8", errors="replace")