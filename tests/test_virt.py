import threading

from wolgate.config import NS16550_ADDR, PRIM_HART
from wolgate.uart import LineStatus, MemoryBus, Register
from wolgate.virt import VirtMachine


def test_default_core_is_primary_hart():
    assert VirtMachine().core_id() == PRIM_HART


def test_core_id_reports_given_hart():
    assert VirtMachine(hart_id=3).core_id() == 3


def test_send_string_appends_newline():
    machine = VirtMachine()
    machine.send_string("hello")
    assert machine.console_output() == "hello\n"


def test_send_string_stops_at_nul():
    machine = VirtMachine()
    machine.send_string("ab\0cd")
    assert machine.console_output() == "ab\n"


def test_successive_strings_accumulate():
    machine = VirtMachine()
    machine.send_string("one")
    machine.send_string("two")
    assert machine.console_output().splitlines() == ["one", "two"]


def test_last_byte_written_to_holding_register_is_newline():
    machine = VirtMachine()
    machine.send_string("x")
    assert machine.bus.read_byte(NS16550_ADDR + Register.THR) == ord("\n")


def test_uses_supplied_bus():
    bus = MemoryBus()
    bus.write_byte(NS16550_ADDR + Register.LSR, LineStatus.THRE)
    machine = VirtMachine(bus=bus)
    machine.send_string("ok")
    assert machine.bus is bus
    assert bus.read_byte(NS16550_ADDR + Register.THR) == ord("\n")
    assert machine.console_output() == "ok\n"


def test_concurrent_strings_are_not_interleaved():
    machine = VirtMachine()
    words = [c * 50 for c in "abcdef"]
    threads = [threading.Thread(target=machine.send_string, args=(w,)) for w in words]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sorted(machine.console_output().splitlines()) == words