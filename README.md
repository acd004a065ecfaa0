# wolgate

`wolgate` builds Wake-on-LAN magic packets and sends them over UDP. It can
also receive one of these packets for testing, and it has a small TCP gateway
that asks for a password before it runs the sender.

A magic packet is 102 bytes long. It starts with six `0xFF` bytes, and the
target's 6-byte MAC address follows sixteen times.

The package also has a small simulated RISC-V "virt" board. It covers the
kernel configuration values, an NS16550 UART on a memory bus, and the demo
programs that run on that board.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

| Command       | What it does |
|---------------|--------------|
| `wol-send MAC` | Prints the packet as hex, sends it over UDP (default `127.0.0.1:8090`), waits for a reply and prints it. Options: `--host`, `--port`, `--timeout`. |
| `wol-receive` | Binds UDP port 8090, receives one packet, replies `packet received` and prints the packet as hex. Options: `--host`, `--port`. |
| `wol-gateway` | Listens on TCP port 8080 and serves one client: it asks for a password and runs the wake command if the password matches. Options: `--host`, `--port`, `--password`, `--command`. |
| `wol-blinky`  | Runs the queue-and-timer demo for a number of simulated ticks and prints its messages. Options: `--ticks` (default 10000), `--xlen` (32 or 64). |

A MAC address is written as six colon-separated groups of one or two hex
digits, for example `02:00:00:00:00:01`. The tools reject any other form.

A complete round trip on one machine takes two terminals. Start the receiver
in the first:

```
wol-receive
```

Send a packet from the second:

```
wol-send 02:00:00:00:00:01
```

### The gateway

When a client connects, the gateway sends `Enter password:` and reads up to
99 bytes. It cuts the reply at the first NUL, newline or carriage return and
compares what is left with the password. If the password matches, the gateway
runs its command and reports `WoL packet sent successfully`. If the command
cannot be started at all, it reports `command failed to start`. If the
password does not match, it reports `Authentication failed!`. After one
client the gateway exits.

The default command is `python -m wolgate.sender 02:00:00:00:00:01`. Use
`--command` to give another command line.

The password goes over the connection as plain text. Run the gateway only on
a network you trust.

## Library use

```python
from wolgate.packet import parse_mac_address, make_magic_packet, format_packet
from wolgate.sender import send_magic_packet

mac = parse_mac_address("02:00:00:00:00:01")
packet = make_magic_packet(mac)
print(format_packet(packet))

reply = send_magic_packet(mac, "127.0.0.1", 8090, 2.0)
```

`parse_mac_address` raises `ValueError` for malformed input. To receive one
packet in your own program, call `wolgate.receiver.serve_once(host, port)`.
It returns the packet's bytes.

You can also embed the gateway in your own program:

```python
from wolgate.gateway import Gateway

password = "password"
gateway = Gateway(password, ["wol-send", "02:00:00:00:00:01"])
accepted = gateway.serve_once("0.0.0.0", 8080)
```

## Simulated board

The board modules run entirely in Python and do not need any hardware.

- `wolgate.config`: `KernelConfig`, with `KernelConfig.for_xlen(32 | 64)`, tick conversion and the timer register addresses. `register_layout(xlen)` gives the register size and the load and store instructions.
- `wolgate.uart`: `NS16550`, which writes bytes through a `MemoryBus` once the line status shows the transmitter holding register is empty. With `max_polls` set, it raises `TimeoutError` if the register never empties.
- `wolgate.virt`: `VirtMachine`, which writes strings and a newline to its console UART and reports its hart id.
- `wolgate.blinky`: `BlinkyDemo`. A 200 ms send task and a 2 s auto-reload timer both feed a two-slot queue, and a receive task prints which of them each value came from.
- `wolgate.full`: `CheckTask`. It runs the health checks you supply as callables and watches two register-test loop counters, then returns a status line with `SUCCESS` or the first failure.
- `wolgate.hooks`: `Application`. It handles console writes, raises `MallocFailed`, `StackOverflow` and `AssertionFailed` (subclasses of `KernelHalt`), provides the idle and timer task memory, and selects the demo.

## Limitations

- `wol-send` sends the packet as unicast UDP to a single host and port, then waits for a reply. It does not broadcast on the local network. Against a real sleeping machine, which sends no reply, set `--timeout` or the command waits indefinitely.
- The gateway does not check the wake command's exit status. It reports success whenever the command starts.
- The simulated board has no scheduler and none of the full demo's test tasks. `CheckTask` evaluates only the checks you pass to it, and it treats a check you leave out as passing.