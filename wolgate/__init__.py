"""Wake-on-LAN magic packets, a password-guarded wake gateway, and a simulated RISC-V demo board."""

__version__ = "0.1.0"