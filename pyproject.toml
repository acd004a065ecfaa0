[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wolgate"
version = "0.1.0"
description = "Wake-on-LAN magic packets, a password-guarded wake gateway, and a small simulated RISC-V demo board"
requires-python = ">=3.10"
dependencies = []
keywords = ["wake-on-lan", "wol", "magic packet", "networking", "gateway", "uart", "risc-v"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wol-send = "wolgate.sender:main"
wol-receive = "wolgate.receiver:main"
wol-gateway = "wolgate.gateway:main"
wol-blinky = "wolgate.blinky:main"

[tool.hatch.build.targets.wheel]
packages = ["wolgate"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
