#!/usr/bin/env python3
"""RFRAW TX - an RF raw-command encoder & dispatcher for Sonoff RF bridges."""

from __future__ import annotations

from enum import EnumCheck, IntEnum, verify
from typing import Final

__dev_mode__ = False  # NOTE: this is const.py
DEV_MODE = __dev_mode__

# used by the command builder...
COMMAND_WIDTH: Final[int] = 10  # bits in the command (and inverse command) block
DEFAULT_ADDRESS_WIDTH: Final[int] = 40  # digits in the room (remote id) block
MAX_ADDRESS_WIDTH: Final[int] = 64

NO_OP_CODE: Final[int] = -1  # a code that means: do nothing

# the rfraw waveform descriptor, as understood by the bridge's firmware
RFRAW_HEADER: Final = "AAB0580403018813E803106510808080808080808080808081"
RFRAW_TRAILER: Final = "55"

PULSE_SHORT: Final = "82"  # a 0 bit (or a 1 bit, in the inverse block)
PULSE_LONG: Final = "A0"  # a 1 bit (or a 0 bit, in the inverse block)

ROOM_PREFIX: Final = PULSE_LONG
ROOM_SUFFIX: Final = PULSE_SHORT
CMD_PREFIX: Final = PULSE_SHORT
CMD_SUFFIX: Final = PULSE_LONG
INV_PREFIX: Final = PULSE_LONG
INV_SUFFIX: Final = "83"

RFRAW_PATH: Final = "/cm"
RFRAW_CMND: Final = "rfraw"

# used by the dispatcher/transport...
TEST_MODE_SENTINEL: Final = "test"  # as bridge host or remote id, disables sending

DEFAULT_BUFFER_SIZE: Final[int] = 32
DEFAULT_SEND_TIMEOUT: Final[float] = 10.0  # enforced by the transport, per request
MIN_SEND_TIMEOUT: Final[float] = 0.5
MAX_SEND_TIMEOUT: Final[float] = 60.0

SZ_ADDRESS_WIDTH: Final = "address_width"
SZ_MAX_BUFFER_SIZE: Final = "max_buffer_size"
SZ_TIMEOUT: Final = "timeout"


@verify(EnumCheck.UNIQUE)
class FanCode(IntEnum):
    OFF = 98
    TOGGLE = 35
    SPEED_1 = 4
    SPEED_2 = 32
    SPEED_3 = 64
    SPEED_DECREASE = 514
    SPEED_INCREASE = 513
    SPEED_MIN = 2
    SPEED_MAX = 66


@verify(EnumCheck.UNIQUE)
class LightCode(IntEnum):
    ON = 138
    OFF = 266
    TOGGLE = 768
    BRIGHTNESS_1 = 10  # 12.5%
    BRIGHTNESS_2 = 11
    BRIGHTNESS_3 = 12
    BRIGHTNESS_4 = 13  # 50.0%
    BRIGHTNESS_5 = 14
    BRIGHTNESS_6 = 15
    BRIGHTNESS_7 = 72
    BRIGHTNESS_8 = 73  # 100.0%
    BRIGHTNESS_DECREASE = 265
    BRIGHTNESS_INCREASE = 137
    BRIGHTNESS_MIN = 9
    BRIGHTNESS_MAX = 74


@verify(EnumCheck.UNIQUE)
class ReceiverCode(IntEnum):
    TOGGLE_DIMMING = 5
    PAIR_REMOTE = 65


CommandCodeT = FanCode | LightCode | ReceiverCode | int

CODE_TABLES: Final[dict[str, type[IntEnum]]] = {
    "fan": FanCode,
    "light": LightCode,
    "receiver": ReceiverCode,
}

# absolute speeds/levels, indexed by the (stepped) characteristic value
FAN_SPEED_CODES: Final[tuple[FanCode, ...]] = (
    FanCode.OFF,
    FanCode.SPEED_1,
    FanCode.SPEED_2,
    FanCode.SPEED_3,
)
LIGHT_LEVEL_CODES: Final[tuple[LightCode, ...]] = (
    LightCode.OFF,
    LightCode.BRIGHTNESS_1,
    LightCode.BRIGHTNESS_2,
    LightCode.BRIGHTNESS_3,
    LightCode.BRIGHTNESS_4,
    LightCode.BRIGHTNESS_5,
    LightCode.BRIGHTNESS_6,
    LightCode.BRIGHTNESS_7,
    LightCode.BRIGHTNESS_8,
)


def code_name(code: int) -> str:
    """Return a human-readable name for a code, e.g. 'FAN.OFF' (or the code itself)."""
    for table in CODE_TABLES.values():
        try:
            member = table(code)
        except ValueError:
            continue
        return f"{table.__name__[:-4].upper()}.{member.name}"
    return str(code)


def _check_code_tables() -> None:
    """Raise a ValueError if any code would overflow the command block."""
    for table in CODE_TABLES.values():
        for member in table:
            if not 0 <= member < 2**COMMAND_WIDTH:
                raise ValueError(
                    f"Invalid code: {member!r}, exceeds {COMMAND_WIDTH} bits"
                )


_check_code_tables()
