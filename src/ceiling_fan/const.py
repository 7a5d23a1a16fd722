#!/usr/bin/env python3
"""CEILING FAN - a HomeKit-style accessory for an RF ceiling fan (& light)."""

from __future__ import annotations

from typing import Final

from rfraw_tx.const import (  # noqa: F401
    FAN_SPEED_CODES as FAN_SPEED_CODES,
    LIGHT_LEVEL_CODES as LIGHT_LEVEL_CODES,
    TEST_MODE_SENTINEL as TEST_MODE_SENTINEL,
    FanCode as FanCode,
    LightCode as LightCode,
    ReceiverCode as ReceiverCode,
)

__dev_mode__ = False
DEV_MODE = __dev_mode__

DEFAULT_NAME: Final = "Ceiling Fan"
MANUFACTURER: Final = "Andrew Parnell"
MODEL: Final = "Ceiling fan controls"

# characteristic values are percentages, stepped to match the remote's buttons
FAN_STEP: Final[float] = 100 / 3  # 33.33%, i.e. 3 speeds
LIGHT_STEP: Final[int] = 12  # not 12.5%: some controllers round that to 25% steps
LIGHT_MAX: Final[int] = LIGHT_STEP * (len(LIGHT_LEVEL_CODES) - 1)  # 96%

DEFAULT_FAN_SPEED: Final[int] = 1
DEFAULT_LIGHT_LEVEL: Final[int] = 8

REVERT_DELAY: Final[float] = 0.1  # secs, before a 0% is reverted to last good value

# services
SZ_FAN: Final = "Fan"
SZ_LIGHT: Final = "Light"
SZ_INFORMATION: Final = "AccessoryInformation"

# characteristics
SZ_ACTIVE: Final = "Active"
SZ_BRIGHTNESS: Final = "Brightness"
SZ_MANUFACTURER: Final = "Manufacturer"
SZ_MODEL: Final = "Model"
SZ_NAME: Final = "Name"
SZ_ON: Final = "On"
SZ_ROTATION_SPEED: Final = "RotationSpeed"

# characteristic props
SZ_MIN_STEP: Final = "minStep"
SZ_MAX_VALUE: Final = "maxValue"
