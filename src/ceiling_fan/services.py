#!/usr/bin/env python3
"""CEILING FAN - the services of the accessory (fan, light, information)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .const import (
    DEFAULT_FAN_SPEED,
    DEFAULT_LIGHT_LEVEL,
    FAN_SPEED_CODES,
    FAN_STEP,
    LIGHT_LEVEL_CODES,
    LIGHT_MAX,
    LIGHT_STEP,
    MANUFACTURER,
    MODEL,
    SZ_ACTIVE,
    SZ_BRIGHTNESS,
    SZ_FAN,
    SZ_INFORMATION,
    SZ_LIGHT,
    SZ_MANUFACTURER,
    SZ_MAX_VALUE,
    SZ_MIN_STEP,
    SZ_MODEL,
    SZ_NAME,
    SZ_ON,
    SZ_ROTATION_SPEED,
    FanCode,
    LightCode,
)
from .entity_base import _Service

if TYPE_CHECKING:
    from .accessory import CeilingFanRemote
    from .entity_base import SetCallbackT


_LOGGER = logging.getLogger(__name__)


def percent_to_level(value: float, step: float, max_level: int) -> int:
    """Convert a (stepped) percentage into a level, 0 (off) to max_level."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeError(f"Invalid value: {value!r}, is not a number")
    return max(0, min(max_level, round(value / step)))


class FanService(_Service):
    """The fan: Active (on/off) & RotationSpeed (3 speeds)."""

    _SLUG = SZ_FAN

    def __init__(self, remote: CeilingFanRemote) -> None:
        super().__init__(remote)

        self._is_on: bool = False
        self._speed: int = DEFAULT_FAN_SPEED  # the last good speed, never 0

    @property
    def characteristics(self) -> dict[str, Any]:
        return {SZ_ACTIVE: self._is_on, SZ_ROTATION_SPEED: self._speed * FAN_STEP}

    @property
    def props(self) -> dict[str, dict[str, Any]]:
        return {SZ_ROTATION_SPEED: {SZ_MIN_STEP: FAN_STEP}}

    def get_active(self) -> bool:
        _LOGGER.info("GET fan active (Current Value: %s)", self._is_on)
        return self._is_on

    def set_active(self, value: bool, callback: SetCallbackT | None = None) -> None:
        """Turn the fan on (at the last good speed), or off."""

        self._is_on = bool(value)
        _LOGGER.info("SET fan active to %s", "ON" if self._is_on else "OFF")
        if self._is_on:
            self._cancel_revert()

        self._send_code(FAN_SPEED_CODES[self._speed] if self._is_on else FanCode.OFF)
        self._acknowledge(callback)

    def get_rotation_speed(self) -> float:
        _LOGGER.info("GET fan speed (Current Value: %s)", self._speed)
        return self._speed * FAN_STEP

    def set_rotation_speed(
        self, value: float, callback: SetCallbackT | None = None
    ) -> None:
        """Set the speed, where 0% turns the fan off (the last good speed is kept)."""

        speed = percent_to_level(value, FAN_STEP, len(FAN_SPEED_CODES) - 1)

        if speed == 0:  # probably, a controller turning the fan off
            self._schedule_revert()
        else:
            self._cancel_revert()
            self._speed = speed
            _LOGGER.info("SET fan speed to %s", self._speed)

        self._send_code(FAN_SPEED_CODES[speed])
        self._acknowledge(callback)

    def _revert(self) -> None:
        """Revert to the last good speed, so an 'on' has somewhere to go."""

        if self._remote.verbose:
            _LOGGER.info(
                "Fan speed set to 0 (i.e. off). "
                "Reverting speed to last good speed (%s)",
                self._speed,
            )

        self._is_on = False
        self._push_update(SZ_ROTATION_SPEED, self._speed * FAN_STEP)
        self._push_update(SZ_ACTIVE, False)


class LightService(_Service):
    """The light: On & Brightness (8 levels)."""

    _SLUG = SZ_LIGHT

    def __init__(self, remote: CeilingFanRemote) -> None:
        super().__init__(remote)

        self._is_on: bool = False
        self._level: int = DEFAULT_LIGHT_LEVEL  # the last good level, never 0

    @property
    def characteristics(self) -> dict[str, Any]:
        return {SZ_ON: self._is_on, SZ_BRIGHTNESS: self._level * LIGHT_STEP}

    @property
    def props(self) -> dict[str, dict[str, Any]]:
        return {SZ_BRIGHTNESS: {SZ_MIN_STEP: LIGHT_STEP, SZ_MAX_VALUE: LIGHT_MAX}}

    def get_on(self) -> bool:
        _LOGGER.info("GET light on (Current Value: %s)", self._is_on)
        return self._is_on

    def set_on(self, value: bool, callback: SetCallbackT | None = None) -> None:
        self._is_on = bool(value)
        _LOGGER.info("SET light on to %s", self._is_on)
        if self._is_on:
            self._cancel_revert()

        self._send_code(LightCode.ON if self._is_on else LightCode.OFF)
        self._acknowledge(callback)

    def get_brightness(self) -> int:
        _LOGGER.info("GET light brightness (Current Value: %s)", self._level)
        return self._level * LIGHT_STEP

    def set_brightness(
        self, value: float, callback: SetCallbackT | None = None
    ) -> None:
        """Set the brightness, where 0% turns the light off (the last level is kept)."""

        level = percent_to_level(value, LIGHT_STEP, len(LIGHT_LEVEL_CODES) - 1)

        if level == 0:  # probably, a controller turning the light off
            self._schedule_revert()
        else:
            self._cancel_revert()
            self._level = level
            _LOGGER.info("SET light brightness to %s", self._level)

        self._send_code(LIGHT_LEVEL_CODES[level])
        self._acknowledge(callback)

    def _revert(self) -> None:
        """Revert to the last good level, so an 'on' has somewhere to go."""

        if self._remote.verbose:
            _LOGGER.info(
                "Light brightness set to 0 (i.e. off). "
                "Reverting brightness to last good value (%s)",
                self._level,
            )

        self._is_on = False
        self._push_update(SZ_BRIGHTNESS, self._level * LIGHT_STEP)
        self._push_update(SZ_ON, False)


class InformationService(_Service):
    """The accessory information (read only)."""

    _SLUG = SZ_INFORMATION

    @property
    def characteristics(self) -> dict[str, Any]:
        return {
            SZ_MANUFACTURER: MANUFACTURER,
            SZ_MODEL: MODEL,
            SZ_NAME: self._remote.name,
        }
