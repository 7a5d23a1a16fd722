#!/usr/bin/env python3
"""CEILING FAN - Test the accessory (its services, and their characteristics)."""

import asyncio
import logging

import pytest

from ceiling_fan import CeilingFanRemote, FanCode, LightCode
from ceiling_fan.const import FAN_STEP, REVERT_DELAY
from ceiling_fan.services import percent_to_level

from .helpers import (
    assert_raises,
    remote,  # noqa: F401
)


class _SentCodes(list):
    """Stand in for CeilingFanRemote.send_code(), recording the codes."""

    def __call__(self, code: int) -> None:
        self.append(code)


@pytest.fixture
def sent(remote: CeilingFanRemote) -> _SentCodes:  # noqa: F811
    codes = _SentCodes()
    remote.send_code = codes  # type: ignore[method-assign]
    return codes


def test_percent_to_level() -> None:
    assert percent_to_level(0, FAN_STEP, 3) == 0
    assert percent_to_level(33.33, FAN_STEP, 3) == 1
    assert percent_to_level(66.67, FAN_STEP, 3) == 2
    assert percent_to_level(100, FAN_STEP, 3) == 3

    assert percent_to_level(48, 12, 8) == 4
    assert percent_to_level(50, 12, 8) == 4  # not a multiple of the step
    assert percent_to_level(100, 12, 8) == 8  # clamped
    assert percent_to_level(-5, 12, 8) == 0

    assert_raises(TypeError, percent_to_level, "50", 12, 8)
    assert_raises(TypeError, percent_to_level, None, 12, 8)
    assert_raises(TypeError, percent_to_level, True, 12, 8)


async def test_fan_active(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    callback_count = 0

    def callback() -> None:
        nonlocal callback_count
        callback_count += 1

    assert remote.fan.get_active() is False

    remote.fan.set_active(True, callback)  # at the default speed
    assert remote.fan.get_active() is True

    remote.fan.set_active(False, callback)
    assert remote.fan.get_active() is False

    assert sent == [FanCode.SPEED_1, FanCode.OFF]
    assert callback_count == 2


async def test_fan_rotation_speed(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    remote.fan.set_rotation_speed(66.67)
    assert remote.fan.get_rotation_speed() == 2 * FAN_STEP

    remote.fan.set_rotation_speed(100)
    remote.fan.set_active(False)
    remote.fan.set_active(True)  # at the last good speed

    assert sent == [FanCode.SPEED_2, FanCode.SPEED_3, FanCode.OFF, FanCode.SPEED_3]


async def test_fan_speed_zero(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    """A speed of 0% turns the fan off, then reverts to the last good speed."""

    updates = remote._update_fnc.updates  # type: ignore[union-attr]

    remote.fan.set_rotation_speed(66.67)
    remote.fan.set_active(True)
    remote.fan.set_rotation_speed(0)

    assert sent == [FanCode.SPEED_2, FanCode.SPEED_2, FanCode.OFF]
    assert remote.fan.get_rotation_speed() == 2 * FAN_STEP
    assert updates == []  # not yet

    await asyncio.sleep(REVERT_DELAY * 2)

    assert updates == [("Fan", "RotationSpeed", 2 * FAN_STEP), ("Fan", "Active", False)]
    assert remote.fan.get_active() is False


async def test_fan_speed_zero_twice(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    """Only the most recent revert is kept."""

    updates = remote._update_fnc.updates  # type: ignore[union-attr]

    remote.fan.set_rotation_speed(0)
    remote.fan.set_rotation_speed(0)

    await asyncio.sleep(REVERT_DELAY * 2)

    assert sent == [FanCode.OFF, FanCode.OFF]
    assert len(updates) == 2


async def test_fan_speed_zero_then_speed(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    """A new speed, set before the revert is due, cancels the revert."""

    updates = remote._update_fnc.updates  # type: ignore[union-attr]

    remote.fan.set_active(True)
    remote.fan.set_rotation_speed(0)
    remote.fan.set_rotation_speed(100)

    await asyncio.sleep(REVERT_DELAY * 2)

    assert sent == [FanCode.SPEED_1, FanCode.OFF, FanCode.SPEED_3]
    assert updates == []
    assert remote.fan.get_active() is True
    assert remote.fan.get_rotation_speed() == 3 * FAN_STEP


async def test_fan_speed_zero_then_active(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    updates = remote._update_fnc.updates  # type: ignore[union-attr]

    remote.fan.set_rotation_speed(0)
    remote.fan.set_active(True)

    await asyncio.sleep(REVERT_DELAY * 2)

    assert updates == []
    assert remote.fan.get_active() is True


async def test_light_on(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    assert remote.light.get_on() is False

    remote.light.set_on(True)
    assert remote.light.get_on() is True
    remote.light.set_on(False)

    assert sent == [LightCode.ON, LightCode.OFF]


async def test_light_brightness(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    assert remote.light.get_brightness() == 96  # the default level, 8

    remote.light.set_brightness(12)
    remote.light.set_brightness(50)
    assert remote.light.get_brightness() == 48

    remote.light.set_brightness(96)
    remote.light.set_brightness(100)

    assert sent == [
        LightCode.BRIGHTNESS_1,
        LightCode.BRIGHTNESS_4,
        LightCode.BRIGHTNESS_8,
        LightCode.BRIGHTNESS_8,
    ]


async def test_light_brightness_zero(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    """A brightness of 0% turns the light off, then reverts to the last good level."""

    updates = remote._update_fnc.updates  # type: ignore[union-attr]

    remote.light.set_brightness(36)
    remote.light.set_brightness(0)

    await asyncio.sleep(REVERT_DELAY * 2)

    assert sent == [LightCode.BRIGHTNESS_3, LightCode.OFF]
    assert updates == [("Light", "Brightness", 36), ("Light", "On", False)]
    assert remote.light.get_brightness() == 36


async def test_light_brightness_zero_then_on(
    remote: CeilingFanRemote, sent: _SentCodes  # noqa: F811
) -> None:
    """Turning the light on, before the revert is due, cancels the revert."""

    updates = remote._update_fnc.updates  # type: ignore[union-attr]

    remote.light.set_brightness(0)
    remote.light.set_on(True)
    remote.light.set_brightness(0)
    remote.light.set_brightness(24)

    await asyncio.sleep(REVERT_DELAY * 2)

    assert sent == [
        LightCode.OFF,
        LightCode.ON,
        LightCode.OFF,
        LightCode.BRIGHTNESS_2,
    ]
    assert updates == []
    assert remote.light.get_on() is True
    assert remote.light.get_brightness() == 24


async def test_services(remote: CeilingFanRemote) -> None:  # noqa: F811
    assert [s.name for s in remote.get_services()] == [
        "AccessoryInformation",
        "Fan",
        "Light",
    ]

    assert remote.information.characteristics == {
        "Manufacturer": "Andrew Parnell",
        "Model": "Ceiling fan controls",
        "Name": "Ceiling Fan",
    }
    assert remote.fan.props == {"RotationSpeed": {"minStep": FAN_STEP}}
    assert remote.light.props == {"Brightness": {"minStep": 12, "maxValue": 96}}

    assert remote.state == {
        "AccessoryInformation": remote.information.characteristics,
        "Fan": {"Active": False, "RotationSpeed": FAN_STEP},
        "Light": {"On": False, "Brightness": 96},
    }


async def test_identify(
    caplog: pytest.LogCaptureFixture, remote: CeilingFanRemote  # noqa: F811
) -> None:
    with caplog.at_level(logging.INFO, logger="ceiling_fan.accessory"):
        remote.identify()

    assert "Identify!" in [r.getMessage() for r in caplog.records]


async def test_send_in_test_mode(remote: CeilingFanRemote) -> None:  # noqa: F811
    """In test mode, commands are queued and dispatched, but never sent."""

    assert remote.test_mode

    await remote.start()

    remote.fan.set_active(True)
    remote.light.set_brightness(48)

    await remote.wait_until_idle(timeout=1)
    assert len(remote._protocol.queue) == 0


async def test_accessory_config() -> None:
    remote = CeilingFanRemote(  # noqa: F811
        {"name": "Bedroom Fan", "rfbridge": "192.168.1.20", "remote": "0110100101"}
    )

    try:
        assert not remote.test_mode
        assert remote.information.characteristics["Name"] == "Bedroom Fan"
        assert str(remote) == "0110100101 (192.168.1.20)"

        entry = remote.send_code(FanCode.OFF)  # queued, but not sent (not started)
        assert entry is not None
        assert entry.target_url.startswith("http://192.168.1.20/cm?cmnd=rfraw%20AAB0")
        assert len(remote._protocol.queue) == 1

    finally:
        await remote.stop()
