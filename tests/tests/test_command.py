#!/usr/bin/env python3
"""RFRAW TX - Test the construction of Commands (rfraw descriptors)."""

import pytest

from rfraw_tx import CODE_TABLES, Command, FanCode, LightCode, code_name
from rfraw_tx import exceptions as exc
from rfraw_tx.command import cmd_blocks, is_valid_code, is_valid_remote_id, room_block
from rfraw_tx.const import RFRAW_HEADER

from .helpers import (
    BRIDGE_HOST,
    GOLDEN_CMD,
    GOLDEN_INV,
    GOLDEN_PAYLOAD,
    GOLDEN_ROOM,
    GOLDEN_URL,
    assert_raises,
)

REMOTE_ID = "0110100101"

# header + room (1 + 40 + 1 pulses) + command (1 + 10 + 1) + inverse (ditto) + "55"
PAYLOAD_LEN = len(RFRAW_HEADER) + 2 * 42 + 2 * 12 + 2 * 12 + 2


def test_golden_blocks() -> None:
    assert room_block("0") == GOLDEN_ROOM
    assert cmd_blocks(98) == (GOLDEN_CMD, GOLDEN_INV)


def test_golden_command() -> None:
    cmd = Command(FanCode.OFF, "0")

    assert cmd.code == 98
    assert cmd.payload == GOLDEN_PAYLOAD
    assert cmd.rfraw == f"rfraw {GOLDEN_PAYLOAD}"
    assert cmd.target_url(BRIDGE_HOST) == GOLDEN_URL

    assert str(cmd) == "098|FAN.OFF|0"
    assert repr(cmd) == cmd.rfraw


def test_test_mode_remote() -> None:
    """A remote id of 'test' is encoded as the all-zero address."""

    cmd = Command.from_code(98, "test")
    assert cmd.payload == GOLDEN_PAYLOAD
    assert cmd == Command(98, "0") == Command(98, "0" * 40)

    assert_raises(exc.EncoderError, Command, 98, "test")


def test_room_block() -> None:
    assert room_block(REMOTE_ID, 10) == "A0" + "82A0A082A08282A082A0" + "82"
    assert room_block("1", 4) == "A0" + "828282A0" + "82"

    assert len(room_block(REMOTE_ID)) == 2 * 42  # left-padded to 40 digits
    assert room_block(REMOTE_ID) == room_block("0" * 30 + REMOTE_ID)


def test_room_block_fails() -> None:
    assert_raises(exc.EncodingOverflow, room_block, "1" * 41)  # never truncated
    assert_raises(exc.EncodingOverflow, room_block, REMOTE_ID, 8)

    assert_raises(exc.EncoderError, room_block, "012")
    assert_raises(exc.EncoderError, room_block, "")
    assert_raises(exc.EncoderError, room_block, 101)

    assert_raises(ValueError, room_block, REMOTE_ID, 0)
    assert_raises(ValueError, room_block, REMOTE_ID, 65)


def test_command_fails() -> None:
    assert_raises(exc.CommandInvalid, Command, -1, REMOTE_ID)  # the no-op code
    assert_raises(exc.CommandInvalid, Command, -2, REMOTE_ID)
    assert_raises(exc.CommandInvalid, Command, "98", REMOTE_ID)
    assert_raises(exc.CommandInvalid, Command, 98.0, REMOTE_ID)
    assert_raises(exc.CommandInvalid, Command, True, REMOTE_ID)

    assert_raises(exc.EncodingOverflow, Command, 1024, REMOTE_ID)
    assert_raises(exc.EncodingOverflow, Command, 98, "1" * 41)


def test_command_equality() -> None:
    cmd_1 = Command(LightCode.ON, REMOTE_ID)
    cmd_2 = Command(138, REMOTE_ID)

    assert cmd_1 == cmd_2
    assert hash(cmd_1) == hash(cmd_2)
    assert len({cmd_1, cmd_2}) == 1

    assert cmd_1 != Command(LightCode.OFF, REMOTE_ID)
    assert cmd_1 != Command(LightCode.ON, "1" + REMOTE_ID)
    assert cmd_1 != cmd_1.payload


@pytest.mark.parametrize("table_name", CODE_TABLES)
def test_all_codes(table_name: str) -> None:
    """Every known code encodes (to a descriptor of the same length)."""

    for member in CODE_TABLES[table_name]:
        cmd = Command(member, REMOTE_ID)

        assert len(cmd.payload) == PAYLOAD_LEN
        assert cmd.payload.startswith(RFRAW_HEADER)
        assert cmd.payload.endswith("83" + "55")
        assert str(cmd).split("|")[1] == code_name(member)


def test_code_name() -> None:
    assert code_name(98) == "FAN.OFF"
    assert code_name(FanCode.SPEED_3) == "FAN.SPEED_3"
    assert code_name(73) == "LIGHT.BRIGHTNESS_8"
    assert code_name(65) == "RECEIVER.PAIR_REMOTE"
    assert code_name(999) == "999"


def test_validators() -> None:
    assert is_valid_code(98)
    assert is_valid_code(FanCode.OFF)
    assert not is_valid_code(-1)
    assert not is_valid_code("98")
    assert not is_valid_code(None)
    assert not is_valid_code(False)

    assert is_valid_remote_id(REMOTE_ID)
    assert is_valid_remote_id("1" * 40)
    assert not is_valid_remote_id("1" * 41)
    assert not is_valid_remote_id(REMOTE_ID, 8)
    assert not is_valid_remote_id("")
    assert not is_valid_remote_id("test")
    assert not is_valid_remote_id(101)
