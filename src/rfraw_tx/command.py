#!/usr/bin/env python3
"""RFRAW TX - an RF raw-command encoder & dispatcher for Sonoff RF bridges.

Construct a command (an rfraw waveform descriptor that is to be sent).
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, urlencode

from . import exceptions as exc
from .const import (
    CMD_PREFIX,
    CMD_SUFFIX,
    COMMAND_WIDTH,
    DEFAULT_ADDRESS_WIDTH,
    INV_PREFIX,
    INV_SUFFIX,
    MAX_ADDRESS_WIDTH,
    NO_OP_CODE,
    RFRAW_CMND,
    RFRAW_HEADER,
    RFRAW_PATH,
    RFRAW_TRAILER,
    ROOM_PREFIX,
    ROOM_SUFFIX,
    TEST_MODE_SENTINEL,
    code_name,
)
from .helpers import bits_from_int, pulses_from_bits

DEV_MODE = False

_LOGGER = logging.getLogger(__name__)
if DEV_MODE:
    _LOGGER.setLevel(logging.DEBUG)


def is_valid_code(code: Any) -> bool:
    """Return True if the code is an int, and not the no-op sentinel (-1)."""
    return isinstance(code, int) and not isinstance(code, bool) and code != NO_OP_CODE


def is_valid_remote_id(remote_id: Any, width: int = DEFAULT_ADDRESS_WIDTH) -> bool:
    """Return True if the remote id is a string of 0s/1s that fits the room block."""
    return (
        isinstance(remote_id, str)
        and 0 < len(remote_id) <= width
        and not remote_id.strip("01")
    )


def room_block(remote_id: str, width: int = DEFAULT_ADDRESS_WIDTH) -> str:
    """Return the room (address) block for a remote id.

    The remote id is left-padded with 0s to width digits.
    """
    if not isinstance(width, int) or not 0 < width <= MAX_ADDRESS_WIDTH:
        raise ValueError(f"Invalid width: {width}, is not 1-{MAX_ADDRESS_WIDTH}")
    if not isinstance(remote_id, str) or not remote_id or remote_id.strip("01"):
        raise exc.EncoderError(f"Invalid remote id: {remote_id!r}, is not 0s/1s")
    if len(remote_id) > width:
        raise exc.EncodingOverflow(
            f"Invalid remote id: {remote_id}, has {len(remote_id)} digits (max {width})"
        )
    return ROOM_PREFIX + pulses_from_bits(remote_id.rjust(width, "0")) + ROOM_SUFFIX


def cmd_blocks(code: int) -> tuple[str, str]:
    """Return the command block, and its inverse (a parity check), for a code."""
    bits = bits_from_int(code, COMMAND_WIDTH)
    return (
        CMD_PREFIX + pulses_from_bits(bits) + CMD_SUFFIX,
        INV_PREFIX + pulses_from_bits(bits, inverse=True) + INV_SUFFIX,
    )


class Command:
    """The Command class (an rfraw descriptor that is to be sent).

    Immutable: one instance per transmission attempt.
    """

    def __init__(
        self,
        code: int,
        remote_id: str,
        /,
        *,
        address_width: int = DEFAULT_ADDRESS_WIDTH,
    ) -> None:
        """Create a command from a code & remote id.

        Will raise CommandInvalid if the code is the no-op sentinel, or not an int, and
        EncodingOverflow if the code (or remote id) is too big for its block.
        """

        if not is_valid_code(code) or code < 0:
            raise exc.CommandInvalid(f"Invalid code: {code!r}")

        self._code = int(code)
        self._remote_id = remote_id

        cmd, inv = cmd_blocks(self._code)
        self._payload = (
            RFRAW_HEADER + room_block(remote_id, address_width) + cmd + inv
        ) + RFRAW_TRAILER

    @classmethod
    def from_code(
        cls,
        code: int,
        remote_id: str,
        /,
        *,
        address_width: int = DEFAULT_ADDRESS_WIDTH,
    ) -> Command:
        """Create a command from a code & remote id.

        A remote id of 'test' (test mode) is treated as the all-zero address.
        """

        if remote_id == TEST_MODE_SENTINEL:
            remote_id = "0"
        return cls(code, remote_id, address_width=address_width)

    def __repr__(self) -> str:
        """Return an unambiguous string representation of this object."""
        return self.rfraw

    def __str__(self) -> str:
        """Return a brief readable string representation of this object."""
        return f"{self._code:03d}|{code_name(self._code)}|{self._remote_id}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return self._payload == other._payload

    def __hash__(self) -> int:
        return hash(self._payload)

    @property
    def code(self) -> int:
        return self._code

    @property
    def remote_id(self) -> str:
        return self._remote_id

    @property
    def payload(self) -> str:
        """Return the rfraw waveform descriptor."""
        return self._payload

    @property
    def rfraw(self) -> str:
        """Return the bridge command, e.g. 'rfraw AAB0...55'."""
        return f"{RFRAW_CMND} {self._payload}"

    def target_url(self, bridge_host: str) -> str:
        """Return the URL that will have the bridge transmit this command."""
        query = urlencode({"cmnd": self.rfraw}, quote_via=quote)
        return f"http://{bridge_host}{RFRAW_PATH}?{query}"
