#!/usr/bin/env python3
"""RFRAW TX - an RF raw-command encoder & dispatcher for Sonoff RF bridges.

Schema processor for the command/dispatcher (lower) layer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Final, TypedDict

import voluptuous as vol

from .const import (
    DEFAULT_ADDRESS_WIDTH,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_SEND_TIMEOUT,
    MAX_ADDRESS_WIDTH,
    MAX_SEND_TIMEOUT,
    MIN_SEND_TIMEOUT,
    SZ_ADDRESS_WIDTH,
    SZ_MAX_BUFFER_SIZE,
    SZ_TIMEOUT,
    TEST_MODE_SENTINEL,
)

_LOGGER = logging.getLogger(__name__)


#
# 1/4: Comms params (transport & queue)
SZ_COMMS_PARAMS: Final = "comms_params"


class CommsParamsT(TypedDict):
    timeout: float
    address_width: int
    max_buffer_size: int


SCH_COMMS_PARAMS_DICT = {
    vol.Optional(SZ_TIMEOUT, default=DEFAULT_SEND_TIMEOUT): vol.All(
        vol.Coerce(float), vol.Range(min=MIN_SEND_TIMEOUT, max=MAX_SEND_TIMEOUT)
    ),
    vol.Optional(SZ_ADDRESS_WIDTH, default=DEFAULT_ADDRESS_WIDTH): vol.All(
        int, vol.Range(min=1, max=MAX_ADDRESS_WIDTH)
    ),
    vol.Optional(SZ_MAX_BUFFER_SIZE, default=DEFAULT_BUFFER_SIZE): vol.All(
        int, vol.Range(min=1, max=256)
    ),
}
SCH_COMMS_PARAMS = vol.Schema(SCH_COMMS_PARAMS_DICT, extra=vol.PREVENT_EXTRA)
_COMMS_PARAM_KEYS: Final = (SZ_TIMEOUT, SZ_ADDRESS_WIDTH, SZ_MAX_BUFFER_SIZE)


#
# 2/4: Bridge & remote
SZ_RFBRIDGE: Final = "rfbridge"
SZ_REMOTE: Final = "remote"
SZ_VERBOSE: Final = "verbose"

SCH_BRIDGE_HOST = vol.All(
    str,
    vol.Strip,
    vol.Length(min=1),
    vol.Match(r"^[^\s/?#]+$", msg="bridge host must be a host[:port], not a URL"),
)
SCH_REMOTE_ID = vol.Any(
    TEST_MODE_SENTINEL,
    vol.All(
        str,
        vol.Match(r"^[01]+$", msg="remote id must be binary digits"),
        vol.Length(min=1, max=MAX_ADDRESS_WIDTH),
    ),
)


def ValidRemoteWidth() -> Callable[[dict[str, Any]], dict[str, Any]]:
    """Check the remote id will fit in the room block, given the address width."""

    def valid_remote_width(node_value: dict[str, Any]) -> dict[str, Any]:
        remote_id = node_value.get(SZ_REMOTE, TEST_MODE_SENTINEL)
        width = node_value.get(SZ_ADDRESS_WIDTH, DEFAULT_ADDRESS_WIDTH)

        if remote_id != TEST_MODE_SENTINEL and len(remote_id) > width:
            raise vol.Invalid(
                f"remote id has {len(remote_id)} digits, "
                f"but {SZ_ADDRESS_WIDTH} is {width}",
                path=[SZ_REMOTE],
            )
        return node_value

    return valid_remote_width


#
# 3/4: Command log configuration
SZ_COMMAND_LOG: Final = "command_log"
SZ_FILE_NAME: Final = "file_name"
SZ_ROTATE_BACKUPS: Final = "rotate_backups"
SZ_ROTATE_BYTES: Final = "rotate_bytes"


class CmdLogConfigT(TypedDict):
    file_name: str
    rotate_backups: int
    rotate_bytes: int | None


def NormaliseCommandLog() -> Callable[[str | CmdLogConfigT], CmdLogConfigT]:
    def normalise_command_log(node_value: str | CmdLogConfigT) -> CmdLogConfigT:
        if isinstance(node_value, str):
            return {
                SZ_FILE_NAME: node_value,
                SZ_ROTATE_BACKUPS: 0,
                SZ_ROTATE_BYTES: None,
            }
        return node_value

    return normalise_command_log


SCH_COMMAND_LOG_CONFIG = vol.Schema(
    {
        vol.Required(SZ_FILE_NAME): str,
        vol.Optional(SZ_ROTATE_BACKUPS, default=0): vol.All(int, vol.Range(min=0)),
        vol.Optional(SZ_ROTATE_BYTES, default=None): vol.Any(None, int),
    },
    extra=vol.PREVENT_EXTRA,
)

SCH_COMMAND_LOG = vol.Any(
    None, vol.All(str, NormaliseCommandLog()), SCH_COMMAND_LOG_CONFIG
)


#
# 4/4: Gateway (engine) configuration
SZ_DISABLE_SENDING: Final = "disable_sending"

SCH_ENGINE_DICT = {
    vol.Optional(SZ_RFBRIDGE, default=TEST_MODE_SENTINEL): SCH_BRIDGE_HOST,
    vol.Optional(SZ_REMOTE, default=TEST_MODE_SENTINEL): SCH_REMOTE_ID,
    vol.Optional(SZ_VERBOSE, default=False): bool,
    vol.Optional(SZ_DISABLE_SENDING, default=False): bool,
    vol.Optional(SZ_COMMAND_LOG, default=None): SCH_COMMAND_LOG,
    **SCH_COMMS_PARAMS_DICT,
}
SCH_ENGINE_CONFIG = vol.All(
    vol.Schema(SCH_ENGINE_DICT, extra=vol.REMOVE_EXTRA), ValidRemoteWidth()
)


def extract_comms_params(config: dict[str, Any]) -> CommsParamsT:
    """Return the comms params (timeout, address_width, max_buffer_size) of a config."""
    return SCH_COMMS_PARAMS(  # type: ignore[no-any-return]
        {k: v for k, v in config.items() if k in _COMMS_PARAM_KEYS}
    )
