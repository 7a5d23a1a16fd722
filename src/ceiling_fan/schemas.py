#!/usr/bin/env python3
"""CEILING FAN - a HomeKit-style accessory for an RF ceiling fan (& light).

Schema processor for the accessory (upper) layer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Final

import voluptuous as vol

from rfraw_tx.schemas import (  # noqa: F401
    SCH_ENGINE_DICT,
    SZ_COMMAND_LOG,
    SZ_DISABLE_SENDING,
    SZ_REMOTE,
    SZ_RFBRIDGE,
    SZ_VERBOSE,
    ValidRemoteWidth,
)

from . import exceptions as exc
from .const import DEFAULT_NAME, TEST_MODE_SENTINEL

_LOGGER = logging.getLogger(__name__)


SZ_ACCESSORY: Final = "accessory"
SZ_NAME: Final = "name"

REQUIRED_PARAMS: Final = (SZ_RFBRIDGE, SZ_REMOTE)


def WarnIfTestMode() -> Callable[[dict[str, Any]], dict[str, Any]]:
    """Replace a missing (or empty) rfbridge/remote with 'test' (i.e. test mode)."""

    def warn_if_test_mode(node_value: dict[str, Any]) -> dict[str, Any]:
        if not isinstance(node_value, dict):
            raise vol.Invalid("expected a dictionary")

        node_value = dict(node_value)  # work with a copy
        for key in REQUIRED_PARAMS:
            if not node_value.get(key):
                _LOGGER.warning(
                    "%s is a required config parameter. Running in test mode.", key
                )
                node_value[key] = TEST_MODE_SENTINEL
        return node_value

    return warn_if_test_mode


SCH_ACCESSORY_DICT = {
    vol.Optional(SZ_ACCESSORY): str,  # e.g. "CeilingFanRemote", as used by the host
    vol.Optional(SZ_NAME, default=DEFAULT_NAME): vol.All(str, vol.Length(min=1)),
    **SCH_ENGINE_DICT,
}
SCH_ACCESSORY_CONFIG = vol.All(
    WarnIfTestMode(),
    vol.Schema(SCH_ACCESSORY_DICT, extra=vol.PREVENT_EXTRA),
    ValidRemoteWidth(),
)


def load_config(config: dict[str, Any] | None) -> dict[str, Any]:
    """Return a validated (and defaulted) accessory config.

    Will raise ConfigInvalid if the config is not valid.
    """

    try:
        return SCH_ACCESSORY_CONFIG(config or {})  # type: ignore[no-any-return]
    except vol.Invalid as err:
        raise exc.ConfigInvalid(f"Invalid config: {err}") from err
