#!/usr/bin/env python3
"""CEILING FAN - exceptions above the command/dispatcher/transport layer."""

from __future__ import annotations

from rfraw_tx.exceptions import (
    CommandInvalid as CommandInvalid,
    EncodingOverflow as EncodingOverflow,
    RfRawException as RfRawException,
    TransportError as TransportError,
)


class _CeilingFanUpperError(RfRawException):
    """A failure in the upper layer (config, accessory, services)."""


class ConfigInvalid(_CeilingFanUpperError):
    """The accessory's configuration is invalid."""

    HINT = "check the rfbridge/remote (and comms params) of the config"
