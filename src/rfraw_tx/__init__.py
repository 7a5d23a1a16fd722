#!/usr/bin/env python3
"""RFRAW TX - an RF raw-command encoder & dispatcher for Sonoff RF bridges."""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any

from .command import Command, is_valid_code, is_valid_remote_id
from .const import (
    CODE_TABLES,
    FAN_SPEED_CODES,
    LIGHT_LEVEL_CODES,
    TEST_MODE_SENTINEL,
    CommandCodeT,
    FanCode,
    LightCode,
    ReceiverCode,
    code_name,
)
from .gateway import Engine
from .logger import set_logging
from .protocol import Dispatcher, protocol_factory
from .protocol_fsm import CommandQueue
from .transport import HttpTransport, NullTransport, transport_factory
from .typing import QueueEntry, RfRawTransportT
from .version import VERSION

__all__ = [
    "VERSION",
    "Engine",
    #
    "CODE_TABLES",
    "FAN_SPEED_CODES",
    "LIGHT_LEVEL_CODES",
    "TEST_MODE_SENTINEL",
    #
    "CommandCodeT",
    "FanCode",
    "LightCode",
    "ReceiverCode",
    #
    "Command",
    "QueueEntry",
    #
    "CommandQueue",
    "Dispatcher",
    "protocol_factory",
    #
    "HttpTransport",
    "NullTransport",
    "RfRawTransportT",
    "transport_factory",
    #
    "code_name",
    "is_valid_code",
    "is_valid_remote_id",
    "set_logging",
    "set_logging_config",
]


async def set_logging_config(logger: logging.Logger, **config: Any) -> logging.Logger:
    """Set up logging to the console and (optionally) a file.

    Runs in an executor, as opening a log file is a blocking call.
    """
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, partial(set_logging, logger, **config))
    return logger
