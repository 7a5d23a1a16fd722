#!/usr/bin/env python3
"""CEILING FAN - a HomeKit-style accessory for an RF ceiling fan (& light).

Works with (amongst others) the remotes of many RF ceiling fans, via a Sonoff RF
bridge that has been flashed with Tasmota (and has the rfraw command).
"""

from __future__ import annotations

from rfraw_tx import Command, FanCode, LightCode, ReceiverCode  # noqa: F401

from .accessory import CeilingFanRemote  # noqa: F401
from .version import VERSION  # noqa: F401
