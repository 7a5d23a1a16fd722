#!/usr/bin/env python3
"""CEILING FAN - a HomeKit-style accessory for an RF ceiling fan (& light)."""

__version__ = "0.3.2"
VERSION = __version__
