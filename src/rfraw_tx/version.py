#!/usr/bin/env python3
"""RFRAW TX - an RF raw-command encoder & dispatcher for Sonoff RF bridges."""

__version__ = "0.3.2"
VERSION = __version__
