#!/usr/bin/env python3
"""A virtual RF bridge, for testing the dispatcher & its command queue."""

from .virtual_bridge import BRIDGE_HOST, VirtualBridge

__all__ = ["BRIDGE_HOST", "VirtualBridge"]
