#!/usr/bin/env python3
"""RFRAW TX - Command layer - Helper functions (the bit encoder)."""

from __future__ import annotations

from typing import TypeAlias

from . import exceptions as exc
from .const import PULSE_LONG, PULSE_SHORT

BitStrT: TypeAlias = str  # e.g. "0001100010"
PulseStrT: TypeAlias = str  # e.g. "828282A0A0828282A082"

_COMPLEMENT = str.maketrans("01", "10")


def bits_from_int(value: int, width: int) -> BitStrT:
    """Convert a non-negative int into a binary string of exactly width chars.

    The string is MSB first, and left-padded with 0s. Will raise EncodingOverflow
    rather than truncate, if the value needs more than width bits.
    """
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"Invalid value: {value}, is not a non-negative int")
    if not isinstance(width, int) or width < 1:
        raise ValueError(f"Invalid width: {width}, is not a positive int")
    if value.bit_length() > width:
        raise exc.EncodingOverflow(
            f"Invalid value: {value}, needs {value.bit_length()} bits (max {width})"
        )
    return f"{value:0{width}b}"


def bits_complement(bits: BitStrT) -> BitStrT:
    """Return the bitwise complement of a binary string (0s <-> 1s), same length."""
    if not isinstance(bits, str) or bits.strip("01"):
        raise ValueError(f"Invalid value: {bits}, is not a binary string")
    return bits.translate(_COMPLEMENT)


def pulses_from_bits(bits: str, *, inverse: bool = False) -> PulseStrT:
    """Convert a string of 0s/1s into pulse tokens (2-char hex, short/long).

    Normally 0 -> short (82) and 1 -> long (A0); the inverse mapping swaps them.
    """
    if not isinstance(bits, str) or bits.strip("01"):
        raise ValueError(f"Invalid value: {bits}, is not a binary string")
    zero, one = (PULSE_LONG, PULSE_SHORT) if inverse else (PULSE_SHORT, PULSE_LONG)
    return "".join(one if b == "1" else zero for b in bits)
