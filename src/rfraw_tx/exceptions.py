#!/usr/bin/env python3
"""RFRAW TX - exceptions within the command/protocol/transport layer."""

from __future__ import annotations


class RfRawException(Exception):
    """Base class for all rfraw_tx (and ceiling_fan) exceptions.

    A subclass may have a HINT, which is appended to the message.
    """

    HINT: None | str = None

    def __init__(self, *args: object):
        super().__init__(*args)
        self.message: str | None = args[0] if args else None  # type: ignore[assignment]

    def __str__(self) -> str:
        if self.message and self.HINT:
            return f"{self.message} (hint: {self.HINT})"
        if self.message:
            return self.message
        if self.HINT:
            return f"Hint: {self.HINT}"
        return ""


class _RfRawLowerError(RfRawException):
    """A failure in the lower layer (encoder, queue, dispatcher, transport)."""


########################################################################################
# Errors at/below the protocol/transport layer, incl. dispatching


class ProtocolError(_RfRawLowerError):
    """An error occurred when queuing or dispatching commands."""


class ProtocolFsmError(ProtocolError):
    """The queue FSM was/became inconsistent (this shouldn't happen)."""


class TransportError(ProtocolError):
    """An error when sending a command to the bridge (e.g. network, HTTP status)."""


class TransportSourceInvalid(TransportError):
    """The bridge (host) is not a valid type/configuration."""


########################################################################################
# Errors when building commands


class EncoderError(_RfRawLowerError):
    """The value cannot be encoded without error."""


class EncodingOverflow(EncoderError):
    """The value needs more bits (or digits) than the fixed width allows."""

    HINT = "check the command tables and the remote id"


class CommandInvalid(EncoderError):
    """The command code is the no-op sentinel, or is not an integer."""
