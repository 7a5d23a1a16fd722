#!/usr/bin/env python3
"""RFRAW TX - Typing for the Dispatcher & RfRawTransport."""

from collections.abc import Awaitable, Callable
from typing import Any, NamedTuple, Protocol, TypeVar

from .command import Command

ExceptionT = TypeVar("ExceptionT", bound=type[Exception])
BridgeHostT = str  # e.g. "192.168.1.20", "rf-bridge.local:8080"
RemoteIdT = str  # e.g. "0110100101", or "test"


class QueueEntry(NamedTuple):
    """A command that is to be sent, and the URL that will send it."""

    cmd: Command
    target_url: str

    def __str__(self) -> str:
        return f"{{command:{self.cmd.code}, targetUrl:{self.target_url}}}"


DispatchFncT = Callable[[QueueEntry], Awaitable[bool]]


class RfRawTransportT(Protocol):
    """The interface that a Transport offers to the Dispatcher."""

    async def get(self, url: str) -> str:
        """Send a request to the bridge, and return the response body.

        Will raise TransportError if the request fails, or times out.
        """
        ...

    async def close(self) -> None: ...

    def is_closing(self) -> bool: ...

    def get_extra_info(self, name: str, default: Any = None) -> Any: ...
