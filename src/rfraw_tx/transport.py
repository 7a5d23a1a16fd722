#!/usr/bin/env python3
"""RFRAW TX - the transport to a (Tasmota-flashed) Sonoff RF bridge.

Operates at the bottom of: accessory - command - dispatcher - transport

The bridge is sent an rfraw command via its web console's command endpoint, e.g.:
  curl "http://192.168.1.20/cm?cmnd=rfraw%20AAB0...55"

A bridge host of 'test' (or disable_sending) creates a transport that never touches
the network.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Final

import aiohttp

from . import exceptions as exc
from .const import DEFAULT_SEND_TIMEOUT, TEST_MODE_SENTINEL

if TYPE_CHECKING:
    from .protocol import Dispatcher
    from .typing import BridgeHostT, RfRawTransportT


SZ_BRIDGE_HOST: Final = "bridge_host"
SZ_TIMEOUT: Final = "timeout"

_DEFAULT_TIMEOUT_BIND: Final[float] = 1  # for the transport to bind to the protocol

_LOGGER = logging.getLogger(__name__)


class _BaseTransport:
    """Code shared by all transports (HTTP, null)."""

    def __init__(
        self,
        protocol: Dispatcher,
        /,
        *,
        extra: dict[str, Any] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._protocol = protocol
        self._loop = loop or asyncio.get_running_loop()
        self._extra: dict[str, Any] = {} if extra is None else extra

        self._closing: bool = False

        self._loop.call_soon_threadsafe(self._protocol.connection_made, self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.get_extra_info(SZ_BRIDGE_HOST)})"

    def get_extra_info(self, name: str, default: Any = None) -> Any:
        return self._extra.get(name, default)

    def is_closing(self) -> bool:
        """Return True if the transport is closing or has closed."""
        return self._closing

    async def get(self, url: str) -> str:
        raise NotImplementedError

    async def close(self) -> None:
        """Close the transport (calls self._protocol.connection_lost())."""

        if self._closing:
            return
        self._closing = True

        await self._close()
        self._loop.call_soon_threadsafe(self._protocol.connection_lost, None)

    async def _close(self) -> None:
        pass


class HttpTransport(_BaseTransport):
    """Send commands to a bridge, via its HTTP command endpoint."""

    def __init__(
        self,
        bridge_host: BridgeHostT,
        protocol: Dispatcher,
        /,
        *,
        timeout: float = DEFAULT_SEND_TIMEOUT,
        extra: dict[str, Any] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        super().__init__(protocol, extra=extra, loop=loop)

        self._extra[SZ_BRIDGE_HOST] = bridge_host
        self._extra[SZ_TIMEOUT] = timeout

        # a non-2xx response will raise a ClientResponseError
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=timeout), raise_for_status=True
        )

    async def get(self, url: str) -> str:
        """Send a GET request to the bridge, and return the response body.

        Will raise TransportError if the request fails, or times out.
        """

        if self._closing:
            raise exc.TransportError(f"{self}: Transport is closing/closed")

        try:
            async with self._session.get(url) as resp:
                return await resp.text(errors="replace")  # not always utf-8

        except aiohttp.ClientResponseError as err:
            raise exc.TransportError(
                f"{self}: HTTP status {err.status} ({err.message})"
            ) from err
        except TimeoutError as err:
            raise exc.TransportError(
                f"{self}: No response within {self._extra[SZ_TIMEOUT]} secs"
            ) from err
        except aiohttp.ClientError as err:
            raise exc.TransportError(f"{self}: {err}") from err

    async def _close(self) -> None:
        await self._session.close()


class NullTransport(_BaseTransport):
    """A transport for test mode: the network is never touched."""

    def __init__(
        self,
        protocol: Dispatcher,
        /,
        *,
        extra: dict[str, Any] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        super().__init__(protocol, extra=extra, loop=loop)

        self._extra.setdefault(SZ_BRIDGE_HOST, TEST_MODE_SENTINEL)

    async def get(self, url: str) -> str:
        _LOGGER.debug("%s: Not sent (sending is disabled): %s", self, url)
        return ""


async def transport_factory(
    protocol: Dispatcher,
    /,
    *,
    bridge_host: BridgeHostT | None = None,
    timeout: float = DEFAULT_SEND_TIMEOUT,
    disable_sending: bool | None = False,
    extra: dict[str, Any] | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> RfRawTransportT:
    """Create and return an rfraw-specific async Transport."""

    if not isinstance(bridge_host, str) or not bridge_host.strip():
        raise exc.TransportSourceInvalid(
            f"Bridge host must be a host[:port] (or '{TEST_MODE_SENTINEL}')"
        )
    if "/" in bridge_host or " " in bridge_host:
        raise exc.TransportSourceInvalid(
            f"Bridge host must be a host[:port], not a URL: {bridge_host}"
        )

    transport: HttpTransport | NullTransport

    if bridge_host == TEST_MODE_SENTINEL or disable_sending:
        _LOGGER.debug("NullTransport: Sending has been disabled")
        transport = NullTransport(protocol, extra=extra, loop=loop)
    else:
        transport = HttpTransport(
            bridge_host, protocol, timeout=timeout, extra=extra, loop=loop
        )

    # wait for protocol to receive connection_made(transport) (i.e. is quiesced)
    await protocol.wait_for_connection_made(timeout=_DEFAULT_TIMEOUT_BIND)
    return transport
