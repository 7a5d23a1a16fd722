#!/usr/bin/env python3
"""A virtual RF bridge: a transport that records requests, rather than sending them.

It can be made slow (each request takes delay secs), or made to fail for some URLs.
"""

import asyncio
from typing import Any, Final

from rfraw_tx import exceptions as exc
from rfraw_tx.protocol import Dispatcher
from rfraw_tx.transport import SZ_BRIDGE_HOST, _BaseTransport

BRIDGE_HOST: Final = "virtual-rf:8080"

RESPONSE_OK: Final = '{"RfRaw":"Done"}'


class VirtualBridge(_BaseTransport):
    """A transport to a virtual bridge."""

    def __init__(
        self,
        protocol: Dispatcher,
        /,
        *,
        delay: float = 0,
        extra: dict[str, Any] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        super().__init__(protocol, extra=extra, loop=loop)

        self._extra.setdefault(SZ_BRIDGE_HOST, BRIDGE_HOST)

        self.delay = delay
        self.failing_urls: set[str] = set()

        self.requests: list[str] = []  # in the order they were received
        self.in_flight = 0
        self.max_in_flight = 0

    async def get(self, url: str) -> str:
        if self._closing:
            raise exc.TransportError(f"{self}: Transport is closing/closed")

        self.requests.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)

        try:
            await asyncio.sleep(self.delay)
            if url in self.failing_urls:
                raise exc.TransportError(f"{self}: HTTP status 500 (virtual failure)")
            return RESPONSE_OK

        finally:
            self.in_flight -= 1

    async def bound(self) -> "VirtualBridge":
        """Return this transport, once it is bound to its protocol."""
        await self._protocol.wait_for_connection_made()
        return self
