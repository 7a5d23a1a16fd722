#!/usr/bin/env python3
"""RFRAW TX - The engine: a remote (id), bound to an RF bridge (host)."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from . import exceptions as exc
from .command import Command, is_valid_remote_id
from .const import TEST_MODE_SENTINEL
from .protocol import protocol_factory
from .schemas import extract_comms_params
from .transport import SZ_BRIDGE_HOST, transport_factory

if TYPE_CHECKING:
    from .const import CommandCodeT
    from .protocol import Dispatcher
    from .typing import BridgeHostT, QueueEntry, RemoteIdT, RfRawTransportT


DEV_MODE = False

_LOGGER = logging.getLogger(__name__)


class Engine:
    """The engine class."""

    def __init__(
        self,
        rfbridge: BridgeHostT,
        remote: RemoteIdT,
        /,
        *,
        verbose: bool = False,
        disable_sending: bool = False,
        loop: asyncio.AbstractEventLoop | None = None,
        **kwargs: Any,
    ) -> None:
        """Create an engine (call start() to bind it to the bridge).

        Will raise vol.Invalid if the comms params (timeout, address_width,
        max_buffer_size) are invalid, and EncodingOverflow if the remote id won't fit
        in the room block.
        """

        self._comms_params = extract_comms_params(kwargs)

        if remote != TEST_MODE_SENTINEL and not is_valid_remote_id(
            remote, self._comms_params["address_width"]
        ):
            raise exc.EncodingOverflow(
                f"Invalid remote id: {remote!r}, is not 1-"
                f"{self._comms_params['address_width']} binary digits"
            )

        self.rfbridge = rfbridge
        self.remote = remote
        self._verbose = verbose
        self._disable_sending = disable_sending
        self._loop = loop or asyncio.get_running_loop()

        self._protocol: Dispatcher = protocol_factory(
            rfbridge,
            remote,
            verbose=verbose,
            address_width=self._comms_params["address_width"],
            max_buffer_size=self._comms_params["max_buffer_size"],
        )
        self._transport: RfRawTransportT | None = None  # None until self.start()

    def __str__(self) -> str:
        if not self._transport:
            return f"{self.remote} ({self.rfbridge})"

        host = self._transport.get_extra_info(SZ_BRIDGE_HOST, default=self.rfbridge)
        return f"{self.remote} ({host})"

    @property
    def test_mode(self) -> bool:
        return self._protocol.test_mode

    @property
    def verbose(self) -> bool:
        return self._verbose

    async def start(self) -> None:
        """Create a suitable transport for the bridge, and start sending (Commands)."""

        # incl. await protocol.wait_for_connection_made()
        self._transport = await transport_factory(
            self._protocol,
            bridge_host=self.rfbridge,
            timeout=self._comms_params["timeout"],
            disable_sending=self._disable_sending,
            loop=self._loop,
        )

    async def stop(self) -> None:
        """Wait for any in-flight command, then close the transport."""

        await self._protocol.queue.stop()

        if self._transport:
            await self._transport.close()
            self._transport = None

    def create_cmd(self, code: CommandCodeT) -> Command:
        """Make a command addressed to this engine's remote id."""

        return Command.from_code(
            code, self.remote, address_width=self._comms_params["address_width"]
        )

    def send_cmd(self, cmd: Command) -> QueueEntry:
        """Queue a Command, and return its queue entry (doesn't wait for it to be sent).

        Commands queued before start() are buffered until the transport is bound.
        """
        return self._protocol.send_cmd(cmd)

    def send_code(self, code: CommandCodeT) -> QueueEntry | None:
        """Queue a command for a code (the no-op code, -1, is ignored)."""
        return self._protocol.send_code(code)

    async def wait_until_idle(self, timeout: float | None = None) -> None:
        """Wait until all queued commands have been sent (or have failed)."""
        await self._protocol.queue.wait_until_idle(timeout=timeout)
