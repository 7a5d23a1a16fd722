#!/usr/bin/env python3
"""RFRAW TX - the command dispatcher (the protocol between queue & transport)."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Final

from . import exceptions as exc
from .command import Command, is_valid_code
from .const import (
    DEFAULT_ADDRESS_WIDTH,
    DEFAULT_BUFFER_SIZE,
    TEST_MODE_SENTINEL,
)
from .protocol_fsm import CommandQueue
from .typing import QueueEntry

if TYPE_CHECKING:
    from .const import CommandCodeT
    from .typing import BridgeHostT, ExceptionT, RemoteIdT, RfRawTransportT

#
# NOTE: All debug flags should be False for deployment to end-users
_DBG_FORCE_LOG_RESPONSES: Final[bool] = False

_LOGGER = logging.getLogger(__name__)


class Dispatcher:
    """Send queued commands to the bridge, one at a time.

    In test mode (the bridge host or remote id is 'test'), commands are logged but
    never sent.
    """

    def __init__(
        self,
        bridge_host: BridgeHostT,
        remote_id: RemoteIdT,
        /,
        *,
        verbose: bool = False,
        address_width: int = DEFAULT_ADDRESS_WIDTH,
        max_buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self._bridge_host = bridge_host
        self._remote_id = remote_id
        self._verbose = verbose or _DBG_FORCE_LOG_RESPONSES
        self._address_width = address_width

        self._loop = asyncio.get_running_loop()
        self._transport: RfRawTransportT = None  # type: ignore[assignment]

        self._wait_connection_made: asyncio.Future[RfRawTransportT] = (
            self._loop.create_future()
        )

        self._queue = CommandQueue(
            self.dispatch, max_buffer_size=max_buffer_size, loop=self._loop
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._bridge_host}, {self._queue!r})"

    @property
    def test_mode(self) -> bool:
        """Return True if commands are never to be sent to the bridge."""
        return TEST_MODE_SENTINEL in (self._bridge_host, self._remote_id)

    @property
    def queue(self) -> CommandQueue:
        return self._queue

    def connection_made(self, transport: RfRawTransportT) -> None:
        """Called when the connection to the Transport is established."""

        if self._wait_connection_made.done():
            return

        self._wait_connection_made.set_result(transport)
        self._transport = transport
        self._queue.connection_made(transport)

    async def wait_for_connection_made(self, timeout: float = 1) -> RfRawTransportT:
        """A courtesy function to wait until connection_made() has been invoked.

        Will raise TransportError if isn't connected within timeout seconds.
        """

        try:
            return await asyncio.wait_for(
                asyncio.shield(self._wait_connection_made), timeout
            )
        except TimeoutError as err:
            raise exc.TransportError(
                f"Transport did not bind to Dispatcher within {timeout} secs"
            ) from err

    def connection_lost(self, err: ExceptionT | None) -> None:
        """Called when the connection to the Transport is lost or closed."""

        if err:
            _LOGGER.warning("%s: Connection lost: %s", self, err)

        self._wait_connection_made = self._loop.create_future()
        self._queue.connection_lost(err)

    async def dispatch(self, entry: QueueEntry) -> bool:
        """Send one entry to the bridge, and return True if it was sent.

        A failure is logged, and False returned (the entry is not retried).
        """

        if self.test_mode:
            _LOGGER.info(
                "TEST MODE: runCommand(%s) Target: %s", entry.cmd.code, entry.target_url
            )
            return True

        try:
            response = await self._transport.get(entry.target_url)
        except exc.TransportError as err:
            _LOGGER.warning(
                "runCommand(%s) Error. Target: %s, Error: %s",
                entry.cmd.code,
                entry.target_url,
                err,
            )
            return False

        if self._verbose:
            _LOGGER.info(
                "runCommand(%s) Target: %s, Response: %s",
                entry.cmd.code,
                entry.target_url,
                response,
            )
        return True

    def send_cmd(self, cmd: Command) -> QueueEntry:
        """Queue a command (to be sent to the bridge), and return its queue entry.

        Does not wait for the command to be sent.
        """

        entry = QueueEntry(cmd, cmd.target_url(self._bridge_host))
        if self._verbose:
            _LOGGER.info("sendCommand(%s)", cmd.code)

        self._queue.enqueue(entry)
        self._queue.try_dispatch()
        return entry

    def send_code(self, code: CommandCodeT) -> QueueEntry | None:
        """Build a command from a code, and queue it (an invalid code is ignored).

        Will raise EncodingOverflow if the code is too big for the command block.
        """

        if not is_valid_code(code):
            _LOGGER.debug("Ignoring an invalid code: %r", code)
            return None

        cmd = Command.from_code(
            code, self._remote_id, address_width=self._address_width
        )
        return self.send_cmd(cmd)


def protocol_factory(
    bridge_host: BridgeHostT,
    remote_id: RemoteIdT,
    /,
    *,
    verbose: bool = False,
    address_width: int = DEFAULT_ADDRESS_WIDTH,
    max_buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> Dispatcher:
    """Create and return a Dispatcher (and its command queue)."""

    if TEST_MODE_SENTINEL in (bridge_host, remote_id):
        _LOGGER.debug("Dispatcher: Running in test mode (commands won't be sent)")

    return Dispatcher(
        bridge_host,
        remote_id,
        verbose=verbose,
        address_width=address_width,
        max_buffer_size=max_buffer_size,
    )
