#!/usr/bin/env python3
"""RFRAW TX - the command queue finite state machine (single flight, LIFO)."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from threading import Lock
from typing import TYPE_CHECKING, Final, TypeAlias

from . import exceptions as exc
from .const import DEFAULT_BUFFER_SIZE

if TYPE_CHECKING:
    from .typing import DispatchFncT, ExceptionT, QueueEntry, RfRawTransportT

#
# NOTE: All debug flags should be False for deployment to end-users
_DBG_MAINTAIN_STATE_CHAIN: Final[bool] = False  # maintain Context._prev_state

_LOGGER = logging.getLogger(__name__)


#######################################################################################


class CommandQueue:
    """A buffer of entries, at most one of which is in flight at any time.

    The most recently enqueued entry is the next to be sent (LIFO). Entries that are
    enqueued whilst Inactive wait for connection_made().
    """

    def __init__(
        self,
        dispatch_fnc: DispatchFncT,
        /,
        *,
        max_buffer_size: int = DEFAULT_BUFFER_SIZE,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._dispatch_fnc = dispatch_fnc
        self.max_buffer_size = max_buffer_size

        self._loop = loop or asyncio.get_running_loop()
        self._lock = Lock()  # claiming an entry is atomic with the state change
        self._buf: deque[QueueEntry] = deque()

        self._drainer: asyncio.Task[None] | None = None
        self._sending: bool = False  # the drainer has an entry in flight
        self._is_idle = asyncio.Event()
        self._state: _QueueStateT = None  # type: ignore[assignment]

        self.set_state(Inactive)

    def __repr__(self) -> str:
        msg = f"<CommandQueue state={self._state.__class__.__name__}"
        if (entry := getattr(self._state, "_entry", None)) is not None:
            msg += f", cmd_={entry.cmd}"
        return msg + f", buffered={len(self._buf)}>"

    def __len__(self) -> int:
        return len(self._buf)

    @property
    def state(self) -> _QueueStateT:
        return self._state

    @property
    def is_sending(self) -> bool:
        return isinstance(self._state, IsSending)

    def set_state(
        self, state_class: _QueueStateClassT, entry: QueueEntry | None = None
    ) -> None:
        """Change state, and take any actions indicated by the new state."""

        _LOGGER.debug("BEFORE = %s", self)

        prev_state = self._state  # for _DBG_MAINTAIN_STATE_CHAIN

        self._state = state_class(self, entry=entry)

        if _DBG_MAINTAIN_STATE_CHAIN:  # for debugging
            setattr(self._state, "_prev_state", prev_state)  # noqa: B010

        self._update_is_idle()

        if isinstance(self._state, IsInIdle):  # there may be entries that are waiting
            self._loop.call_soon_threadsafe(self.try_dispatch)

        _LOGGER.debug("AFTER. = %s", self)

    def _update_is_idle(self) -> None:
        if self._buf or self._sending or isinstance(self._state, IsSending):
            self._is_idle.clear()
        else:
            self._is_idle.set()

    def connection_made(self, transport: RfRawTransportT) -> None:
        self._state.connection_made()

    # NOTE: entries remain in the buffer, and will be sent if/when reconnected
    def connection_lost(self, err: ExceptionT | None) -> None:
        self._state.connection_lost()

    def enqueue(self, entry: QueueEntry) -> None:
        """Add an entry to the buffer (this always succeeds).

        If the buffer is full, the oldest entry is discarded to make room.
        """

        with self._lock:
            self._buf.append(entry)
            if len(self._buf) > self.max_buffer_size:
                dropped = self._buf.popleft()
                _LOGGER.warning(
                    "%s: Buffer overflow, discarded the oldest command: %s",
                    self,
                    dropped,
                )
            self._update_is_idle()

        _LOGGER.info("Queued Command: %s", entry)

    def try_dispatch(self) -> bool:
        """If idle, claim the most recently queued entry, and start sending it.

        Return True if an entry was claimed. Otherwise (sending, inactive, or nothing
        buffered), do nothing.
        """

        with self._lock:
            # a reconnect whilst sending leaves the drainer with an entry in flight
            if self._sending or not isinstance(self._state, IsInIdle):
                return False
            if not self._buf:
                return False
            entry = self._buf.pop()
            self._state.cmd_sent(entry)  # -> IsSending
            self._sending = True

        self._drainer = self._loop.create_task(self._drain(entry))
        return True

    def _release(self) -> None:
        """Release the entry in flight (the lock must be held)."""

        self._sending = False
        if isinstance(self._state, IsSending):
            self._state.cmd_done()  # -> IsInIdle
        # else Inactive (lost whilst sending), or IsInIdle (lost, then remade)

    def _claim_next(self) -> QueueEntry | None:
        """Release the current entry, and claim the next (if any)."""

        with self._lock:
            self._release()
            if not isinstance(self._state, IsInIdle) or not self._buf:
                self._update_is_idle()
                return None
            entry = self._buf.pop()
            self._state.cmd_sent(entry)  # -> IsSending
            self._sending = True
            return entry

    async def _drain(self, entry: QueueEntry | None) -> None:
        """Send entries one at a time, until the buffer is empty."""

        while entry is not None:
            try:
                result = await self._dispatch_fnc(entry)
            except Exception as err:
                _LOGGER.warning("%s: Failed to send %s: %s", self, entry.cmd, err)
            except BaseException:  # e.g. CancelledError: don't leave the FSM wedged
                with self._lock:
                    self._release()
                    self._update_is_idle()
                raise
            else:
                if not result:
                    _LOGGER.debug("%s: Not sent (dropped): %s", self, entry.cmd)

            entry = self._claim_next()

    async def wait_until_idle(self, timeout: float | None = None) -> None:
        """Wait until nothing is in flight, and the buffer is empty.

        Will raise TimeoutError if the queue isn't idle within timeout seconds.
        """
        await asyncio.wait_for(self._is_idle.wait(), timeout)

    async def stop(self) -> None:
        """Wait until the buffer has drained (unless the transport is lost)."""

        if self._drainer is not None and not self._drainer.done():
            await asyncio.shield(self._drainer)


#######################################################################################


class QueueStateBase:
    def __init__(self, context: CommandQueue, entry: QueueEntry | None = None) -> None:
        self._context = context
        self._entry = entry

    def __repr__(self) -> str:
        msg = f"<QueueState state={self.__class__.__name__}"
        if self._entry:
            return msg + f" cmd_={self._entry.cmd}>"
        return msg + ">"

    def connection_made(self) -> None:  # For all states except Inactive
        """Do nothing, as (except for Inactive) we're already connected."""
        pass

    def connection_lost(self) -> None:
        """Transition to Inactive, regardless of current state."""
        self._context.set_state(Inactive)

    def cmd_sent(self, entry: QueueEntry) -> None:  # For all except IsInIdle
        raise exc.ProtocolFsmError(f"Invalid state to send a command: {self._context}")

    def cmd_done(self) -> None:  # For all except IsSending
        raise exc.ProtocolFsmError(f"Invalid state to end a command: {self._context}")


class Inactive(QueueStateBase):
    """The queue is not connected to a transport (entries will be buffered)."""

    def connection_made(self) -> None:
        """Transition to IsInIdle."""
        self._context.set_state(IsInIdle)

    def connection_lost(self) -> None:
        """Do nothing, as we're already disconnected."""
        pass

    def cmd_done(self) -> None:
        """Do nothing, as the connection was lost whilst sending."""
        pass


class IsInIdle(QueueStateBase):
    """The queue is not in the process of sending an entry."""

    def cmd_sent(self, entry: QueueEntry) -> None:
        """Transition to IsSending."""
        self._context.set_state(IsSending, entry=entry)


class IsSending(QueueStateBase):
    """The queue has an entry in flight (the transport has not yet completed)."""

    def cmd_done(self) -> None:
        """Transition to IsInIdle (regardless of success or failure)."""
        self._context.set_state(IsInIdle)


#######################################################################################


_QueueStateT: TypeAlias = Inactive | IsInIdle | IsSending

_QueueStateClassT: TypeAlias = type[Inactive] | type[IsInIdle] | type[IsSending]
