#!/usr/bin/env python3
"""CEILING FAN - Base class for all services (fan, light, information)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

from .const import REVERT_DELAY

if TYPE_CHECKING:
    from rfraw_tx import CommandCodeT, QueueEntry

    from .accessory import CeilingFanRemote


# (service, characteristic, value): pushes a value up to the accessory framework
UpdateFncT: TypeAlias = Callable[[str, str, Any], None]
SetCallbackT: TypeAlias = Callable[[], None]

_LOGGER = logging.getLogger(__name__)


class _Service:
    """The ultimate base class for the services of an accessory.

    A service has characteristics, each with a GET handler (returns the cached value,
    never touches the transport) and, optionally, a SET handler.
    """

    _SLUG: str = None  # type: ignore[assignment]

    def __init__(self, remote: CeilingFanRemote) -> None:
        self._remote = remote
        self._revert_handle: asyncio.TimerHandle | None = None

    def __repr__(self) -> str:
        return f"{self._remote.name} ({self._SLUG})"

    @property
    def name(self) -> str:
        return self._SLUG

    @property
    def characteristics(self) -> dict[str, Any]:
        """Return the current (cached) value of each characteristic."""
        raise NotImplementedError

    @property
    def props(self) -> dict[str, dict[str, Any]]:
        """Return the props (e.g. minStep) of any characteristics that have them."""
        return {}

    def _send_code(self, code: CommandCodeT) -> QueueEntry | None:
        """Queue the command for a code (doesn't wait for it to be sent)."""
        return self._remote.send_code(code)

    def _push_update(self, characteristic: str, value: Any) -> None:
        """Push a characteristic's value up to the framework (if there is one)."""

        if self._remote._update_fnc is None:
            _LOGGER.debug("%s: Not pushed: %s=%s", self, characteristic, value)
            return
        self._remote._update_fnc(self._SLUG, characteristic, value)

    @staticmethod
    def _acknowledge(callback: SetCallbackT | None) -> None:
        """Report success to the framework (the command is queued, not yet sent)."""
        if callback is not None:
            callback()

    def _schedule_revert(self) -> None:
        """After a short delay, revert the framework's view of this service.

        Only the most recent revert is kept.
        """

        self._cancel_revert()
        self._revert_handle = self._remote._loop.call_later(
            REVERT_DELAY, self._revert
        )

    def _cancel_revert(self) -> None:
        """Cancel any pending revert (the service has since been turned on)."""

        if self._revert_handle is not None:
            self._revert_handle.cancel()
            self._revert_handle = None

    def _revert(self) -> None:
        raise NotImplementedError
