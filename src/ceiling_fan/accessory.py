#!/usr/bin/env python3
"""CEILING FAN - the accessory: a ceiling fan (& light), via an RF bridge."""

from __future__ import annotations

import asyncio
import logging
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any

from rfraw_tx import Engine, set_logging_config

from .schemas import SZ_COMMAND_LOG, load_config
from .services import FanService, InformationService, LightService

if TYPE_CHECKING:
    from .entity_base import UpdateFncT, _Service


_LOGGER = logging.getLogger(__name__)


class CeilingFanRemote(Engine):
    """The accessory class.

    Characteristic GETs return cached values (the bridge is never queried), and SETs
    queue a command, then acknowledge immediately (i.e. before it is sent).
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        /,
        *,
        update_fnc: UpdateFncT | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Create the accessory from its config.

        Will raise ConfigInvalid if the config is invalid. A missing rfbridge (or
        remote) is not invalid, but causes the accessory to run in test mode.
        """

        self.config = SimpleNamespace(**load_config(config))

        super().__init__(
            self.config.rfbridge,
            self.config.remote,
            verbose=self.config.verbose,
            disable_sending=self.config.disable_sending,
            loop=loop,
            timeout=self.config.timeout,
            address_width=self.config.address_width,
            max_buffer_size=self.config.max_buffer_size,
        )

        self.name: str = self.config.name
        self._update_fnc = update_fnc

        self.information = InformationService(self)
        self.fan = FanService(self)
        self.light = LightService(self)

        _LOGGER.info("%s finished initializing!", self.name)

    def __repr__(self) -> str:
        return f"CeilingFanRemote(name={self.name}, rfbridge={self.rfbridge})"

    async def start(self) -> None:
        """Start the accessory (bind it to the bridge)."""

        if cmd_log := getattr(self.config, SZ_COMMAND_LOG):
            await set_logging_config(
                logging.getLogger("rfraw_tx"),
                cc_console=False,
                verbose=self.verbose,
                **cmd_log,
            )

        await super().start()

    def identify(self) -> None:
        """Identify the accessory (typically, only ever called when pairing)."""
        _LOGGER.info("Identify!")

    def get_services(self) -> list[_Service]:
        """Return the services of this accessory."""
        return [self.information, self.fan, self.light]

    @property
    def state(self) -> dict[str, dict[str, Any]]:
        """Return the (cached) characteristics of each service."""
        return {s.name: s.characteristics for s in self.get_services()}
