#!/usr/bin/env python3
"""Fixtures for testing."""

import logging
from collections.abc import AsyncGenerator, Iterator

import pytest

from rfraw_tx.protocol import Dispatcher, protocol_factory

from .virtual_rf import BRIDGE_HOST

REMOTE_ID = "0110100101"


#######################################################################################


@pytest.fixture(autouse=True)
def patches_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("rfraw_tx.transport._DEFAULT_TIMEOUT_BIND", 0.5)


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    """Undo any set_logging() of the library's logger (e.g. by the CLI)."""

    logger = logging.getLogger("rfraw_tx")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate

    yield

    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


#######################################################################################


@pytest.fixture()
async def dispatcher() -> AsyncGenerator[Dispatcher, None]:
    """Return a dispatcher that is not yet bound to a transport."""

    protocol = protocol_factory(BRIDGE_HOST, REMOTE_ID)

    try:
        yield protocol
    finally:
        await protocol.queue.stop()
        if protocol._transport and not protocol._transport.is_closing():
            await protocol._transport.close()


@pytest.fixture()
async def dispatcher_test_mode() -> AsyncGenerator[Dispatcher, None]:
    """Return a dispatcher in test mode, that is not yet bound to a transport."""

    protocol = protocol_factory(BRIDGE_HOST, "test")

    try:
        yield protocol
    finally:
        await protocol.queue.stop()
        if protocol._transport and not protocol._transport.is_closing():
            await protocol._transport.close()
