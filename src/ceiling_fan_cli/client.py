#!/usr/bin/env python3
"""A CLI for the rfraw_tx library (and a ceiling fan's remote)."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Final

import click
import voluptuous as vol
from colorama import Fore, Style, init as colorama_init

from rfraw_tx import (
    CODE_TABLES,
    Command,
    Engine,
    code_name,
    exceptions as exc,
    set_logging,
)
from rfraw_tx.const import COMMAND_WIDTH, NO_OP_CODE, TEST_MODE_SENTINEL
from rfraw_tx.logger import DEFAULT_DATEFMT
from rfraw_tx.schemas import (
    SCH_ENGINE_CONFIG,
    SZ_ADDRESS_WIDTH,
    SZ_DISABLE_SENDING,
    SZ_REMOTE,
    SZ_RFBRIDGE,
    SZ_TIMEOUT,
    SZ_VERBOSE,
)

# this is called after import colorlog to ensure its handlers wrap the correct streams
logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s %(message)s", datefmt=DEFAULT_DATEFMT
)


SEND: Final = "send"

COLORS = {
    "fan": Fore.CYAN,
    "light": Fore.YELLOW,
    "receiver": Style.BRIGHT + Fore.MAGENTA,
}

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

LIB_KEYS = (
    SZ_RFBRIDGE,
    SZ_REMOTE,
    SZ_VERBOSE,
    SZ_DISABLE_SENDING,
    SZ_TIMEOUT,
    SZ_ADDRESS_WIDTH,
)


def split_kwargs(obj: tuple[dict, dict], kwargs: dict) -> tuple[dict, dict]:
    """Split kwargs into cli/library kwargs (a None is an option that wasn't given)."""
    cli_kwargs, lib_kwargs = obj

    cli_kwargs.update({k: v for k, v in kwargs.items() if k not in LIB_KEYS})
    lib_kwargs.update(
        {k: v for k, v in kwargs.items() if k in LIB_KEYS and v is not None}
    )

    return cli_kwargs, lib_kwargs


class CodeParamType(click.ParamType):
    """A command code, either as an int (e.g. 98), or by name (e.g. fan.off)."""

    name = "code"

    def convert(self, value: Any, param, ctx):
        if isinstance(value, int):
            return value

        if value.lstrip("-").isdigit():
            code = int(value)
            if code == NO_OP_CODE or 0 <= code < 2**COMMAND_WIDTH:
                return code
            self.fail(f"{value!r} needs more than {COMMAND_WIDTH} bits", param, ctx)

        table, _, member = value.upper().partition(".")
        try:
            return CODE_TABLES[table.lower()][member]
        except KeyError:
            pass
        self.fail(f"{value!r} is not a valid code (e.g. 98, or fan.off)", param, ctx)


# Args/Params for all commands
@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("-c", "--config-file", type=click.File("r"))
@click.option("-b", "--rfbridge", type=click.STRING, help="e.g. 192.168.1.20")
@click.option("-m", "--remote", type=click.STRING, help="e.g. 0110100101")
@click.option("-v/-nv", "--verbose/--no-verbose", default=None, help="log responses")
@click.option("-t", "--timeout", type=click.FLOAT, help="secs, per request")
@click.option("-w", "--address-width", type=click.INT, help="digits in the room block")
@click.pass_context
def cli(ctx, config_file=None, **kwargs: Any) -> None:
    """A CLI for the rfraw_tx library."""

    kwargs, lib_kwargs = split_kwargs(({}, {}), kwargs)

    if config_file:  # CLI takes precedence
        lib_kwargs = json.load(config_file) | lib_kwargs

    ctx.obj = kwargs, lib_kwargs


@click.command()  # print the rfraw descriptor of code(s), then stop
@click.argument("codes", nargs=-1, required=True, type=CodeParamType())
@click.option("-u", "--url", is_flag=True, help="print the target URL instead")
@click.pass_obj
def encode(obj, codes: tuple[int, ...], url: bool = False) -> int:
    """Print the rfraw descriptor (or URL) of one or more codes."""

    _, lib_kwargs = obj
    config = _validate(lib_kwargs)

    for code in codes:
        if code == NO_OP_CODE:
            continue
        try:
            cmd = Command.from_code(
                code, config[SZ_REMOTE], address_width=config[SZ_ADDRESS_WIDTH]
            )
        except exc.EncoderError as err:
            raise click.UsageError(str(err)) from err

        click.echo(cmd.target_url(config[SZ_RFBRIDGE]) if url else cmd.payload)
    return 0


@click.command()  # print the known codes, then stop
@click.pass_obj
def codes(obj) -> int:
    """Print the known codes (by device class)."""

    colorama_init(autoreset=True)

    for table_name, table in CODE_TABLES.items():
        for member in table:
            print(f"{COLORS[table_name]}{member.value:>4}  {code_name(member)}")
    return 0


@click.command()  # send code(s) to the bridge, then stop
@click.argument("codes", nargs=-1, required=True, type=CodeParamType())
@click.option("-n/-nn", "--disable-sending/--enable-sending", default=None)
@click.pass_obj
def send(obj, codes: tuple[int, ...], **kwargs: Any):
    """Send one or more codes to the bridge (the last is sent first)."""

    cli_kwargs, lib_kwargs = obj
    cli_kwargs, lib_kwargs = split_kwargs((cli_kwargs, lib_kwargs), kwargs)

    return SEND, _validate(lib_kwargs), {**cli_kwargs, "codes": codes}


def _validate(lib_kwargs: dict[str, Any]) -> dict[str, Any]:
    try:
        return SCH_ENGINE_CONFIG(lib_kwargs)  # type: ignore[no-any-return]
    except vol.Invalid as err:
        raise click.UsageError(f"Invalid config: {err}") from err


async def async_main(command: str, lib_kwargs: dict, **kwargs: Any) -> None:
    """Send the codes, and wait until they have been sent (or have failed)."""

    set_logging(logging.getLogger("rfraw_tx"), verbose=lib_kwargs[SZ_VERBOSE])

    gwy = Engine(
        lib_kwargs.pop(SZ_RFBRIDGE),
        lib_kwargs.pop(SZ_REMOTE),
        **lib_kwargs,
    )

    if gwy.test_mode:
        print(f" - running in test mode (rfbridge/remote is '{TEST_MODE_SENTINEL}')")

    print("\r\nclient.py: Starting engine...")

    try:  # main code here
        for code in kwargs["codes"]:  # queued before the transport is bound
            gwy.send_code(code)

        await gwy.start()
        await gwy.wait_until_idle()

    except asyncio.CancelledError:
        msg = "ended via: CancelledError (e.g. SIGINT)"
    except exc.RfRawException as err:
        msg = f"ended via: RfRawException: {err}"
    else:
        msg = "ended without error"
    finally:
        await gwy.stop()

    print(f"\r\nclient.py: Engine stopped: {msg}")


cli.add_command(encode)
cli.add_command(codes)
cli.add_command(send)


def main() -> None:
    try:
        result = cli(standalone_mode=False)
    except click.ClickException as err:
        err.show()
        sys.exit(err.exit_code)

    if result is None or isinstance(result, int):
        sys.exit(result)

    (command, lib_kwargs, kwargs) = result

    print("\r\nclient.py: Starting rfraw_tx...")

    if sys.platform == "win32":
        print(" - event_loop_policy set for win32")  # do before asyncio.run()
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    try:
        asyncio.run(async_main(command, lib_kwargs, **kwargs))
    except KeyboardInterrupt:
        print("\r\nclient.py: Engine stopped: ended via: KeyboardInterrupt")

    print(" - finished rfraw_tx.\r\n")


if __name__ == "__main__":
    main()
