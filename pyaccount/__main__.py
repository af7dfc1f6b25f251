"""Run the create-account command with settings from the environment.

Usage:
    PYACCOUNT_PUBLIC_KEY=0x... PYACCOUNT_USE_FAUCET=1 python -m pyaccount
    PYACCOUNT_PUBLIC_KEY=0x... PYACCOUNT_PRIVATE_KEY=0x... PYACCOUNT_CHAIN_ID=4 \
        python -m pyaccount
"""

import asyncio
import sys

import httpx

from .command import CommandResult, CreateAccountCommand, render_error
from .config import load_settings
from .errors import ConfigurationError
from .log import configure_logging


async def main() -> CommandResult:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        return CommandResult(success=False, message=render_error(exc))

    configure_logging(settings.log_level)
    async with httpx.AsyncClient() as client:
        command = CreateAccountCommand.from_settings(settings, client=client)
        return await command.run()


if __name__ == "__main__":
    result = asyncio.run(main())
    print(result)
    sys.exit(0 if result.success else 1)
