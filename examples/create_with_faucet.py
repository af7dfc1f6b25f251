"""
Example: Create an Account with the Faucet

Generates a fresh Ed25519 key and asks the devnet faucet to create the
matching account.

Usage:
    python examples/create_with_faucet.py
"""

import asyncio
import os

from pyaccount import CreateAccountCommand, FaucetClient, PrivateKey
from pyaccount.log import configure_logging

FAUCET_URL = os.environ.get("FAUCET_URL", "https://faucet.devnet.aptoslabs.com")


async def main():
    configure_logging()
    new_key = PrivateKey.generate()
    print(f"New public key: 0x{new_key.public_key().to_bytes().hex()}")

    async with FaucetClient(FAUCET_URL) as faucet:
        command = CreateAccountCommand(
            new_key.public_key(), use_faucet=True, faucet=faucet
        )
        print(await command.run())


asyncio.run(main())
