"""
Example: Create an Account from a Funded Sender

The sender reads its sequence number from the node, signs a create-account
transaction for a freshly generated key and waits for it to execute.

Usage:
    PRIVATE_KEY=0x... CHAIN_ID=4 python examples/create_with_key.py
"""

import asyncio
import os

from pyaccount import (
    CreateAccountCommand,
    NodeClient,
    PrivateKey,
    TransactionFactory,
    TransactionSubmitter,
    derive_address,
)
from pyaccount.log import configure_logging

NODE_URL = os.environ.get("NODE_URL", "https://fullnode.devnet.aptoslabs.com/v1")

private_key = os.environ.get("PRIVATE_KEY")
if not private_key:
    raise ValueError("PRIVATE_KEY environment variable not set")
chain_id = int(os.environ.get("CHAIN_ID", "4"))


async def main():
    configure_logging()
    sender_key = PrivateKey.from_bytes(private_key)
    new_key = PrivateKey.generate()
    print(f"Sender: {derive_address(sender_key.public_key()).hex()}")

    async with NodeClient(NODE_URL) as node:
        # Gas policy defaults to price 1, max 1000; raise the limit for busy networks.
        factory = TransactionFactory(chain_id=chain_id).with_max_gas_amount(2_000)
        command = CreateAccountCommand(
            new_key.public_key(),
            private_key=sender_key,
            reader=node,
            submitter=TransactionSubmitter(node, factory),
        )
        print(await command.run())


asyncio.run(main())
