"""Factory for constructing account-creation transactions."""

import time
from dataclasses import dataclass, replace
from typing import Callable

from .models import EntryFunction, RawTransaction, create_account_payload
from .types import AccountAddress, as_account_address, as_chain_id

DEFAULT_GAS_UNIT_PRICE = 1
DEFAULT_MAX_GAS_AMOUNT = 1_000
DEFAULT_EXPIRATION_SECS = 30


@dataclass(frozen=True)
class TransactionFactory:
    """
    Gas and expiry policy applied to every transaction it builds.

    Example:
        factory = TransactionFactory(chain_id=4).with_max_gas_amount(2_000)
        raw = factory.create_account(sender, sequence_number, new_address)
    """

    chain_id: int
    gas_unit_price: int = DEFAULT_GAS_UNIT_PRICE
    max_gas_amount: int = DEFAULT_MAX_GAS_AMOUNT
    expiration_secs: int = DEFAULT_EXPIRATION_SECS
    clock: Callable[[], float] = time.time

    def __post_init__(self) -> None:
        as_chain_id(self.chain_id)

    def with_gas_unit_price(self, gas_unit_price: int) -> "TransactionFactory":
        """Set the gas unit price."""
        return replace(self, gas_unit_price=gas_unit_price)

    def with_max_gas_amount(self, max_gas_amount: int) -> "TransactionFactory":
        """Set the maximum gas amount."""
        return replace(self, max_gas_amount=max_gas_amount)

    def with_expiration_secs(self, expiration_secs: int) -> "TransactionFactory":
        """Set how long after creation a transaction stays valid."""
        return replace(self, expiration_secs=expiration_secs)

    def payload(
        self,
        sender: AccountAddress,
        sequence_number: int,
        payload: EntryFunction,
    ) -> RawTransaction:
        """
        Build and validate a raw transaction for ``payload``.

        Raises:
            ValueError: If validation fails
        """
        raw = RawTransaction(
            sender=as_account_address(sender),
            sequence_number=sequence_number,
            payload=payload,
            max_gas_amount=self.max_gas_amount,
            gas_unit_price=self.gas_unit_price,
            expiration_timestamp_secs=int(self.clock()) + self.expiration_secs,
            chain_id=self.chain_id,
        )
        raw.validate()
        return raw

    def create_account(
        self,
        sender: AccountAddress,
        sequence_number: int,
        new_account: AccountAddress,
    ) -> RawTransaction:
        return self.payload(sender, sequence_number, create_account_payload(new_account))
