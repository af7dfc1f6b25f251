"""Building, signing and submitting create-account transactions."""

from typing import Optional, Protocol

from .builder import TransactionFactory
from .keys import PrivateKey
from .log import get_logger
from .models import ExecutionResult, SignedTransaction
from .types import AccountAddress

log = get_logger(__name__)


class TransactionSink(Protocol):
    """Anything able to submit a signed transaction and await its execution."""

    async def submit_and_wait(self, transaction: SignedTransaction) -> ExecutionResult:
        ...


def create_account_transaction(
    sender_key: PrivateKey,
    sender: AccountAddress,
    sequence_number: int,
    new_account: AccountAddress,
    chain_id: int,
    factory: Optional[TransactionFactory] = None,
) -> SignedTransaction:
    """
    Create and sign a transaction creating ``new_account``.

    Args:
        sender_key: Private key of the paying account
        sender: Address of the paying account
        sequence_number: Sender's sequence number, as last read from the node
        new_account: Address to create
        chain_id: Chain the transaction is valid on
        factory: Gas and expiry policy; defaults to gas price 1, max gas 1000

    Returns:
        Signed transaction ready for submission
    """
    factory = factory or TransactionFactory(chain_id=chain_id)
    raw = factory.create_account(sender, sequence_number, new_account)
    return raw.sign(sender_key)


class TransactionSubmitter:
    """Signs a create-account transaction and submits it exactly once."""

    def __init__(self, node: TransactionSink, factory: TransactionFactory):
        self._node = node
        self._factory = factory

    @property
    def factory(self) -> TransactionFactory:
        return self._factory

    async def submit(
        self,
        sender_key: PrivateKey,
        sender: AccountAddress,
        sequence_number: int,
        new_account: AccountAddress,
    ) -> ExecutionResult:
        """
        Sign with ``sequence_number`` as given and wait for execution.

        Node and ledger failures propagate unchanged.
        """
        transaction = create_account_transaction(
            sender_key,
            sender,
            sequence_number,
            new_account,
            chain_id=self._factory.chain_id,
            factory=self._factory,
        )
        log.debug(
            "transaction_signed",
            sender=str(sender),
            sequence_number=sequence_number,
            new_account=str(new_account),
            chain_id=self._factory.chain_id,
        )
        return await self._node.submit_and_wait(transaction)
