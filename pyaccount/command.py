"""Create-account command.

The command derives the new account's address from its public key, then
creates it with one of two strategies:

- FaucetStrategy: ask a faucet service to create the address.
- KeyStrategy: a funded sender reads its sequence number from the node,
  signs a create-account transaction with it and waits for execution.

Every step is awaited in order and the first failure ends the command. The
outcome is rendered as exactly one line of text.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Union

import httpx

from .address import derive_address, sender_address
from .builder import TransactionFactory
from .client import NodeClient
from .config import Settings
from .errors import AccountCreationError, ConfigurationError
from .faucet import FaucetClient
from .keys import KeyLike, PrivateKey, SignatureScheme
from .log import get_logger
from .models import ExecutionResult
from .transaction import TransactionSubmitter
from .types import AccountAddress, BytesLike

log = get_logger(__name__)

SUCCESS_MESSAGE = "Account Created at {address}"
MISSING_SENDER_MESSAGE = (
    "One of ['--private-key', '--private-key-file', '--use-faucet'] must be provided"
)


class SequenceNumberReader(Protocol):
    async def get_sequence_number(self, address: AccountAddress) -> int:
        ...


class FaucetRequester(Protocol):
    async def create_account(self, address: AccountAddress) -> int:
        ...


class Submitter(Protocol):
    async def submit(
        self,
        sender_key: PrivateKey,
        sender: AccountAddress,
        sequence_number: int,
        new_account: AccountAddress,
    ) -> ExecutionResult:
        ...


class CreationStrategy(Protocol):
    async def create(self, address: AccountAddress) -> None:
        ...


@dataclass(frozen=True)
class FaucetStrategy:
    """Create the account through a faucet."""

    faucet: FaucetRequester

    async def create(self, address: AccountAddress) -> None:
        await self.faucet.create_account(address)


@dataclass(frozen=True)
class KeyStrategy:
    """Create the account with a transaction paid for by ``sender_key``."""

    sender_key: PrivateKey
    reader: SequenceNumberReader
    submitter: Submitter

    async def create(self, address: AccountAddress) -> None:
        sender = sender_address(self.sender_key)
        # Read fresh on every call and sign with exactly this value.
        sequence_number = await self.reader.get_sequence_number(sender)
        await self.submitter.submit(self.sender_key, sender, sequence_number, address)


@dataclass(frozen=True)
class CommandResult:
    success: bool
    message: str

    def __str__(self) -> str:
        return self.message


class CreateAccountCommand:
    """
    Create a new account on-chain.

    Args:
        public_key: Public key of the account to create
        use_faucet: Create through the faucet instead of a funded sender
        private_key: Sender key for the key path (ignored with the faucet)
        scheme: Signature scheme of ``public_key``
        sender_scheme: Signature scheme of ``private_key``; defaults to ``scheme``
        faucet: Faucet collaborator for the faucet path
        reader: Sequence number source for the key path
        submitter: Transaction submitter for the key path
    """

    def __init__(
        self,
        public_key: KeyLike,
        *,
        use_faucet: bool = False,
        private_key: Optional[Union[PrivateKey, BytesLike]] = None,
        scheme: SignatureScheme = SignatureScheme.ED25519,
        sender_scheme: Optional[SignatureScheme] = None,
        faucet: Optional[FaucetRequester] = None,
        reader: Optional[SequenceNumberReader] = None,
        submitter: Optional[Submitter] = None,
    ):
        self.public_key = public_key
        self.use_faucet = use_faucet
        self.scheme = scheme
        self.sender_scheme = scheme if sender_scheme is None else sender_scheme
        self._private_key = private_key
        self._faucet = faucet
        self._reader = reader
        self._submitter = submitter

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient
    ) -> "CreateAccountCommand":
        """
        Wire the command to the node and faucet named in ``settings``.

        ``client`` is shared by both services and stays owned by the caller.
        """
        node = NodeClient(settings.node_url, client=client)
        submitter = None
        if settings.chain_id is not None:
            submitter = TransactionSubmitter(
                node, TransactionFactory(chain_id=settings.chain_id)
            )
        return cls(
            settings.public_key or b"",
            use_faucet=settings.use_faucet,
            private_key=settings.private_key,
            scheme=settings.key_scheme,
            faucet=FaucetClient(settings.faucet_url, client=client),
            reader=node,
            submitter=submitter,
        )

    def get_address(self) -> AccountAddress:
        address = derive_address(self.public_key, self.scheme)
        log.debug("address_derived", address=str(address), scheme=self.scheme.name)
        return address

    def _sender_key(self) -> PrivateKey:
        if self._private_key is None or self._private_key in (b"", ""):
            raise ConfigurationError(MISSING_SENDER_MESSAGE)
        if isinstance(self._private_key, PrivateKey):
            return self._private_key
        return PrivateKey.from_bytes(self._private_key, self.sender_scheme)

    def select_strategy(self) -> CreationStrategy:
        """
        Pick the creation strategy. Makes no network calls.

        Raises:
            ConfigurationError: If the chosen path lacks an input or collaborator
        """
        if self.use_faucet:
            if self._faucet is None:
                raise ConfigurationError("faucet path requires a faucet URL")
            return FaucetStrategy(self._faucet)

        sender_key = self._sender_key()
        if self._reader is None or self._submitter is None:
            raise ConfigurationError("key path requires a node URL and a chain id")
        return KeyStrategy(sender_key, self._reader, self._submitter)

    async def execute(self) -> str:
        """
        Run the command and return the success message.

        Raises:
            AccountCreationError: The first failure, unchanged
        """
        address = self.get_address()
        strategy = self.select_strategy()
        await strategy.create(address)
        return SUCCESS_MESSAGE.format(address=address)

    async def run(self) -> CommandResult:
        """Run the command and render the outcome as a single line."""
        try:
            message = await self.execute()
        except AccountCreationError as exc:
            log.warning("command_failed", error=type(exc).__name__, reason=str(exc))
            return CommandResult(success=False, message=render_error(exc))

        return CommandResult(success=True, message=message)


def render_error(exc: AccountCreationError) -> str:
    return "Error: " + " ".join(str(exc).split())
