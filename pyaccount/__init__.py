"""
PyAccount - on-chain account creation

Creates accounts either through a faucet service or by having a funded
sender submit a signed create-account transaction.
"""

from .address import AuthenticationKey, derive_address
from .builder import TransactionFactory
from .client import NodeClient
from .command import CommandResult, CreateAccountCommand, FaucetStrategy, KeyStrategy
from .errors import (
    AccountCreationError,
    ConfigurationError,
    FaucetError,
    KeyDecodingError,
    NetworkError,
    NotFoundError,
    ParseError,
    ValidationError,
)
from .faucet import FaucetClient
from .keys import PrivateKey, PublicKey, SignatureScheme
from .models import (
    EntryFunction,
    ExecutionResult,
    RawTransaction,
    SignedTransaction,
    create_account_payload,
)
from .transaction import TransactionSubmitter, create_account_transaction
from .types import AccountAddress, as_account_address, as_bytes

__version__ = "0.1.0"

__all__ = [
    "AccountAddress",
    "AccountCreationError",
    "AuthenticationKey",
    "CommandResult",
    "ConfigurationError",
    "CreateAccountCommand",
    "EntryFunction",
    "ExecutionResult",
    "FaucetClient",
    "FaucetError",
    "FaucetStrategy",
    "KeyDecodingError",
    "KeyStrategy",
    "NetworkError",
    "NodeClient",
    "NotFoundError",
    "ParseError",
    "PrivateKey",
    "PublicKey",
    "RawTransaction",
    "SignatureScheme",
    "SignedTransaction",
    "TransactionFactory",
    "TransactionSubmitter",
    "ValidationError",
    "as_account_address",
    "as_bytes",
    "create_account_payload",
    "create_account_transaction",
    "derive_address",
]
