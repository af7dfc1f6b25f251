"""Strongly-typed data models for account-creation transactions."""

import hashlib
from dataclasses import dataclass
from typing import Any, Optional

import rlp
from rlp.sedes import big_endian_int

from .keys import PrivateKey, PublicKey, SignatureScheme
from .types import MAX_U64, AccountAddress, as_account_address, as_chain_id

RAW_TRANSACTION_SALT = hashlib.sha3_256(b"APTOS::RawTransaction").digest()

CORE_CODE_ADDRESS = AccountAddress.from_hex("0x1")


@dataclass(frozen=True)
class EntryFunction:
    """Call of a published Move function: ``address::module::function(args)``."""

    module_address: AccountAddress
    module: str
    function: str
    type_args: tuple[str, ...] = ()
    args: tuple[bytes, ...] = ()

    def validate(self) -> None:
        if not self.module or not self.function:
            raise ValueError("entry function requires module and function names")

    def as_rlp_list(self) -> list:
        return [
            bytes(self.module_address),
            self.module.encode(),
            self.function.encode(),
            [t.encode() for t in self.type_args],
            list(self.args),
        ]

    def __str__(self) -> str:
        return f"{self.module_address.hex()}::{self.module}::{self.function}"


def create_account_payload(new_account: AccountAddress) -> EntryFunction:
    """Payload instructing the ledger to create ``new_account``."""
    return EntryFunction(
        module_address=CORE_CODE_ADDRESS,
        module="account",
        function="create_account",
        args=(bytes(as_account_address(new_account)),),
    )


@dataclass(frozen=True)
class RawTransaction:
    """
    Unsigned transaction.

    The signing message is the salt ``sha3_256("APTOS::RawTransaction")``
    followed by the RLP encoding of the fields in declaration order.
    """

    sender: AccountAddress
    sequence_number: int
    payload: EntryFunction
    max_gas_amount: int
    gas_unit_price: int
    expiration_timestamp_secs: int
    chain_id: int

    def validate(self) -> None:
        """Validate the transaction fields."""
        if not 0 <= self.sequence_number <= MAX_U64:
            raise ValueError("sequence_number must fit in an unsigned 64-bit integer")
        if self.max_gas_amount <= 0:
            raise ValueError("max_gas_amount must be > 0")
        if self.gas_unit_price < 0:
            raise ValueError("gas_unit_price must be >= 0")
        if self.expiration_timestamp_secs <= 0:
            raise ValueError("expiration_timestamp_secs must be > 0")
        as_chain_id(self.chain_id)
        self.payload.validate()

    def as_rlp_list(self) -> list:
        return [
            bytes(self.sender),
            self.sequence_number,
            self.payload.as_rlp_list(),
            self.max_gas_amount,
            self.gas_unit_price,
            self.expiration_timestamp_secs,
            self.chain_id,
        ]

    def signing_message(self) -> bytes:
        self.validate()
        return RAW_TRANSACTION_SALT + rlp.encode(self.as_rlp_list())

    def sign(self, private_key: PrivateKey) -> "SignedTransaction":
        """
        Sign the transaction.

        The sender field is signed as-is; a key that does not control the
        sender is only detected by the ledger.
        """
        signature = private_key.sign(self.signing_message())
        return SignedTransaction(
            raw=self,
            authenticator=Authenticator(
                public_key=private_key.public_key(), signature=signature
            ),
        )


@dataclass(frozen=True)
class Authenticator:
    """Single-signer proof: scheme, public key and signature."""

    public_key: PublicKey
    signature: bytes

    def as_rlp_list(self) -> list:
        return [
            int(self.public_key.scheme),
            self.public_key.to_bytes(),
            self.signature,
        ]


@dataclass(frozen=True)
class SignedTransaction:
    """Raw transaction together with its authenticator."""

    raw: RawTransaction
    authenticator: Authenticator

    @property
    def sender(self) -> AccountAddress:
        return self.raw.sender

    @property
    def sequence_number(self) -> int:
        return self.raw.sequence_number

    def verify(self) -> bool:
        """Check the signature against the signing message."""
        return self.authenticator.public_key.verify(
            self.raw.signing_message(), self.authenticator.signature
        )

    def encode(self) -> bytes:
        """
        Encode the complete transaction: rlp([raw_fields, authenticator]).

        Returns:
            Bytes submitted to the node
        """
        self.raw.validate()
        return rlp.encode([self.raw.as_rlp_list(), self.authenticator.as_rlp_list()])

    def hash(self) -> str:
        """Get transaction hash."""
        return "0x" + hashlib.sha3_256(self.encode()).hexdigest()


def decode_signed_transaction(data: bytes) -> SignedTransaction:
    """Decode bytes produced by ``SignedTransaction.encode``."""
    raw_fields, auth_fields = rlp.decode(data)
    (sender, sequence_number, payload, max_gas, gas_price, expiration, chain_id) = (
        raw_fields
    )
    module_address, module, function, type_args, args = payload
    scheme, public_key, signature = auth_fields

    raw = RawTransaction(
        sender=AccountAddress(sender),
        sequence_number=big_endian_int.deserialize(sequence_number),
        payload=EntryFunction(
            module_address=AccountAddress(module_address),
            module=module.decode(),
            function=function.decode(),
            type_args=tuple(t.decode() for t in type_args),
            args=tuple(args),
        ),
        max_gas_amount=big_endian_int.deserialize(max_gas),
        gas_unit_price=big_endian_int.deserialize(gas_price),
        expiration_timestamp_secs=big_endian_int.deserialize(expiration),
        chain_id=big_endian_int.deserialize(chain_id),
    )
    scheme = SignatureScheme(big_endian_int.deserialize(scheme))
    return SignedTransaction(
        raw=raw,
        authenticator=Authenticator(
            public_key=PublicKey.decode(public_key, scheme), signature=signature
        ),
    )


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of an executed transaction as reported by the node."""

    transaction_hash: str
    success: bool
    vm_status: str
    version: Optional[int] = None
    gas_used: Optional[int] = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ExecutionResult":
        def _opt_int(value: Any) -> Optional[int]:
            return None if value is None else int(value)

        return cls(
            transaction_hash=str(data.get("hash", "")),
            success=bool(data.get("success", False)),
            vm_status=str(data.get("vm_status", "")),
            version=_opt_int(data.get("version")),
            gas_used=_opt_int(data.get("gas_used")),
        )
