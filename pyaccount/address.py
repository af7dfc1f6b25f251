"""Authentication key and account address derivation."""

import hashlib
from dataclasses import dataclass

from .keys import KeyLike, PrivateKey, PublicKey, SignatureScheme
from .types import AccountAddress


@dataclass(frozen=True)
class AuthenticationKey:
    """SHA3-256 of the public key material followed by the scheme byte."""

    value: bytes

    @classmethod
    def from_public_key(cls, public_key: PublicKey) -> "AuthenticationKey":
        material = public_key.auth_key_material() + bytes([public_key.scheme])
        return cls(hashlib.sha3_256(material).digest())

    def account_address(self) -> AccountAddress:
        return AccountAddress(self.value)


def derive_address(
    public_key: KeyLike,
    scheme: SignatureScheme = SignatureScheme.ED25519,
) -> AccountAddress:
    """
    Derive the account address for a public key.

    Pure and deterministic. Raw bytes or hex are decoded for ``scheme``; a
    ``PublicKey`` carries its own scheme.

    Raises:
        KeyDecodingError: If the bytes are not a valid key for the scheme
    """
    if not isinstance(public_key, PublicKey):
        public_key = PublicKey.decode(public_key, scheme)
    return AuthenticationKey.from_public_key(public_key).account_address()


def sender_address(private_key: PrivateKey) -> AccountAddress:
    """Address of the account controlled by ``private_key``."""
    return derive_address(private_key.public_key())
