"""Signature schemes and key handling.

Two single-signer schemes are supported:

- Ed25519 (scheme byte 0x00), the default, backed by PyNaCl.
- secp256k1 (single-key scheme byte 0x02), backed by eth-keys for key math
  and eth-account for signing.

Public keys are decoded and validated here; decoding failures surface as
KeyDecodingError so the command can report them as configuration problems.
Private keys are held in memory only and never rendered by ``repr``.
"""

import hashlib
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

from eth_account import Account
from eth_keys import keys as eth_keys
from eth_keys.exceptions import BadSignature
from eth_keys.exceptions import ValidationError as EthKeysValidationError
from nacl.bindings import crypto_sign_ed25519_pk_to_curve25519
from nacl.exceptions import BadSignatureError
from nacl.exceptions import RuntimeError as NaclRuntimeError
from nacl.signing import SigningKey, VerifyKey

from .errors import KeyDecodingError
from .types import BytesLike, as_bytes

ED25519_KEY_LENGTH = 32
ED25519_SIGNATURE_LENGTH = 64

SECP256K1_PRIVATE_KEY_LENGTH = 32
SECP256K1_SIGNATURE_LENGTH = 64  # r (32) + s (32)

# Single-key wrapper for secp256k1: variant index, then length of the
# uncompressed point (0x04 || X || Y).
SECP256K1_KEY_VARIANT = 0x01
SECP256K1_UNCOMPRESSED_LENGTH = 65


class SignatureScheme(IntEnum):
    """Scheme identifier byte appended when deriving an authentication key."""

    ED25519 = 0x00
    SECP256K1 = 0x02

    @classmethod
    def from_name(cls, name: str) -> "SignatureScheme":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown signature scheme: {name!r}") from None


def _to_raw(value: BytesLike, scheme: SignatureScheme) -> bytes:
    try:
        return as_bytes(value)
    except (TypeError, ValueError) as exc:
        raise KeyDecodingError(
            f"key is not valid hex or bytes: {exc}", scheme=scheme.name
        ) from exc


@dataclass(frozen=True)
class PublicKey:
    """Public key for a signature scheme.

    ``key`` holds the 32-byte Ed25519 key, or the 64-byte ``X || Y``
    coordinates of a secp256k1 point.
    """

    scheme: SignatureScheme
    key: bytes

    def to_bytes(self) -> bytes:
        if self.scheme is SignatureScheme.ED25519:
            return self.key
        return b"\x04" + self.key

    def auth_key_material(self) -> bytes:
        """Bytes hashed, together with the scheme byte, into the auth key."""
        if self.scheme is SignatureScheme.ED25519:
            return self.key
        return bytes([SECP256K1_KEY_VARIANT, SECP256K1_UNCOMPRESSED_LENGTH]) + (
            self.to_bytes()
        )

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Check a signature produced by ``PrivateKey.sign``."""
        if self.scheme is SignatureScheme.ED25519:
            try:
                VerifyKey(self.key).verify(message, signature)
            except BadSignatureError:
                return False
            return True

        if len(signature) != SECP256K1_SIGNATURE_LENGTH:
            return False
        msg_hash = hashlib.sha3_256(message).digest()
        r = int.from_bytes(signature[:32], "big")
        s = int.from_bytes(signature[32:], "big")
        for v in (0, 1):
            try:
                candidate = eth_keys.Signature(vrs=(v, r, s))
                recovered = candidate.recover_public_key_from_msg_hash(msg_hash)
            except (BadSignature, EthKeysValidationError):
                continue
            if recovered.to_bytes() == self.key:
                return True
        return False

    @classmethod
    def decode(
        cls,
        value: BytesLike,
        scheme: SignatureScheme = SignatureScheme.ED25519,
    ) -> "PublicKey":
        """Decode and validate public key bytes for ``scheme``.

        Raises:
            KeyDecodingError: If the bytes are not a key for the scheme
        """
        raw = _to_raw(value, scheme)

        if scheme is SignatureScheme.ED25519:
            if len(raw) != ED25519_KEY_LENGTH:
                raise KeyDecodingError(
                    f"ed25519 public key must be {ED25519_KEY_LENGTH} bytes, got {len(raw)}",
                    scheme=scheme.name,
                )
            try:
                # Rejects encodings that are not a point of the prime-order subgroup.
                crypto_sign_ed25519_pk_to_curve25519(raw)
            except (NaclRuntimeError, TypeError, ValueError) as exc:
                raise KeyDecodingError(
                    f"invalid ed25519 public key: {exc}", scheme=scheme.name
                ) from exc
            return cls(scheme=scheme, key=raw)

        try:
            if len(raw) == 33:
                point = eth_keys.PublicKey.from_compressed_bytes(raw)
            elif len(raw) == SECP256K1_UNCOMPRESSED_LENGTH and raw[0] == 0x04:
                point = eth_keys.PublicKey(raw[1:])
            else:
                point = eth_keys.PublicKey(raw)
        except (EthKeysValidationError, ValueError) as exc:
            raise KeyDecodingError(
                f"invalid secp256k1 public key: {exc}", scheme=scheme.name
            ) from exc
        return cls(scheme=scheme, key=point.to_bytes())


class PrivateKey:
    """In-memory private key able to sign for its scheme."""

    def __init__(
        self,
        key: bytes,
        scheme: SignatureScheme = SignatureScheme.ED25519,
    ):
        self.scheme = scheme
        if scheme is SignatureScheme.ED25519:
            if len(key) != ED25519_KEY_LENGTH:
                raise KeyDecodingError(
                    f"ed25519 private key must be {ED25519_KEY_LENGTH} bytes, got {len(key)}",
                    scheme=scheme.name,
                )
            self._signing_key: Optional[SigningKey] = SigningKey(key)
        else:
            if len(key) != SECP256K1_PRIVATE_KEY_LENGTH:
                raise KeyDecodingError(
                    f"secp256k1 private key must be {SECP256K1_PRIVATE_KEY_LENGTH} bytes, "
                    f"got {len(key)}",
                    scheme=scheme.name,
                )
            try:
                eth_keys.PrivateKey(key)
            except EthKeysValidationError as exc:
                raise KeyDecodingError(
                    f"invalid secp256k1 private key: {exc}", scheme=scheme.name
                ) from exc
            self._signing_key = None
        self._key = bytes(key)

    def __repr__(self) -> str:
        return f"PrivateKey(scheme={self.scheme.name}, key=<redacted>)"

    @classmethod
    def from_bytes(
        cls,
        value: BytesLike,
        scheme: SignatureScheme = SignatureScheme.ED25519,
    ) -> "PrivateKey":
        """Create a PrivateKey from hex string or bytes."""
        return cls(_to_raw(value, scheme), scheme)

    @classmethod
    def generate(
        cls, scheme: SignatureScheme = SignatureScheme.ED25519
    ) -> "PrivateKey":
        if scheme is SignatureScheme.ED25519:
            return cls(bytes(SigningKey.generate()), scheme)
        return cls(bytes(Account.create().key), scheme)

    def public_key(self) -> PublicKey:
        if self._signing_key is not None:
            return PublicKey(
                scheme=self.scheme, key=bytes(self._signing_key.verify_key)
            )
        point = eth_keys.PrivateKey(self._key).public_key
        return PublicKey(scheme=self.scheme, key=point.to_bytes())

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Ed25519 signs the message itself. secp256k1 signs its SHA3-256 digest
        and returns the 64-byte ``r || s`` (low-s) without a recovery id.
        """
        if self._signing_key is not None:
            return self._signing_key.sign(message).signature

        account = Account.from_key(self._key)
        signed_msg = account.unsafe_sign_hash(hashlib.sha3_256(message).digest())
        return signed_msg.r.to_bytes(32, "big") + signed_msg.s.to_bytes(32, "big")


KeyLike = Union[PublicKey, BytesLike]
