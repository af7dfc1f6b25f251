"""Type definitions and coercion helpers for account-creation transactions.

The converters accept either 0x-prefixed hex strings or raw bytes, the same
inputs the key and address helpers take from configuration.
"""

from dataclasses import dataclass
from typing import Union

from eth_utils import to_bytes

BytesLike = Union[bytes, str]

ADDRESS_LENGTH = 32
MAX_U64 = 2**64 - 1


def as_bytes(value: BytesLike) -> bytes:
    """Convert hex string, bytes, bytearray, or memoryview to bytes."""
    if isinstance(value, str):
        if value == "" or value == "0x":
            return b""
        return to_bytes(hexstr=value)
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected str, bytes, got {type(value).__name__}")
    return bytes(value)


@dataclass(frozen=True)
class AccountAddress:
    """32-byte on-chain account identifier."""

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != ADDRESS_LENGTH:
            raise ValueError(
                f"address must be {ADDRESS_LENGTH} bytes, got {len(self.value)}"
            )

    def __str__(self) -> str:
        return self.value.hex()

    def __bytes__(self) -> bytes:
        return self.value

    def hex(self) -> str:
        return "0x" + self.value.hex()

    @classmethod
    def from_hex(cls, value: str) -> "AccountAddress":
        """Parse an address, left-padding short forms such as ``0x1``."""
        digits = value[2:] if value.startswith(("0x", "0X")) else value
        if not digits or len(digits) > ADDRESS_LENGTH * 2:
            raise ValueError(f"invalid address: {value!r}")
        return cls(as_bytes("0x" + digits.rjust(ADDRESS_LENGTH * 2, "0")))


def as_account_address(value: Union[BytesLike, AccountAddress]) -> AccountAddress:
    """Convert hex string or bytes to a validated 32-byte address."""
    if isinstance(value, AccountAddress):
        return value
    if isinstance(value, str):
        return AccountAddress.from_hex(value)
    return AccountAddress(as_bytes(value))


def as_chain_id(value: int) -> int:
    """Validate a chain id (a single unsigned byte, zero excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"chain id must be an int, got {type(value).__name__}")
    if not 0 < value <= 255:
        raise ValueError(f"chain id must be in 1..255, got {value}")
    return value
