"""Basic tests for pyaccount."""

from pyaccount import (
    CreateAccountCommand,
    PrivateKey,
    SignedTransaction,
    as_account_address,
    create_account_transaction,
    derive_address,
)

PRIVATE_KEY = "0x7eafbf9699b30c9ed8e3d6bbae57dd4f047544fde34d4c982dd591c2bee39ad0"
NEW_ACCOUNT = "0xF0109fC8DF283027b6285cc889F5aA624EaC1F55F0109fC8DF283027b6285cc8"


def _sender():
    key = PrivateKey.from_bytes(PRIVATE_KEY)
    return key, derive_address(key.public_key())


def test_import():
    """Test that imports work."""
    assert CreateAccountCommand is not None
    assert create_account_transaction is not None


def test_create_transaction():
    """Test creating a basic create-account transaction."""
    key, sender = _sender()
    tx = create_account_transaction(
        key, sender, 0, as_account_address(NEW_ACCOUNT), chain_id=4
    )

    assert isinstance(tx, SignedTransaction)
    assert tx.raw.chain_id == 4
    assert tx.raw.gas_unit_price == 1
    assert tx.raw.max_gas_amount == 1000
    assert tx.raw.payload.function == "create_account"


def test_transaction_signing():
    """Test signing a transaction."""
    key, sender = _sender()
    tx = create_account_transaction(
        key, sender, 3, as_account_address(NEW_ACCOUNT), chain_id=4
    )

    assert tx.authenticator.public_key == key.public_key()
    assert len(tx.authenticator.signature) == 64
    assert tx.verify()


def test_transaction_encoding():
    """Test encoding a signed transaction."""
    key, sender = _sender()
    tx = create_account_transaction(
        key, sender, 0, as_account_address(NEW_ACCOUNT), chain_id=4
    )

    encoded = tx.encode()

    assert isinstance(encoded, bytes)
    assert bytes(sender) in encoded
    assert bytes(as_account_address(NEW_ACCOUNT)) in encoded
