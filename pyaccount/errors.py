"""
Error classification for account creation.

Every failure a step can produce maps onto one of these classes. They are
raised where the problem is detected and travel unchanged up to
``CreateAccountCommand``, which renders them as a single line.
"""

from typing import Any, Dict, Optional


class AccountCreationError(Exception):
    """Base class for every account-creation failure."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(AccountCreationError):
    """Missing or unusable input (no sender key, bad settings, bad key bytes)."""


class KeyDecodingError(ConfigurationError):
    """Key bytes that cannot be interpreted for the selected signature scheme."""

    def __init__(self, message: str, scheme: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.scheme = scheme


class NetworkError(AccountCreationError):
    """Transport failure, or an unexpected server-side status from the node."""

    def __init__(self, message: str, url: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.url = url
        self.status_code = status_code


class NotFoundError(AccountCreationError):
    """The account resource does not exist on-chain."""

    def __init__(self, message: str, address: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.address = address


class ParseError(AccountCreationError):
    """A node response is missing a field or carries it in an unusable form."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field


class ValidationError(AccountCreationError):
    """The ledger rejected or failed the submitted transaction."""

    def __init__(self, message: str, vm_status: Optional[str] = None,
                 transaction_hash: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.vm_status = vm_status
        self.transaction_hash = transaction_hash


class FaucetError(AccountCreationError):
    """The faucet answered with anything other than HTTP 200."""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code
