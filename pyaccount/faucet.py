"""Faucet client: ask a faucet service to create (and optionally fund) an address."""

from typing import Optional

import httpx

from .errors import FaucetError, NetworkError
from .log import get_logger
from .types import AccountAddress

log = get_logger(__name__)


class FaucetClient:
    """
    Client for ``POST {faucet_url}/mint?amount=...&auth_key=...``.

    Minting zero coins is how the faucet is asked to create an account
    without funding it. Not every faucet treats a zero amount as meaningful,
    so the amount is a constructor argument; it defaults to zero.
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        amount: int = 0,
    ):
        if amount < 0:
            raise ValueError("faucet amount must be >= 0")
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient()
        self._amount = amount

    @property
    def amount(self) -> int:
        return self._amount

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "FaucetClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def create_account(self, address: AccountAddress) -> int:
        """
        Request creation of ``address``. Returns the HTTP status (always 200).

        Raises:
            FaucetError: If the faucet answers with anything but 200
            NetworkError: On transport failure
        """
        url = f"{self._base_url}/mint"
        params = {"amount": str(self._amount), "auth_key": str(address)}
        log.debug("faucet_request", url=url, address=str(address), amount=self._amount)
        try:
            response = await self._client.post(url, params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(f"request to {url} failed: {exc}", url=url) from exc

        if response.status_code != 200:
            raise FaucetError(
                f"Faucet issue: {response.status_code}",
                status_code=response.status_code,
            )
        return response.status_code
