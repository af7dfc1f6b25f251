"""REST client for a ledger node.

Covers the three node endpoints the account-creation command needs:

- ``GET  {node_url}/accounts/{address}``: account resource. Its
  ``sequence_number`` field is a *string* holding a decimal unsigned 64-bit
  integer (``{"sequence_number": "5", ...}``), not a JSON number. A native
  JSON integer is accepted too.
- ``POST {node_url}/transactions``: submit an encoded signed transaction.
- ``GET  {node_url}/transactions/by_hash/{hash}``: poll for execution.

Every call is a single attempt; nothing is retried.
"""

import asyncio
import time
from typing import Any, Optional

import httpx

from .errors import NetworkError, NotFoundError, ParseError, ValidationError
from .log import get_logger
from .models import ExecutionResult, SignedTransaction
from .types import MAX_U64, AccountAddress

log = get_logger(__name__)

SIGNED_TRANSACTION_CONTENT_TYPE = "application/x.signed_transaction+rlp"
PENDING_TRANSACTION_TYPE = "pending_transaction"
DEFAULT_POLL_INTERVAL = 0.5


def parse_sequence_number(account: Any) -> int:
    """
    Extract the sequence number from an account resource.

    Raises:
        ParseError: If the field is missing or not an unsigned 64-bit integer
    """
    if not isinstance(account, dict):
        raise ParseError("account response is not a JSON object", field="sequence_number")
    if "sequence_number" not in account:
        raise ParseError("Sequence number not found", field="sequence_number")

    value = account["sequence_number"]
    if isinstance(value, str) and value.isascii() and value.isdigit():
        number = int(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        number = value
    else:
        raise ParseError(
            f"sequence number is not an unsigned integer: {value!r}",
            field="sequence_number",
        )

    if not 0 <= number <= MAX_U64:
        raise ParseError(
            f"sequence number out of range: {number}", field="sequence_number"
        )
    return number


class NodeClient:
    """Async client for a node's REST API."""

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock=time.time,
    ):
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient()
        self._poll_interval = poll_interval
        self._clock = clock

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "NodeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise NetworkError(f"request to {url} failed: {exc}", url=url) from exc

    @staticmethod
    def _json(response: httpx.Response, field: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(
                f"response from {response.request.url} is not JSON", field=field
            ) from exc

    async def get_account(self, address: AccountAddress) -> dict[str, Any]:
        """
        Fetch the account resource.

        Raises:
            NotFoundError: If the account does not exist on-chain
            NetworkError: On transport failure or an unexpected status
            ParseError: If the body is not a JSON object
        """
        url = f"{self._base_url}/accounts/{address}"
        response = await self._request("GET", url)

        if response.status_code == 404:
            raise NotFoundError(
                f"Account {address} not found", address=str(address)
            )
        if response.status_code != 200:
            raise NetworkError(
                f"unexpected status {response.status_code} from {url}",
                url=url,
                status_code=response.status_code,
            )

        account = self._json(response, "sequence_number")
        if not isinstance(account, dict):
            raise ParseError("account response is not a JSON object", field="sequence_number")
        return account

    async def get_sequence_number(self, address: AccountAddress) -> int:
        """Fetch the current sequence number of ``address`` from the node."""
        sequence_number = parse_sequence_number(await self.get_account(address))
        log.debug(
            "sequence_number_fetched",
            address=str(address),
            sequence_number=sequence_number,
        )
        return sequence_number

    async def submit_transaction(self, transaction: SignedTransaction) -> str:
        """
        Submit a signed transaction and return its hash.

        Raises:
            ValidationError: If the node rejects the transaction (4xx)
            NetworkError: On transport failure or a server error
        """
        url = f"{self._base_url}/transactions"
        response = await self._request(
            "POST",
            url,
            content=transaction.encode(),
            headers={"Content-Type": SIGNED_TRANSACTION_CONTENT_TYPE},
        )

        if 400 <= response.status_code < 500:
            message, vm_status = _rejection_details(response)
            raise ValidationError(
                f"Transaction rejected ({response.status_code}): {message}",
                vm_status=vm_status,
            )
        if response.status_code not in (200, 202):
            raise NetworkError(
                f"unexpected status {response.status_code} from {url}",
                url=url,
                status_code=response.status_code,
            )

        body = self._json(response, "hash")
        if not isinstance(body, dict) or not isinstance(body.get("hash"), str):
            raise ParseError("submission response lacks a transaction hash", field="hash")
        log.info(
            "transaction_submitted",
            hash=body["hash"],
            sender=str(transaction.sender),
            sequence_number=transaction.sequence_number,
        )
        return body["hash"]

    async def wait_for_transaction(
        self, transaction_hash: str, expiration_timestamp_secs: int
    ) -> ExecutionResult:
        """
        Block until the transaction has been executed.

        Unknown and pending transactions are polled again until the
        transaction's own expiration timestamp has passed.

        Raises:
            ValidationError: If execution failed or the transaction expired
            NetworkError: On transport failure or an unexpected status
        """
        url = f"{self._base_url}/transactions/by_hash/{transaction_hash}"
        while True:
            response = await self._request("GET", url)

            if response.status_code == 200:
                body = self._json(response, "type")
                if not isinstance(body, dict):
                    raise ParseError("transaction response is not a JSON object", field="type")
                if body.get("type") != PENDING_TRANSACTION_TYPE:
                    return _execution_result(body, transaction_hash)
            elif response.status_code != 404:
                raise NetworkError(
                    f"unexpected status {response.status_code} from {url}",
                    url=url,
                    status_code=response.status_code,
                )

            if self._clock() > expiration_timestamp_secs:
                raise ValidationError(
                    f"Transaction {transaction_hash} expired before execution",
                    transaction_hash=transaction_hash,
                )
            await asyncio.sleep(self._poll_interval)

    async def submit_and_wait(self, transaction: SignedTransaction) -> ExecutionResult:
        transaction_hash = await self.submit_transaction(transaction)
        return await self.wait_for_transaction(
            transaction_hash, transaction.raw.expiration_timestamp_secs
        )


def _rejection_details(response: httpx.Response) -> tuple[str, Optional[str]]:
    try:
        body = response.json()
    except ValueError:
        return response.text or "no details", None
    if not isinstance(body, dict):
        return str(body), None
    vm_status = body.get("vm_error_code")
    return str(body.get("message", body)), None if vm_status is None else str(vm_status)


def _execution_result(body: dict[str, Any], transaction_hash: str) -> ExecutionResult:
    try:
        result = ExecutionResult.from_json({"hash": transaction_hash, **body})
    except (TypeError, ValueError) as exc:
        raise ParseError(f"malformed transaction response: {exc}", field="version") from exc

    if not result.success:
        raise ValidationError(
            f"Transaction {transaction_hash} failed: {result.vm_status}",
            vm_status=result.vm_status,
            transaction_hash=transaction_hash,
        )
    log.info(
        "transaction_executed",
        hash=transaction_hash,
        version=result.version,
        vm_status=result.vm_status,
    )
    return result
