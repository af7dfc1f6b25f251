"""Tests for the node client.

HTTP-level behaviour is verified with httpx.MockTransport; nothing here
talks to a real node.
"""

import httpx
import pytest

from pyaccount import (
    NetworkError,
    NodeClient,
    NotFoundError,
    ParseError,
    PrivateKey,
    TransactionFactory,
    ValidationError,
    as_account_address,
    derive_address,
)
from pyaccount.client import SIGNED_TRANSACTION_CONTENT_TYPE, parse_sequence_number
from pyaccount.models import decode_signed_transaction

NODE_URL = "http://node.test/v1"
ADDRESS = as_account_address("0x" + "cd" * 32)
SENDER_KEY = PrivateKey.from_bytes(
    "0x9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
)


def _build_mock_client(handler, clock=lambda: 0) -> NodeClient:
    """Create a NodeClient backed by a mock transport (no real I/O)."""
    transport = httpx.MockTransport(handler)
    return NodeClient(
        NODE_URL,
        client=httpx.AsyncClient(transport=transport),
        poll_interval=0,
        clock=clock,
    )


def _signed_transaction(sequence_number: int = 5, expiration_secs: int = 30):
    sender = derive_address(SENDER_KEY.public_key())
    factory = TransactionFactory(chain_id=4, clock=lambda: 1000).with_expiration_secs(
        expiration_secs
    )
    return factory.create_account(sender, sequence_number, ADDRESS).sign(SENDER_KEY)


def _account_handler(status_code: int, **kwargs):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, **kwargs)

    return handler, requests


class TestParseSequenceNumber:
    def test_string_encoded(self):
        assert parse_sequence_number({"sequence_number": "5"}) == 5

    def test_native_integer(self):
        assert parse_sequence_number({"sequence_number": 12}) == 12

    def test_zero(self):
        assert parse_sequence_number({"sequence_number": "0"}) == 0

    def test_max_u64(self):
        assert parse_sequence_number({"sequence_number": str(2**64 - 1)}) == 2**64 - 1

    def test_missing_field(self):
        with pytest.raises(ParseError, match="Sequence number not found"):
            parse_sequence_number({"authentication_key": "0x00"})

    @pytest.mark.parametrize("value", ["-1", "abc", "", "1.5", 1.5, True, None, [], "٣"])
    def test_unusable_values(self, value):
        with pytest.raises(ParseError):
            parse_sequence_number({"sequence_number": value})

    def test_out_of_range(self):
        with pytest.raises(ParseError, match="out of range"):
            parse_sequence_number({"sequence_number": str(2**64)})

    def test_not_an_object(self):
        with pytest.raises(ParseError):
            parse_sequence_number(["5"])


class TestGetSequenceNumber:
    @pytest.mark.asyncio
    async def test_reads_account_endpoint(self):
        handler, requests = _account_handler(
            200, json={"sequence_number": "5", "authentication_key": "0x" + "cd" * 32}
        )
        client = _build_mock_client(handler)
        assert await client.get_sequence_number(ADDRESS) == 5
        assert len(requests) == 1
        assert requests[0].method == "GET"
        assert requests[0].url.path == f"/v1/accounts/{ADDRESS}"
        await client.close()

    @pytest.mark.asyncio
    async def test_trailing_slash_stripped(self):
        handler, requests = _account_handler(200, json={"sequence_number": "1"})
        client = NodeClient(
            NODE_URL + "/", client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
        )
        await client.get_sequence_number(ADDRESS)
        assert requests[0].url.path == f"/v1/accounts/{ADDRESS}"
        await client.close()

    @pytest.mark.asyncio
    async def test_not_found(self):
        handler, _ = _account_handler(404, json={"message": "Account not found"})
        client = _build_mock_client(handler)
        with pytest.raises(NotFoundError) as exc_info:
            await client.get_sequence_number(ADDRESS)
        assert exc_info.value.address == str(ADDRESS)
        await client.close()

    @pytest.mark.asyncio
    async def test_server_error(self):
        handler, _ = _account_handler(500, text="boom")
        client = _build_mock_client(handler)
        with pytest.raises(NetworkError) as exc_info:
            await client.get_sequence_number(ADDRESS)
        assert exc_info.value.status_code == 500
        await client.close()

    @pytest.mark.asyncio
    async def test_not_json(self):
        handler, _ = _account_handler(200, text="<html>")
        client = _build_mock_client(handler)
        with pytest.raises(ParseError):
            await client.get_sequence_number(ADDRESS)
        await client.close()

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        client = _build_mock_client(handler)
        with pytest.raises(NetworkError, match="connection refused"):
            await client.get_sequence_number(ADDRESS)
        await client.close()

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        handler, requests = _account_handler(503)
        client = _build_mock_client(handler)
        with pytest.raises(NetworkError):
            await client.get_sequence_number(ADDRESS)
        assert len(requests) == 1
        await client.close()


class TestSubmitAndWait:
    @pytest.mark.asyncio
    async def test_submit_and_wait_success(self):
        transaction = _signed_transaction()
        seen = []
        polls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.method == "POST":
                assert request.url.path == "/v1/transactions"
                assert request.headers["content-type"] == SIGNED_TRANSACTION_CONTENT_TYPE
                decoded = decode_signed_transaction(request.content)
                assert decoded.sequence_number == 5
                return httpx.Response(202, json={"hash": "0xabc"})
            assert request.url.path == "/v1/transactions/by_hash/0xabc"
            polls["count"] += 1
            if polls["count"] == 1:
                return httpx.Response(404, json={"message": "not found"})
            if polls["count"] == 2:
                return httpx.Response(200, json={"type": "pending_transaction"})
            return httpx.Response(
                200,
                json={
                    "type": "user_transaction",
                    "success": True,
                    "vm_status": "Executed successfully",
                    "version": "99",
                },
            )

        client = _build_mock_client(handler)
        result = await client.submit_and_wait(transaction)
        assert result.success
        assert result.version == 99
        assert result.transaction_hash == "0xabc"
        assert [r.method for r in seen].count("POST") == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_rejected_submission(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={
                    "message": "Invalid transaction: SEQUENCE_NUMBER_TOO_OLD",
                    "vm_error_code": 3,
                },
            )

        client = _build_mock_client(handler)
        with pytest.raises(ValidationError, match="SEQUENCE_NUMBER_TOO_OLD") as exc_info:
            await client.submit_and_wait(_signed_transaction())
        assert exc_info.value.vm_status == "3"
        await client.close()

    @pytest.mark.asyncio
    async def test_submission_server_error(self):
        handler, _ = _account_handler(502)
        client = _build_mock_client(handler)
        with pytest.raises(NetworkError) as exc_info:
            await client.submit_and_wait(_signed_transaction())
        assert exc_info.value.status_code == 502
        await client.close()

    @pytest.mark.asyncio
    async def test_execution_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(202, json={"hash": "0xdef"})
            return httpx.Response(
                200,
                json={
                    "type": "user_transaction",
                    "success": False,
                    "vm_status": "Move abort: EACCOUNT_ALREADY_EXISTS",
                    "version": "7",
                },
            )

        client = _build_mock_client(handler)
        with pytest.raises(ValidationError, match="EACCOUNT_ALREADY_EXISTS") as exc_info:
            await client.submit_and_wait(_signed_transaction())
        assert exc_info.value.transaction_hash == "0xdef"
        await client.close()

    @pytest.mark.asyncio
    async def test_expired_transaction(self):
        polls = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(202, json={"hash": "0x123"})
            polls.append(request)
            return httpx.Response(404)

        # The transaction expires at 1030; the clock is already past it.
        client = _build_mock_client(handler, clock=lambda: 2000)
        with pytest.raises(ValidationError, match="expired"):
            await client.submit_and_wait(_signed_transaction())
        assert len(polls) == 1
        await client.close()

    @pytest.mark.asyncio
    async def test_missing_hash(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(202, json={})

        client = _build_mock_client(handler)
        with pytest.raises(ParseError):
            await client.submit_and_wait(_signed_transaction())
        await client.close()
