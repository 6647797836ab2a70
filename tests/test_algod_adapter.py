"""
Test suite for the algod REST adapter.

Uses httpx.MockTransport in place of a running node.
"""

import json

import httpx
import pytest

from algodeploy.node.algod import DEFAULT_VALIDITY_WINDOW, AlgodAdapter
from algodeploy.node.interface import (
    ConfirmationTimeoutError,
    NodeConnectionError,
    TransactionSubmitError,
)
from tests.conftest import TESTNET_GENESIS_HASH, TESTNET_GENESIS_ID


class FakeAlgod:
    """Minimal algod served through httpx.MockTransport."""

    def __init__(self, last_round: int = 1000, confirm_after: int = 1):
        self.last_round = last_round
        self.confirm_after = confirm_after
        self.pending_polls = 0
        self.pool_error = ""
        self.submitted = []
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/health":
            return httpx.Response(200, json={})
        if path == "/v2/transactions/params":
            return httpx.Response(200, json={
                "consensus-version": "future",
                "fee": 0,
                "genesis-hash": TESTNET_GENESIS_HASH,
                "genesis-id": TESTNET_GENESIS_ID,
                "last-round": self.last_round,
                "min-fee": 1000,
            })
        if path == "/v2/status":
            return httpx.Response(200, json={"last-round": self.last_round})
        if path.startswith("/v2/status/wait-for-block-after/"):
            self.last_round += 1
            return httpx.Response(200, json={"last-round": self.last_round})
        if path == "/v2/transactions" and request.method == "POST":
            self.submitted.append(request.content)
            return httpx.Response(200, json={"txId": "TXID"})
        if path.startswith("/v2/transactions/pending/"):
            self.pending_polls += 1
            confirmed = self.last_round if self.pending_polls > self.confirm_after else 0
            return httpx.Response(200, json={
                "confirmed-round": confirmed,
                "pool-error": self.pool_error,
            })
        return httpx.Response(404, json={"message": "not found"})


@pytest.fixture
def fake_algod() -> FakeAlgod:
    return FakeAlgod()


@pytest.fixture
def adapter(fake_algod, test_config) -> AlgodAdapter:
    return AlgodAdapter(test_config, transport=httpx.MockTransport(fake_algod.handler))


class TestSuggestedParams:

    @pytest.mark.asyncio
    async def test_params_from_node(self, adapter):
        params = await adapter.get_suggested_params()

        assert params.first == 1000
        assert params.last == 1000 + DEFAULT_VALIDITY_WINDOW
        assert params.gh == TESTNET_GENESIS_HASH
        assert params.gen == TESTNET_GENESIS_ID
        assert params.flat_fee is False
        await adapter.disconnect()

    @pytest.mark.asyncio
    async def test_token_header_sent(self, adapter, fake_algod, test_config):
        await adapter.get_status()

        assert fake_algod.requests[-1].headers["X-Algo-API-Token"] == test_config.algod_token
        await adapter.disconnect()

    @pytest.mark.asyncio
    async def test_api_error(self, test_config):
        def handler(request):
            if request.url.path == "/health":
                return httpx.Response(200, json={})
            return httpx.Response(500, text="boom")

        adapter = AlgodAdapter(test_config, transport=httpx.MockTransport(handler))

        with pytest.raises(NodeConnectionError, match="boom"):
            await adapter.get_suggested_params()
        await adapter.disconnect()


class TestSubmitRaw:

    @pytest.mark.asyncio
    async def test_single_blob(self, adapter, fake_algod):
        tx_id = await adapter.submit_raw(b"\x01\x02")

        assert tx_id == "TXID"
        assert fake_algod.submitted == [b"\x01\x02"]
        assert fake_algod.requests[-1].headers["Content-Type"] == "application/x-binary"
        await adapter.disconnect()

    @pytest.mark.asyncio
    async def test_group_is_concatenated(self, adapter, fake_algod):
        await adapter.submit_raw([b"\x01", b"\x02", b"\x03"])

        assert fake_algod.submitted == [b"\x01\x02\x03"]
        await adapter.disconnect()

    @pytest.mark.asyncio
    async def test_rejected(self, test_config):
        def handler(request):
            if request.url.path == "/health":
                return httpx.Response(200, json={})
            return httpx.Response(400, text=json.dumps({"message": "overspend"}))

        adapter = AlgodAdapter(test_config, transport=httpx.MockTransport(handler))

        with pytest.raises(TransactionSubmitError, match="overspend") as exc_info:
            await adapter.submit_raw(b"\x01")
        assert exc_info.value.error_code == "400"
        await adapter.disconnect()


class TestAwaitConfirmation:

    @pytest.mark.asyncio
    async def test_confirmed(self, adapter, fake_algod):
        info = await adapter.await_confirmation("TXID", wait_rounds=5)

        assert info["confirmed-round"] == 1001
        await adapter.disconnect()

    @pytest.mark.asyncio
    async def test_timeout_after_round_limit(self, test_config):
        fake = FakeAlgod(confirm_after=100)
        adapter = AlgodAdapter(test_config, transport=httpx.MockTransport(fake.handler))

        with pytest.raises(ConfirmationTimeoutError) as exc_info:
            await adapter.await_confirmation("TXID", wait_rounds=3)

        assert exc_info.value.wait_rounds == 3
        assert fake.pending_polls == 3
        await adapter.disconnect()

    @pytest.mark.asyncio
    async def test_pool_error(self, adapter, fake_algod):
        fake_algod.pool_error = "transaction already in ledger"

        with pytest.raises(TransactionSubmitError, match="already in ledger"):
            await adapter.await_confirmation("TXID", wait_rounds=3)
        await adapter.disconnect()
