"""
Pytest configuration and shared fixtures for the test suite.
"""

from typing import List, Optional, Union

import pytest
from algosdk.transaction import LogicSigAccount, SuggestedParams

from algodeploy.config import DeployerConfig, NetworkType
from algodeploy.node.interface import NodeInterface
from algodeploy.tx.signer import iter_signed
from algodeploy.tx.types import Account, generate_account


TESTNET_GENESIS_HASH = "SGO1GKSzyE7IEPItTxCByw9x8FmnrCDexi9/cOUJOiI="
TESTNET_GENESIS_ID = "testnet-v1.0"

# "#pragma version 2; int 1"
APPROVE_ALL_PROGRAM = b"\x02\x20\x01\x01\x22"

OPAQUE_TX_ID = "OPAQUE"


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config(tmp_path) -> DeployerConfig:
    """Create a test configuration."""
    return DeployerConfig(
        network=NetworkType.PRIVATE,
        algod_address="http://algod.test",
        algod_token="a" * 64,
        wait_rounds=5,
        assets_dir=str(tmp_path),
        log_level="DEBUG",
    )


# ============================================================================
# Test Data Generators
# ============================================================================

def make_suggested_params(
    first: int = 500,
    last: int = 1500,
    fee: int = 0,
) -> SuggestedParams:
    """Suggested params as a node would report them."""
    return SuggestedParams(
        fee=fee,
        first=first,
        last=last,
        gh=TESTNET_GENESIS_HASH,
        gen=TESTNET_GENESIS_ID,
        flat_fee=False,
        min_fee=1000,
    )


@pytest.fixture
def suggested_params() -> SuggestedParams:
    return make_suggested_params()


@pytest.fixture
def alice() -> Account:
    return generate_account()


@pytest.fixture
def bob() -> Account:
    return generate_account()


@pytest.fixture
def contract_lsig() -> LogicSigAccount:
    """Contract account that approves everything."""
    return LogicSigAccount(APPROVE_ALL_PROGRAM)


@pytest.fixture
def contract_account(contract_lsig) -> Account:
    return Account(addr=contract_lsig.address())


# ============================================================================
# Mock Node Interface
# ============================================================================

class MockNodeInterface(NodeInterface):
    """Mock node interface for testing."""

    def __init__(self, params: Optional[SuggestedParams] = None):
        self.params = params or make_suggested_params()
        self.params_calls = 0
        self.submitted: List[Union[bytes, List[bytes]]] = []
        self.awaited: List[str] = []
        self._connected = False

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def get_suggested_params(self) -> SuggestedParams:
        self.params_calls += 1
        return self.params

    async def get_status(self) -> dict:
        return {"last-round": self.params.first}

    async def submit_raw(self, blobs: Union[bytes, List[bytes]]) -> str:
        self.submitted.append(blobs)
        first = blobs[0] if isinstance(blobs, list) else blobs
        try:
            return next(iter_signed(first)).get_txid()
        except Exception:
            # Not a signed transaction; a real node would reject it
            return OPAQUE_TX_ID

    async def await_confirmation(self, tx_id: str, wait_rounds: int = 10) -> dict:
        self.awaited.append(tx_id)
        return {
            "confirmed-round": self.params.first + 1,
            "pool-error": "",
            "txid": tx_id,
        }


@pytest.fixture
def mock_node() -> MockNodeInterface:
    """Create a mock node interface."""
    return MockNodeInterface()
