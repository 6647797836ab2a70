"""
Algod REST adapter for node integration.

Provides blockchain access via the algod v2 REST API.
"""

from typing import Any, List, Optional, Union

import httpx
import structlog

from algosdk.transaction import SuggestedParams

from algodeploy.config import DeployerConfig, get_config
from algodeploy.node.interface import (
    NodeInterface,
    NodeConnectionError,
    TransactionSubmitError,
    ConfirmationTimeoutError,
)

logger = structlog.get_logger(__name__)

# algod suggests a validity window of this many rounds past the current one
DEFAULT_VALIDITY_WINDOW = 1000


class AlgodAdapter(NodeInterface):
    """
    Algod API adapter.

    Implements the NodeInterface using algod's REST API.
    """

    def __init__(
        self,
        config: Optional[DeployerConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the algod adapter.

        Args:
            config: Deployer configuration. Uses global config if not provided.
            transport: Custom httpx transport (used by tests)
        """
        self.config = config or get_config()
        self.base_url = self.config.algod_url
        self.token = self.config.algod_token
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> dict:
        """Get request headers with API token."""
        return {
            "X-Algo-API-Token": self.token,
        }

    async def connect(self) -> None:
        """Establish connection (create HTTP client)."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.config.request_timeout_seconds,
            transport=self._transport,
        )

        # Test connection
        try:
            response = await self._client.get("/health")
            if response.status_code != 200:
                raise NodeConnectionError(f"Algod health check failed: {response.text}")
            logger.info("algod_connected", base_url=self.base_url)
        except httpx.RequestError as e:
            raise NodeConnectionError(f"Failed to connect to algod: {e}") from e

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("algod_disconnected")

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs,
    ) -> Any:
        """Make an API request."""
        if not self._client:
            await self.connect()

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("algod_request_error", path=path, error=str(e))
            raise NodeConnectionError(f"Algod request failed: {e}") from e

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            error_msg = response.text
            logger.error(
                "algod_request_failed",
                path=path,
                status=response.status_code,
                error=error_msg,
            )
            raise NodeConnectionError(f"Algod API error: {error_msg}")

        return response.json()

    async def get_suggested_params(self) -> SuggestedParams:
        """Get suggested transaction parameters from algod."""
        data = await self._request("GET", "/v2/transactions/params")
        if not data:
            raise NodeConnectionError("Algod returned no transaction parameters")

        last_round = int(data["last-round"])
        return SuggestedParams(
            fee=int(data["fee"]),
            first=last_round,
            last=last_round + DEFAULT_VALIDITY_WINDOW,
            gh=data["genesis-hash"],
            gen=data.get("genesis-id"),
            flat_fee=False,
            consensus_version=data.get("consensus-version"),
            min_fee=data.get("min-fee"),
        )

    async def get_status(self) -> dict:
        """Get node status."""
        data = await self._request("GET", "/v2/status")
        if not data:
            raise NodeConnectionError("Algod returned no status")
        return data

    async def submit_raw(self, blobs: Union[bytes, List[bytes]]) -> str:
        """Submit signed transaction bytes; a group is sent concatenated."""
        payload = b"".join(blobs) if isinstance(blobs, list) else blobs

        if not self._client:
            await self.connect()

        try:
            response = await self._client.post(
                "/v2/transactions",
                content=payload,
                headers={"Content-Type": "application/x-binary"},
            )
        except httpx.RequestError as e:
            raise TransactionSubmitError(f"Transaction submission request failed: {e}") from e

        if response.status_code != 200:
            error_data = response.text
            logger.error("tx_submit_failed", error=error_data)
            raise TransactionSubmitError(
                f"Transaction submission failed: {error_data}",
                error_code=str(response.status_code),
            )

        tx_id = response.json()["txId"]
        logger.info("tx_submitted", tx_id=tx_id)
        return tx_id

    async def await_confirmation(self, tx_id: str, wait_rounds: int = 10) -> dict:
        """Wait for transaction confirmation, at most ``wait_rounds`` rounds."""
        status = await self.get_status()
        start_round = int(status["last-round"]) + 1
        current_round = start_round

        while current_round < start_round + wait_rounds:
            info = await self._request("GET", f"/v2/transactions/pending/{tx_id}")

            if info:
                if info.get("confirmed-round", 0) > 0:
                    logger.info(
                        "tx_confirmed",
                        tx_id=tx_id,
                        confirmed_round=info["confirmed-round"],
                    )
                    return info
                if info.get("pool-error"):
                    raise TransactionSubmitError(
                        f"Transaction {tx_id} rejected from pool: {info['pool-error']}"
                    )

            await self._request("GET", f"/v2/status/wait-for-block-after/{current_round}")
            current_round += 1

        logger.warning("tx_confirmation_timeout", tx_id=tx_id, wait_rounds=wait_rounds)
        raise ConfirmationTimeoutError(tx_id, wait_rounds)
