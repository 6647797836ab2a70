"""
Abstract interface for Algorand node integration.

Defines the contract for blockchain access that all node adapters must implement.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union

from algosdk.transaction import SuggestedParams


class NodeInterface(ABC):
    """
    Abstract interface for Algorand node access.

    The node is the sole authority for chain state. Callers never cache
    or fabricate round numbers; everything comes from here:
    - Suggested transaction parameters
    - Node status (current round)
    - Raw transaction submission
    - Confirmation monitoring
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish connection to the node/API.

        Raises:
            NodeConnectionError: If connection cannot be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection to the node/API."""
        pass

    @abstractmethod
    async def get_suggested_params(self) -> SuggestedParams:
        """
        Get suggested transaction parameters.

        Returns:
            Fee, validity window and genesis fields as reported by the node
        """
        pass

    @abstractmethod
    async def get_status(self) -> dict:
        """
        Get node status.

        Returns:
            Status record, including ``last-round``
        """
        pass

    @abstractmethod
    async def submit_raw(self, blobs: Union[bytes, List[bytes]]) -> str:
        """
        Submit one signed transaction or a signed group in a single call.

        Args:
            blobs: Signed transaction bytes, or an ordered list of them

        Returns:
            Transaction id of the (first) submitted transaction

        Raises:
            TransactionSubmitError: If the node rejects the submission
        """
        pass

    @abstractmethod
    async def await_confirmation(self, tx_id: str, wait_rounds: int = 10) -> dict:
        """
        Wait until a transaction is included in a block.

        Args:
            tx_id: Id of the transaction to monitor
            wait_rounds: Maximum number of rounds to wait

        Returns:
            Pending transaction info with ``confirmed-round`` set

        Raises:
            ConfirmationTimeoutError: If not confirmed within ``wait_rounds``
            TransactionSubmitError: If the node dropped the transaction
        """
        pass


class NodeConnectionError(Exception):
    """Raised when connection to node fails."""
    pass


class TransactionSubmitError(Exception):
    """Raised when transaction submission fails."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class ConfirmationTimeoutError(Exception):
    """Raised when a transaction is not confirmed within the round limit."""

    def __init__(self, tx_id: str, wait_rounds: int):
        super().__init__(
            f"Transaction {tx_id} not confirmed after {wait_rounds} rounds"
        )
        self.tx_id = tx_id
        self.wait_rounds = wait_rounds
