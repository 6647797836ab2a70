"""
Node Integration Layer.

Provides abstracted access to Algorand chain parameters and transaction submission.
"""

from algodeploy.node.interface import (
    NodeInterface,
    NodeConnectionError,
    TransactionSubmitError,
    ConfirmationTimeoutError,
)
from algodeploy.node.algod import AlgodAdapter

__all__ = [
    "NodeInterface",
    "NodeConnectionError",
    "TransactionSubmitError",
    "ConfirmationTimeoutError",
    "AlgodAdapter",
]
