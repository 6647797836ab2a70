"""
Core deployer components.

This module contains the orchestration of transaction execution and
replay of previously signed transactions.
"""

from algodeploy.core.executor import (
    SignedTransactionReplayer,
    TransactionExecutor,
    send_and_wait,
)

__all__ = [
    "SignedTransactionReplayer",
    "TransactionExecutor",
    "send_and_wait",
]
