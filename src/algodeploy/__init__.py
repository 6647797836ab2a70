"""
Algorand Deployer

Transaction orchestration for Algorand deployment scripts.
Builds, groups and signs transactions from high level execution parameters,
submits them to an algod node and waits for confirmation.
"""

__version__ = "0.1.0"

from algodeploy.core.executor import SignedTransactionReplayer, TransactionExecutor
from algodeploy.tx.types import ExecParams, SignType, TransactionType, TxParams

__all__ = [
    "TransactionExecutor",
    "SignedTransactionReplayer",
    "ExecParams",
    "SignType",
    "TransactionType",
    "TxParams",
]
