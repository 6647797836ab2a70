"""
Atomic group coordination.

Transactions that share a group id are accepted or rejected by the
network as a whole.
"""

from typing import List

import structlog

from algosdk import transaction
from algosdk.transaction import Transaction

from algodeploy.tx.types import InvalidTransactionError

logger = structlog.get_logger(__name__)

MAX_GROUP_SIZE = 16


class GroupSizeExceededError(Exception):
    """Raised when more than MAX_GROUP_SIZE transactions are grouped."""

    def __init__(self, size: int):
        super().__init__(
            f"Maximum size of an atomic transfer group is {MAX_GROUP_SIZE}, got {size}"
        )
        self.size = size


def check_group_size(size: int) -> None:
    """
    Raises:
        GroupSizeExceededError: If ``size`` is above MAX_GROUP_SIZE
    """
    if size > MAX_GROUP_SIZE:
        raise GroupSizeExceededError(size)


def compute_group_id(txns: List[Transaction]) -> bytes:
    """
    Group id of an ordered list of transactions.

    Hash over the ordered transaction ids: reordering yields a different id.
    """
    return transaction.calculate_group_id(txns)


def assign_group(txns: List[Transaction]) -> List[Transaction]:
    """
    Set a shared group id on every transaction.

    Args:
        txns: 1 to MAX_GROUP_SIZE unsigned transactions, in group order

    Returns:
        The same transactions, in the same order, with ``group`` set
    """
    if not txns:
        raise InvalidTransactionError("Cannot group an empty list of transactions")
    check_group_size(len(txns))

    gid = compute_group_id(txns)
    for txn in txns:
        txn.group = gid

    logger.debug("group_id_assigned", size=len(txns), group_id=gid.hex()[:16] + "...")
    return txns
