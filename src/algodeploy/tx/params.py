"""
Network parameter resolution.

Fetches suggested parameters from the node and merges user fee and
validity overrides into the parameters each transaction is built with.
"""

import copy
from typing import Optional

import structlog

from algosdk.transaction import SuggestedParams

from algodeploy.node.interface import NodeInterface
from algodeploy.tx.types import TxParams

logger = structlog.get_logger(__name__)

# microAlgos
ALGORAND_MIN_TX_FEE = 1000


class StaleNetworkError(Exception):
    """Raised when the node has not produced a usable round yet."""
    pass


async def get_suggested_params(node: NodeInterface) -> SuggestedParams:
    """
    Fetch suggested parameters from the node.

    Private networks that are not progressing report 0 as the first
    round. Such parameters are rejected rather than patched.

    Raises:
        StaleNetworkError: If the reported first round is 0
    """
    params = await node.get_suggested_params()
    if params.first == 0:
        raise StaleNetworkError(
            "Suggested params returned 0 as firstRound. Ensure that your node progresses."
        )

    logger.debug(
        "suggested_params_fetched",
        first_round=params.first,
        last_round=params.last,
        fee=params.fee,
    )
    return params


def mk_tx_params(
    user_params: Optional[TxParams],
    suggested: SuggestedParams,
) -> SuggestedParams:
    """
    Merge user overrides into a copy of the suggested parameters.

    Args:
        user_params: Fee and validity overrides (may be None)
        suggested: Parameters reported by the node; left untouched

    Returns:
        New SuggestedParams for a single transaction
    """
    user_params = user_params or TxParams()
    s = copy.copy(suggested)

    s.flat_fee = user_params.total_fee is not None
    if user_params.total_fee is not None:
        s.fee = user_params.total_fee
    elif user_params.fee_per_byte is not None:
        s.fee = user_params.fee_per_byte
    else:
        s.fee = ALGORAND_MIN_TX_FEE
    if s.flat_fee:
        s.fee = max(s.fee, ALGORAND_MIN_TX_FEE)

    if user_params.first_valid is not None:
        s.first = user_params.first_valid
    if user_params.first_valid is not None and user_params.valid_rounds is not None:
        s.last = user_params.first_valid + user_params.valid_rounds

    return s
