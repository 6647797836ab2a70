"""
Transaction executor.

Resolves network parameters, builds, groups and signs transactions, then
submits them and waits for confirmation.
"""

import base64
from pathlib import Path
from typing import List, Optional, Union

import structlog

from algodeploy.config import DeployerConfig, get_config
from algodeploy.node.interface import NodeInterface
from algodeploy.tx.builder import mk_transaction
from algodeploy.tx.files import load_signed_txn_from_file
from algodeploy.tx.group import assign_group, check_group_size
from algodeploy.tx.params import get_suggested_params, mk_tx_params
from algodeploy.tx.signer import iter_signed, sign_transaction
from algodeploy.tx.types import ExecParams, InvalidTransactionError

logger = structlog.get_logger(__name__)


class TransactionExecutor:
    """
    Executes a single transaction or an atomic group.

    Usage:
        ```python
        executor = TransactionExecutor(node)
        info = await executor.execute_transaction(
            AlgoTransferParam(
                sign=SignType.SECRET_KEY,
                from_account=alice,
                to_account_addr=bob.addr,
                amount_micro_algos=1_000_000,
            )
        )
        ```

    Nothing reaches the node until every transaction of the call is built
    and signed. Cancelling ``execute_transaction`` while it waits for
    confirmation only stops the wait: transactions already submitted stay
    on the network and may still be confirmed.
    """

    def __init__(
        self,
        node: NodeInterface,
        config: Optional[DeployerConfig] = None,
    ):
        """
        Initialize the executor.

        Args:
            node: Node interface for parameters and submission
            config: Deployer configuration
        """
        self.node = node
        self.config = config or get_config()

    async def execute_transaction(
        self,
        exec_params: Union[ExecParams, List[ExecParams]],
    ) -> dict:
        """
        Execute one transaction or a group of transactions.

        A list is submitted as an atomic group (one element lists are
        submitted without a group id); a bare ExecParams is submitted on
        its own.

        Args:
            exec_params: Transaction parameters, or a list of them

        Returns:
            Confirmation record from the node, unchanged

        Raises:
            GroupSizeExceededError: More than 16 transactions, before any I/O
            StaleNetworkError: The node is not progressing
            InvalidTransactionError: A transaction could not be built
            MissingLogicSigError, MissingSecretKeyError, UnknownSignTypeError,
            ConflictingCredentialsError:
                A transaction could not be signed
        """
        if isinstance(exec_params, list):
            if not exec_params:
                raise InvalidTransactionError("No transactions to execute")
            check_group_size(len(exec_params))

        suggested = await get_suggested_params(self.node)

        if isinstance(exec_params, list):
            txns = [
                mk_transaction(p, mk_tx_params(p.pay_flags, suggested))
                for p in exec_params
            ]
            if len(txns) > 1:
                txns = assign_group(txns)

            signed: Union[bytes, List[bytes]] = []
            for index, (txn, p) in enumerate(zip(txns, exec_params)):
                blob = sign_transaction(txn, p)
                logger.info(
                    "transaction_signed",
                    index=index,
                    blob=base64.b64encode(blob).decode(),
                )
                signed.append(blob)
            if len(signed) == 1:
                signed = signed[0]
        else:
            txn = mk_transaction(
                exec_params,
                mk_tx_params(exec_params.pay_flags, suggested),
            )
            signed = sign_transaction(txn, exec_params)
            logger.info("transaction_signed", blob=base64.b64encode(signed).decode())

        return await send_and_wait(self.node, signed, self.config.wait_rounds)


class SignedTransactionReplayer:
    """
    Resubmits previously signed transactions.

    The validity window of a stored transaction was fixed when it was
    signed. If the network is already past its last valid round the node
    rejects it; this is not checked beforehand.
    """

    def __init__(
        self,
        node: NodeInterface,
        config: Optional[DeployerConfig] = None,
    ):
        self.node = node
        self.config = config or get_config()

    async def execute_signed_txn_from_file(self, file_name: Union[str, Path]) -> dict:
        """
        Load a signed transaction file and submit it unchanged.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        blob = load_signed_txn_from_file(file_name, self.config.assets_dir)
        if blob is None:
            raise FileNotFoundError(f"File {file_name} does not exist")

        return await self.replay(blob, source=str(file_name))

    async def replay(self, blob: bytes, source: Optional[str] = None) -> dict:
        """
        Submit signed transaction bytes unchanged.

        The blob may hold a single signed transaction or a whole atomic
        group. Decoding only feeds the debug log; the node decides validity.
        """
        try:
            stxns = list(iter_signed(blob))
            logger.debug(
                "signed_txn_decoded",
                source=source,
                tx_ids=[stxn.get_txid() for stxn in stxns],
                last_valid=[stxn.transaction.last_valid_round for stxn in stxns],
            )
        except Exception as e:
            logger.debug("signed_txn_not_decoded", source=source, error=str(e))

        return await send_and_wait(self.node, blob, self.config.wait_rounds)


async def send_and_wait(
    node: NodeInterface,
    raw_txns: Union[bytes, List[bytes]],
    wait_rounds: int,
) -> dict:
    """Submit signed bytes in a single call and wait for confirmation."""
    tx_id = await node.submit_raw(raw_txns)
    confirmed = await node.await_confirmation(tx_id, wait_rounds)
    logger.info("transaction_confirmed", tx_id=tx_id, confirmation=confirmed)
    return confirmed
