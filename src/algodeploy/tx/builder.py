"""
Transaction Builder - constructs unsigned transactions.

Maps execution parameters plus resolved network parameters to algosdk
transaction objects. Builders never sign and never talk to the node.
"""

from typing import Callable, Dict, Optional

import structlog

from algosdk import transaction
from algosdk.transaction import SuggestedParams, Transaction

from algodeploy.tx.note import resolve_note
from algodeploy.tx.types import (
    ASADef,
    AlgoTransferParam,
    AssetTransferParam,
    DeployASAParam,
    DestroyAssetParam,
    ExecParams,
    FreezeAssetParam,
    InvalidTransactionError,
    ModifyAssetParam,
    OptInASAParam,
    RevokeAssetParam,
    TransactionType,
    TxParams,
)

logger = structlog.get_logger(__name__)

# Protocol limits, in bytes
MAX_UNIT_NAME_LEN = 8
MAX_ASSET_NAME_LEN = 32
MAX_URL_LEN = 96
METADATA_HASH_LEN = 32


def _tx_note(flags: TxParams) -> Optional[bytes]:
    return resolve_note(flags.note, flags.noteb64)


def _check_amount(amount: int, what: str) -> None:
    if amount < 0:
        raise InvalidTransactionError(f"{what} must not be negative, got {amount}")


def validate_asa_def(name: str, asa_def: ASADef) -> None:
    """
    Check an asset definition against protocol limits.

    Raises:
        InvalidTransactionError: If a field exceeds its limit
    """
    if len(asa_def.unit_name.encode("utf-8")) > MAX_UNIT_NAME_LEN:
        raise InvalidTransactionError(
            f"ASA {name}: unit name {asa_def.unit_name!r} longer than {MAX_UNIT_NAME_LEN} bytes"
        )
    if len(name.encode("utf-8")) > MAX_ASSET_NAME_LEN:
        raise InvalidTransactionError(
            f"ASA {name}: asset name longer than {MAX_ASSET_NAME_LEN} bytes"
        )
    if len(asa_def.url.encode("utf-8")) > MAX_URL_LEN:
        raise InvalidTransactionError(
            f"ASA {name}: url longer than {MAX_URL_LEN} bytes"
        )
    if asa_def.metadata_hash is not None and len(asa_def.metadata_hash) != METADATA_HASH_LEN:
        raise InvalidTransactionError(
            f"ASA {name}: metadata hash must be {METADATA_HASH_LEN} bytes, "
            f"got {len(asa_def.metadata_hash)}"
        )


def make_asset_create_txn(
    name: str,
    asa_def: ASADef,
    flags: DeployASAParam,
    params: SuggestedParams,
) -> Transaction:
    """
    Build an asset creation transaction.

    A note given in the transaction flags wins over the one in the
    asset definition.
    """
    validate_asa_def(name, asa_def)
    note = resolve_note(
        flags.pay_flags.note,
        flags.pay_flags.noteb64,
        asa_def.note,
        asa_def.noteb64,
    )

    return transaction.AssetCreateTxn(
        sender=flags.from_account.addr,
        sp=params,
        total=asa_def.total,
        decimals=asa_def.decimals,
        default_frozen=asa_def.default_frozen,
        manager=asa_def.manager,
        reserve=asa_def.reserve,
        freeze=asa_def.freeze,
        clawback=asa_def.clawback,
        unit_name=asa_def.unit_name,
        asset_name=name,
        url=asa_def.url,
        metadata_hash=asa_def.metadata_hash,
        note=note,
        lease=flags.pay_flags.lease,
        rekey_to=flags.pay_flags.rekey_to,
    )


def make_asa_opt_in_tx(
    addr: str,
    asset_id: int,
    params: SuggestedParams,
) -> Transaction:
    """
    Build an opt-in transaction: a zero amount asset transfer to self.

    No close-to address, no revocation target and no note.
    """
    return transaction.AssetTransferTxn(
        sender=addr,
        sp=params,
        receiver=addr,
        amt=0,
        index=asset_id,
        close_assets_to=None,
        revocation_target=None,
        note=None,
    )


def _algo_transfer(p: AlgoTransferParam, params: SuggestedParams) -> Transaction:
    _check_amount(p.amount_micro_algos, "amount_micro_algos")
    return transaction.PaymentTxn(
        sender=p.from_account.addr,
        sp=params,
        receiver=p.to_account_addr,
        amt=p.amount_micro_algos,
        close_remainder_to=p.pay_flags.close_remainder_to,
        note=_tx_note(p.pay_flags),
        lease=p.pay_flags.lease,
        rekey_to=p.pay_flags.rekey_to,
    )


def _asset_transfer(p: AssetTransferParam, params: SuggestedParams) -> Transaction:
    _check_amount(p.amount, "amount")
    return transaction.AssetTransferTxn(
        sender=p.from_account.addr,
        sp=params,
        receiver=p.to_account_addr,
        amt=p.amount,
        index=p.asset_id,
        close_assets_to=p.pay_flags.close_remainder_to,
        note=_tx_note(p.pay_flags),
        lease=p.pay_flags.lease,
        rekey_to=p.pay_flags.rekey_to,
    )


def _opt_in(p: OptInASAParam, params: SuggestedParams) -> Transaction:
    return make_asa_opt_in_tx(p.from_account.addr, p.asset_id, params)


def _deploy_asa(p: DeployASAParam, params: SuggestedParams) -> Transaction:
    return make_asset_create_txn(p.asa_name, p.asa_def, p, params)


def _modify_asset(p: ModifyAssetParam, params: SuggestedParams) -> Transaction:
    # Roles left as None are cleared on chain.
    return transaction.AssetConfigTxn(
        sender=p.from_account.addr,
        sp=params,
        index=p.asset_id,
        manager=p.fields.manager,
        reserve=p.fields.reserve,
        freeze=p.fields.freeze,
        clawback=p.fields.clawback,
        note=_tx_note(p.pay_flags),
        lease=p.pay_flags.lease,
        rekey_to=p.pay_flags.rekey_to,
        strict_empty_address_check=False,
    )


def _freeze_asset(p: FreezeAssetParam, params: SuggestedParams) -> Transaction:
    return transaction.AssetFreezeTxn(
        sender=p.from_account.addr,
        sp=params,
        index=p.asset_id,
        target=p.freeze_target,
        new_freeze_state=p.freeze_state,
        note=_tx_note(p.pay_flags),
        lease=p.pay_flags.lease,
        rekey_to=p.pay_flags.rekey_to,
    )


def _revoke_asset(p: RevokeAssetParam, params: SuggestedParams) -> Transaction:
    _check_amount(p.amount, "amount")
    return transaction.AssetTransferTxn(
        sender=p.from_account.addr,
        sp=params,
        receiver=p.recipient,
        amt=p.amount,
        index=p.asset_id,
        revocation_target=p.revoke_account,
        note=_tx_note(p.pay_flags),
        lease=p.pay_flags.lease,
        rekey_to=p.pay_flags.rekey_to,
    )


def _destroy_asset(p: DestroyAssetParam, params: SuggestedParams) -> Transaction:
    return transaction.AssetDestroyTxn(
        sender=p.from_account.addr,
        sp=params,
        index=p.asset_id,
        note=_tx_note(p.pay_flags),
        lease=p.pay_flags.lease,
        rekey_to=p.pay_flags.rekey_to,
    )


_BUILDERS: Dict[TransactionType, Callable[..., Transaction]] = {
    TransactionType.TRANSFER_ALGO: _algo_transfer,
    TransactionType.TRANSFER_ASSET: _asset_transfer,
    TransactionType.OPT_IN_ASA: _opt_in,
    TransactionType.DEPLOY_ASA: _deploy_asa,
    TransactionType.MODIFY_ASSET: _modify_asset,
    TransactionType.FREEZE_ASSET: _freeze_asset,
    TransactionType.REVOKE_ASSET: _revoke_asset,
    TransactionType.DESTROY_ASSET: _destroy_asset,
}


def mk_transaction(exec_params: ExecParams, params: SuggestedParams) -> Transaction:
    """
    Build an unsigned transaction.

    Args:
        exec_params: What the transaction should do
        params: Resolved network parameters for this transaction

    Returns:
        Unsigned algosdk transaction

    Raises:
        InvalidTransactionError: If the description is malformed
    """
    tx_type = getattr(exec_params, "type", None)
    build = _BUILDERS.get(tx_type)
    if build is None:
        raise InvalidTransactionError(f"Unknown transaction type: {tx_type!r}")

    try:
        txn = build(exec_params, params)
    except InvalidTransactionError:
        raise
    except Exception as e:
        logger.error(
            "transaction_build_failed",
            tx_type=tx_type.value,
            error=str(e),
        )
        raise InvalidTransactionError(f"Failed to build {tx_type.value} transaction: {e}") from e

    logger.debug(
        "transaction_built",
        tx_type=tx_type.value,
        sender=exec_params.from_account.addr[:8] + "...",
        first_round=params.first,
        last_round=params.last,
    )
    return txn
