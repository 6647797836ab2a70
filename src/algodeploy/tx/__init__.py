"""
Transaction module.

Handles parameter resolution, transaction construction, grouping and signing.
"""

from algodeploy.tx.types import (
    ASADef,
    Account,
    AlgoTransferParam,
    AssetModFields,
    AssetTransferParam,
    DeployASAParam,
    DestroyAssetParam,
    ExecParams,
    FreezeAssetParam,
    InvalidTransactionError,
    ModifyAssetParam,
    OptInASAParam,
    RevokeAssetParam,
    SignType,
    TransactionType,
    TxParams,
    generate_account,
)
from algodeploy.tx.params import (
    ALGORAND_MIN_TX_FEE,
    StaleNetworkError,
    get_suggested_params,
    mk_tx_params,
)
from algodeploy.tx.note import encode_note, resolve_note
from algodeploy.tx.builder import (
    make_asa_opt_in_tx,
    make_asset_create_txn,
    mk_transaction,
)
from algodeploy.tx.signer import (
    ConflictingCredentialsError,
    MissingLogicSigError,
    MissingSecretKeyError,
    UnknownSignTypeError,
    decode_signed,
    iter_signed,
    sign_transaction,
)
from algodeploy.tx.group import (
    MAX_GROUP_SIZE,
    GroupSizeExceededError,
    assign_group,
)

__all__ = [
    "ASADef",
    "Account",
    "AlgoTransferParam",
    "AssetModFields",
    "AssetTransferParam",
    "DeployASAParam",
    "DestroyAssetParam",
    "ExecParams",
    "FreezeAssetParam",
    "InvalidTransactionError",
    "ModifyAssetParam",
    "OptInASAParam",
    "RevokeAssetParam",
    "SignType",
    "TransactionType",
    "TxParams",
    "generate_account",
    "ALGORAND_MIN_TX_FEE",
    "StaleNetworkError",
    "get_suggested_params",
    "mk_tx_params",
    "encode_note",
    "resolve_note",
    "make_asa_opt_in_tx",
    "make_asset_create_txn",
    "mk_transaction",
    "ConflictingCredentialsError",
    "MissingLogicSigError",
    "MissingSecretKeyError",
    "UnknownSignTypeError",
    "decode_signed",
    "iter_signed",
    "sign_transaction",
    "MAX_GROUP_SIZE",
    "GroupSizeExceededError",
    "assign_group",
]
