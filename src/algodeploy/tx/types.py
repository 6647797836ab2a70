"""
Transaction execution types.

Describes one transaction in domain terms (who pays whom, which asset,
how it is signed) before it is turned into an algosdk transaction.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union

from algosdk import account
from algosdk.transaction import LogicSig, LogicSigAccount
from pydantic import BaseModel, Field


class SignType(str, Enum):
    """How a transaction gets its authorization."""
    SECRET_KEY = "sk"             # Ed25519 signature with the sender's key
    LOGIC_SIGNATURE = "lsig"      # Program-based (contract account or delegated) signature


class TransactionType(str, Enum):
    """Kinds of transactions the builder knows how to construct."""
    TRANSFER_ALGO = "transfer_algo"
    TRANSFER_ASSET = "transfer_asset"
    OPT_IN_ASA = "opt_in_asa"
    DEPLOY_ASA = "deploy_asa"
    MODIFY_ASSET = "modify_asset"
    FREEZE_ASSET = "freeze_asset"
    REVOKE_ASSET = "revoke_asset"
    DESTROY_ASSET = "destroy_asset"


LogicSignature = Union[LogicSig, LogicSigAccount]


class InvalidTransactionError(Exception):
    """Raised when a transaction description cannot be turned into a valid transaction."""
    pass


@dataclass
class Account:
    """An address with (optionally) its base64 encoded private key."""
    addr: str
    sk: Optional[str] = None


def generate_account() -> Account:
    """
    Generate a new random account.

    WARNING: Do not use in production. The key is not persisted.
    """
    sk, addr = account.generate_account()
    return Account(addr=addr, sk=sk)


@dataclass
class TxParams:
    """
    User overrides for fee, validity window and common optional fields.

    ``total_fee`` switches to flat fee mode and wins over ``fee_per_byte``.
    ``valid_rounds`` only has an effect together with ``first_valid``.
    """
    total_fee: Optional[int] = None
    fee_per_byte: Optional[int] = None
    first_valid: Optional[int] = None
    valid_rounds: Optional[int] = None

    note: Optional[str] = None
    noteb64: Optional[str] = None
    lease: Optional[bytes] = None
    close_remainder_to: Optional[str] = None
    rekey_to: Optional[str] = None


class ASADef(BaseModel):
    """Algorand Standard Asset definition."""

    total: int = Field(ge=0)
    decimals: int = Field(ge=0, le=19)
    default_frozen: bool = False
    unit_name: str = ""
    url: str = ""
    metadata_hash: Optional[bytes] = None
    note: Optional[str] = None
    noteb64: Optional[str] = None
    manager: Optional[str] = None
    reserve: Optional[str] = None
    freeze: Optional[str] = None
    clawback: Optional[str] = None


@dataclass
class AssetModFields:
    """New role addresses for an asset reconfiguration."""
    manager: Optional[str] = None
    reserve: Optional[str] = None
    freeze: Optional[str] = None
    clawback: Optional[str] = None


@dataclass(kw_only=True)
class ExecParams:
    """
    Common fields of every executable transaction.

    Exactly one credential is used: ``from_account.sk`` for
    ``SignType.SECRET_KEY`` or ``lsig`` for ``SignType.LOGIC_SIGNATURE``.
    Passing both is rejected at signing time.
    """
    TYPE: ClassVar[TransactionType]

    sign: SignType
    from_account: Account
    lsig: Optional[LogicSignature] = None
    pay_flags: TxParams = field(default_factory=TxParams)

    @property
    def type(self) -> TransactionType:
        return self.TYPE


@dataclass(kw_only=True)
class AlgoTransferParam(ExecParams):
    TYPE: ClassVar[TransactionType] = TransactionType.TRANSFER_ALGO

    to_account_addr: str
    amount_micro_algos: int


@dataclass(kw_only=True)
class AssetTransferParam(ExecParams):
    TYPE: ClassVar[TransactionType] = TransactionType.TRANSFER_ASSET

    to_account_addr: str
    amount: int
    asset_id: int


@dataclass(kw_only=True)
class OptInASAParam(ExecParams):
    TYPE: ClassVar[TransactionType] = TransactionType.OPT_IN_ASA

    asset_id: int


@dataclass(kw_only=True)
class DeployASAParam(ExecParams):
    TYPE: ClassVar[TransactionType] = TransactionType.DEPLOY_ASA

    asa_name: str
    asa_def: ASADef


@dataclass(kw_only=True)
class ModifyAssetParam(ExecParams):
    TYPE: ClassVar[TransactionType] = TransactionType.MODIFY_ASSET

    asset_id: int
    fields: AssetModFields


@dataclass(kw_only=True)
class FreezeAssetParam(ExecParams):
    TYPE: ClassVar[TransactionType] = TransactionType.FREEZE_ASSET

    asset_id: int
    freeze_target: str
    freeze_state: bool


@dataclass(kw_only=True)
class RevokeAssetParam(ExecParams):
    """Clawback: move ``amount`` from ``revoke_account`` to ``recipient``."""
    TYPE: ClassVar[TransactionType] = TransactionType.REVOKE_ASSET

    asset_id: int
    recipient: str
    amount: int
    revoke_account: str


@dataclass(kw_only=True)
class DestroyAssetParam(ExecParams):
    TYPE: ClassVar[TransactionType] = TransactionType.DESTROY_ASSET

    asset_id: int
