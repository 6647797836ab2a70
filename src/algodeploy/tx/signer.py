"""
Transaction Signer - handles transaction signing.

Turns an unsigned transaction into signed bytes ready for submission,
using the signing strategy requested by the execution parameters.
"""

import base64
from typing import Iterator, Union

import msgpack
import structlog

from algosdk import encoding
from algosdk.transaction import (
    LogicSigTransaction,
    SignedTransaction,
    Transaction,
)

from algodeploy.tx.types import ExecParams, SignType

logger = structlog.get_logger(__name__)


class MissingLogicSigError(Exception):
    """Raised when logic signature signing is requested without a logic signature."""
    pass


class MissingSecretKeyError(Exception):
    """Raised when secret key signing is requested without a secret key."""
    pass


class UnknownSignTypeError(Exception):
    """Raised for a sign type that is not one of SignType."""
    pass


class ConflictingCredentialsError(Exception):
    """Raised when both a secret key and a logic signature are supplied."""
    pass


def encode_signed(stxn: Union[SignedTransaction, LogicSigTransaction]) -> bytes:
    """Canonical msgpack bytes of a signed transaction."""
    return base64.b64decode(encoding.msgpack_encode(stxn))


def decode_signed(blob: bytes) -> Union[SignedTransaction, LogicSigTransaction]:
    """Decode signed transaction bytes back into an algosdk object."""
    return encoding.msgpack_decode(base64.b64encode(blob).decode())


def iter_signed(blob: bytes) -> Iterator[Union[SignedTransaction, LogicSigTransaction]]:
    """Decode back-to-back signed transactions, as stored for an atomic group."""
    unpacker = msgpack.Unpacker(raw=False)
    unpacker.feed(blob)
    for obj in unpacker:
        yield encoding.msgpack_decode(obj)


def sign_transaction(txn: Transaction, exec_params: ExecParams) -> bytes:
    """
    Sign a transaction.

    Args:
        txn: The unsigned transaction (group id already assigned, if any)
        exec_params: Carries the sign type and the matching credential

    Returns:
        Signed transaction bytes

    Raises:
        MissingSecretKeyError: SECRET_KEY without ``from_account.sk``
        ConflictingCredentialsError: Both ``from_account.sk`` and ``lsig`` are set
        MissingLogicSigError: LOGIC_SIGNATURE without ``lsig``
        UnknownSignTypeError: Any other sign type
    """
    sign = exec_params.sign

    if exec_params.from_account.sk and exec_params.lsig is not None:
        raise ConflictingCredentialsError(
            f"both a secret key and a logic signature were passed for "
            f"{exec_params.from_account.addr}"
        )

    if sign == SignType.SECRET_KEY:
        sk = exec_params.from_account.sk
        if not sk:
            raise MissingSecretKeyError(
                f"secret key for {exec_params.from_account.addr} was not passed"
            )
        stxn = txn.sign(sk)
    elif sign == SignType.LOGIC_SIGNATURE:
        lsig = exec_params.lsig
        if lsig is None:
            raise MissingLogicSigError(
                "logic signature for this transaction was not passed or is not defined"
            )
        stxn = LogicSigTransaction(txn, lsig)
    else:
        raise UnknownSignTypeError(f"Unknown type of signature: {sign!r}")

    logger.debug("transaction_signed", tx_id=txn.get_txid(), sign_type=SignType(sign).value)
    return encode_signed(stxn)
