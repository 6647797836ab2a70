"""Note field encoding."""

import base64
import binascii
from typing import Optional

from algodeploy.tx.types import InvalidTransactionError


def encode_note(note: Optional[str] = None, noteb64: Optional[str] = None) -> Optional[bytes]:
    """
    Encode a transaction note.

    A base64 note wins over a plain one; the two are never combined.
    """
    if noteb64:
        try:
            return base64.b64decode(noteb64, validate=True)
        except binascii.Error as e:
            raise InvalidTransactionError(f"Invalid base64 note: {e}") from e
    if note:
        return note.encode("utf-8")
    return None


def resolve_note(
    tx_note: Optional[str] = None,
    tx_noteb64: Optional[str] = None,
    asa_note: Optional[str] = None,
    asa_noteb64: Optional[str] = None,
) -> Optional[bytes]:
    """
    Pick the note for a transaction.

    A transaction level note takes precedence over the one in an asset
    definition.
    """
    if tx_noteb64 or tx_note:
        return encode_note(tx_note, tx_noteb64)
    if asa_noteb64 or asa_note:
        return encode_note(asa_note, asa_noteb64)
    return None
