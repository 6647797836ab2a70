"""Signed transaction files."""

from pathlib import Path
from typing import Optional, Union

import structlog

logger = structlog.get_logger(__name__)


def _resolve(path: Union[str, Path], assets_dir: Union[str, Path, None]) -> Path:
    p = Path(path)
    if assets_dir is not None and not p.is_absolute():
        p = Path(assets_dir) / p
    return p


def load_signed_txn_from_file(
    path: Union[str, Path],
    assets_dir: Union[str, Path, None] = None,
) -> Optional[bytes]:
    """
    Read raw signed transaction bytes.

    Args:
        path: File name; relative names resolve against ``assets_dir``
        assets_dir: Base directory for relative names

    Returns:
        File contents, or None if there is no such file
    """
    p = _resolve(path, assets_dir)
    if not p.is_file():
        logger.debug("signed_txn_file_missing", path=str(p))
        return None
    return p.read_bytes()


def write_signed_txn_to_file(
    path: Union[str, Path],
    blob: bytes,
    assets_dir: Union[str, Path, None] = None,
) -> Path:
    """Write raw signed transaction bytes, creating parent directories."""
    p = _resolve(path, assets_dir)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(blob)
    logger.info("signed_txn_written", path=str(p), size=len(blob))
    return p
