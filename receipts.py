"""
receipts.py - Receipt Foundation Module

Canonical emit_receipt() for the living universe engine. ALL modules import from here.
Single source of truth for receipt emission, ledger persistence and the shared StopRule.

Never single hash. Always dual_hash (SHA256:BLAKE3).
"""

import hashlib
import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Union

import blake3
import numpy as np

__all__ = [
    "dual_hash",
    "emit_receipt",
    "write_receipt_jsonl",
    "write_ledger_jsonl",
    "merkle",
    "to_jsonable",
    "StopRule",
    "DEFAULT_TENANT",
]

# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_TENANT = "universe"


# =============================================================================
# JSON NORMALIZATION
# =============================================================================

def to_jsonable(value: Any) -> Any:
    """
    Convert numpy containers and scalars into plain JSON types.

    State vectors travel through receipts as lists of floats. Dicts, lists and
    tuples are converted recursively; anything else is returned unchanged.
    """
    if isinstance(value, np.ndarray):
        return [float(x) for x in value.tolist()]
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


# =============================================================================
# CORE FUNCTION 1: dual_hash
# =============================================================================

def dual_hash(data: Union[bytes, str]) -> str:
    """
    SHA256:BLAKE3 - ALWAYS use this, never single hash.

    Args:
        data: Bytes or string to hash

    Returns:
        str: "sha256_hex:blake3_hex" format
    """
    if isinstance(data, str):
        data = data.encode()
    sha = hashlib.sha256(data).hexdigest()
    b3 = blake3.blake3(data).hexdigest()
    return f"{sha}:{b3}"


# =============================================================================
# CORE FUNCTION 2: emit_receipt
# =============================================================================

def emit_receipt(receipt_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build a receipt for an engine event.

    Args:
        receipt_type: Type identifier (universe_genesis, retro_influence, ...)
        data: Receipt payload. tenant_id defaults to DEFAULT_TENANT.
            numpy arrays and scalars are normalized with to_jsonable().

    Returns:
        dict: Complete receipt with ts, tenant_id, payload_hash, and data fields
    """
    payload = to_jsonable(data)
    payload.setdefault("tenant_id", DEFAULT_TENANT)
    return {
        "receipt_type": receipt_type,
        "ts": datetime.now(timezone.utc).isoformat(),
        "payload_hash": dual_hash(json.dumps(payload, sort_keys=True)),
        **payload
    }


# =============================================================================
# CORE FUNCTION 3: write_receipt_jsonl / write_ledger_jsonl
# =============================================================================

def write_receipt_jsonl(receipt: Dict[str, Any], fh) -> None:
    """
    Append receipt as single JSON line to file handle.

    Args:
        receipt: Receipt dict to write
        fh: File handle (must be open for writing)
    """
    line = json.dumps(receipt, separators=(",", ":"))
    fh.write(line + "\n")


def write_ledger_jsonl(ledger: Iterable[Dict[str, Any]], path: str) -> int:
    """
    Append a whole receipt ledger to a JSONL file.

    Returns:
        int: Number of receipts written
    """
    count = 0
    with open(path, "a", encoding="utf-8") as fh:
        for receipt in ledger:
            write_receipt_jsonl(receipt, fh)
            count += 1
    return count


# =============================================================================
# CORE FUNCTION 4: merkle
# =============================================================================

def merkle(items: List[Any]) -> str:
    """
    Compute Merkle root of items.

    Used to fingerprint ensemble member receipts and history timelines.

    Args:
        items: List of items to merkle (will be JSON serialized)

    Returns:
        str: Merkle root hash in dual_hash format
    """
    if not items:
        return dual_hash(b"empty")
    hashes = [dual_hash(json.dumps(to_jsonable(i), sort_keys=True)) for i in items]
    while len(hashes) > 1:
        if len(hashes) % 2:
            hashes.append(hashes[-1])
        hashes = [dual_hash(hashes[i] + hashes[i + 1])
                  for i in range(0, len(hashes), 2)]
    return hashes[0]


# =============================================================================
# STOPRULE EXCEPTION
# =============================================================================

class StopRule(Exception):
    """Raised when stoprule triggers. Never catch silently."""
    pass
