"""
tests/test_receipts.py - Receipt Foundation Tests

Validates dual hashing, receipt emission, ledger persistence and merkle roots.
"""

import json

import numpy as np

from receipts import (
    DEFAULT_TENANT,
    dual_hash,
    emit_receipt,
    merkle,
    to_jsonable,
    write_ledger_jsonl,
)


class TestDualHash:
    """Test dual_hash."""

    def test_format(self):
        """SHA256 and BLAKE3 hex digests joined by a colon."""
        digest = dual_hash("universe")
        sha, b3 = digest.split(":")
        assert len(sha) == 64 and len(b3) == 64, f"Bad digest lengths: {digest}"

    def test_str_and_bytes_agree(self):
        """Strings are hashed as their UTF-8 bytes."""
        assert dual_hash("abc") == dual_hash(b"abc")

    def test_deterministic(self):
        """Same input, same hash."""
        assert dual_hash("x") == dual_hash("x")
        assert dual_hash("x") != dual_hash("y")


class TestToJsonable:
    """Test to_jsonable."""

    def test_arrays_become_float_lists(self):
        """numpy arrays become plain lists of floats."""
        result = to_jsonable({"state": np.array([1, 2]), "n": np.int64(3)})
        assert result == {"state": [1.0, 2.0], "n": 3}
        assert type(result["n"]) is int
        json.dumps(result)

    def test_nested(self):
        """Nested containers are converted recursively."""
        result = to_jsonable({"a": [np.float64(0.5), (np.array([3.0]),)]})
        assert result == {"a": [0.5, [[3.0]]]}


class TestEmitReceipt:
    """Test emit_receipt."""

    def test_fields(self):
        """Receipts carry type, timestamp, tenant and payload hash."""
        receipt = emit_receipt("universe_run", {"steps": 10})
        assert receipt["receipt_type"] == "universe_run"
        assert receipt["tenant_id"] == DEFAULT_TENANT
        assert receipt["steps"] == 10
        assert "ts" in receipt and ":" in receipt["payload_hash"]

    def test_tenant_override(self):
        """An explicit tenant is kept."""
        receipt = emit_receipt("universe_run", {"tenant_id": "lab"})
        assert receipt["tenant_id"] == "lab"

    def test_payload_hash_ignores_timestamp(self):
        """Equal payloads hash equally."""
        a = emit_receipt("x", {"v": np.array([0.1, 0.2])})
        b = emit_receipt("x", {"v": [0.1, 0.2]})
        assert a["payload_hash"] == b["payload_hash"]

    def test_input_not_mutated(self):
        """The caller's payload dict is left alone."""
        data = {"v": 1}
        emit_receipt("x", data)
        assert data == {"v": 1}


class TestLedger:
    """Test write_ledger_jsonl and merkle."""

    def test_write_and_append(self, tmp_path):
        """Each receipt becomes one JSON line; later writes append."""
        path = tmp_path / "receipts.jsonl"
        ledger = [emit_receipt("a", {"i": i}) for i in range(3)]
        assert write_ledger_jsonl(ledger, str(path)) == 3
        write_ledger_jsonl(ledger[:1], str(path))
        lines = path.read_text().strip().split("\n")
        assert len(lines) == 4
        assert json.loads(lines[0])["receipt_type"] == "a"

    def test_merkle_empty(self):
        """Empty input has a fixed root."""
        assert merkle([]) == dual_hash(b"empty")

    def test_merkle_order_sensitive(self):
        """Reordering items changes the root."""
        assert merkle([1.0, 2.0, 3.0]) != merkle([3.0, 2.0, 1.0])

    def test_merkle_single(self):
        """A single item's root is its own hash."""
        assert merkle([{"a": 1}]) == dual_hash(json.dumps({"a": 1}, sort_keys=True))
