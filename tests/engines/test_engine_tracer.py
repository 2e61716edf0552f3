"""
Tests for the engine invocation tracer.

Tests cover:
- Fingerprint determinism and sensitivity
- Dataclass canonicalization
- LEASE_ENGINE_TRACE emission
"""

import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from io import StringIO

from lease_engines.tracer import _canonicalize, compute_input_fingerprint, traced_engine
from lease_kernel.logging_config import StructuredFormatter, configure_logging
from tests.conftest import make_lease


@dataclass(frozen=True)
class _Terms:
    payment: Decimal
    months: int


def _capture() -> StringIO:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(handler=handler)
    return stream


class TestFingerprint:
    """Input fingerprints are stable hashes of the selected arguments."""

    def test_deterministic(self):
        args = {"payment": Decimal("1000"), "months": 12}
        fp1 = compute_input_fingerprint(("payment", "months"), args)
        fp2 = compute_input_fingerprint(("payment", "months"), dict(args))
        assert fp1 == fp2
        assert len(fp1) == 16

    def test_sensitive_to_values(self):
        fp1 = compute_input_fingerprint(("payment",), {"payment": Decimal("1000")})
        fp2 = compute_input_fingerprint(("payment",), {"payment": Decimal("1001")})
        assert fp1 != fp2

    def test_missing_field_recorded_as_null(self):
        fp1 = compute_input_fingerprint(("payment",), {})
        fp2 = compute_input_fingerprint(("payment",), {"payment": None})
        assert fp1 == fp2

    def test_dict_key_order_irrelevant(self):
        assert _canonicalize({"b": 1, "a": 2}) == _canonicalize({"a": 2, "b": 1})

    def test_dataclass_canonicalized_by_fields(self):
        assert _canonicalize(_Terms(Decimal("5"), 3)) == "_Terms{months:3,payment:5}"

    def test_contract_fingerprint_tracks_terms(self):
        fp1 = compute_input_fingerprint(("contract",), {"contract": make_lease()})
        fp2 = compute_input_fingerprint(
            ("contract",), {"contract": make_lease(payment_amount=Decimal("1500"))},
        )
        assert fp1 != fp2


class TestTracedEngine:
    """The decorator logs one trace record per call and is otherwise transparent."""

    def test_returns_result_and_preserves_name(self):
        @traced_engine("sample", "2.1", fingerprint_fields=("x",))
        def double(x):
            return x * 2

        assert double(21) == 42
        assert double.__name__ == "double"

    def test_trace_record_fields(self):
        stream = _capture()

        @traced_engine("sample", "2.1", fingerprint_fields=("x", "y"))
        def add(x, y=1):
            return x + y

        add(2, y=3)

        record = json.loads(stream.getvalue().strip().split("\n")[-1])
        assert record["message"] == "LEASE_ENGINE_TRACE"
        assert record["engine_name"] == "sample"
        assert record["engine_version"] == "2.1"
        assert record["input_fingerprint"] == compute_input_fingerprint(
            ("x", "y"), {"x": 2, "y": 3},
        )
        assert record["duration_ms"] >= 0

    def test_positional_and_keyword_fingerprint_match(self):
        stream = _capture()

        @traced_engine("sample", "1.0", fingerprint_fields=("x",))
        def ident(x):
            return x

        ident(7)
        ident(x=7)

        records = [json.loads(line) for line in stream.getvalue().strip().split("\n")]
        assert records[0]["input_fingerprint"] == records[1]["input_fingerprint"]

    def test_no_fingerprint_fields(self):
        stream = _capture()

        @traced_engine("sample", "1.0")
        def noop():
            return None

        noop()

        record = json.loads(stream.getvalue().strip())
        assert record["input_fingerprint"] == ""
