from __future__ import annotations

from policyreport.api.fingerprint import (
    FNV64_OFFSET_BASIS,
    add_string64,
    hash_strings64,
    report_id,
    result_fingerprint,
)
from policyreport.api.results import ObjectReference, PolicyReportResult

# reference FNV-1a 64 vectors
FNV_A = 0xAF63DC4C8601EC8C
FNV_FOOBAR = 0x85944171F73967E8


def test_known_vectors() -> None:
    assert add_string64(FNV64_OFFSET_BASIS, "") == FNV64_OFFSET_BASIS
    assert add_string64(FNV64_OFFSET_BASIS, "a") == FNV_A
    assert add_string64(FNV64_OFFSET_BASIS, "foobar") == FNV_FOOBAR


def test_streaming_is_order_sensitive() -> None:
    assert hash_strings64(["foo", "bar"]) == FNV_FOOBAR
    assert hash_strings64(["bar", "foo"]) != FNV_FOOBAR


def test_fingerprint_without_resource_uses_only_result_fields() -> None:
    r = PolicyReportResult(policy="a")

    assert result_fingerprint(r) == str(FNV_A)


def test_fingerprint_feeds_resource_name_and_uid_first() -> None:
    r = PolicyReportResult(
        policy="require-labels",
        rule="check-team",
        result="fail",
        category="Best Practices",
        message="label team is required",
        resources=[ObjectReference(kind="Pod", name="nginx", uid="1234")],
    )

    expected = hash_strings64(
        ["nginx", "1234", "require-labels", "check-team", "fail", "Best Practices", "label team is required"]
    )
    assert result_fingerprint(r) == str(expected)


def test_report_id() -> None:
    assert report_id("foo", "bar") == str(FNV_FOOBAR)
    assert report_id("a") == str(FNV_A)
