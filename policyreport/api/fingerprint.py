"""
64-bit FNV-1a streaming hash and the identities built on it.

Fields are fed one after another into the same running hash, so the
order of the inputs matters and empty strings leave the state untouched.
"""
from typing import Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .results import PolicyReportResult

FNV64_OFFSET_BASIS = 14695981039346656037
FNV64_PRIME = 1099511628211
_MASK64 = 0xFFFFFFFFFFFFFFFF


def add_string64(h: int, s: str) -> int:
    for byte in s.encode("utf-8"):
        h = ((h ^ byte) * FNV64_PRIME) & _MASK64
    return h


def hash_strings64(parts: Iterable[str], seed: int = FNV64_OFFSET_BASIS) -> int:
    h = seed
    for part in parts:
        h = add_string64(h, part or "")
    return h


def result_fingerprint(result: "PolicyReportResult") -> str:
    """
    Content identity of a single result:
      primary resource name, primary resource uid, policy, rule,
      result, category, message
    Timestamp, severity, scored and properties are left out so a re-run of
    the same check on the same resource keeps its identity.
    """
    res = result.get_resource()
    name: Optional[str] = res.name if res is not None else ""
    uid: Optional[str] = res.uid if res is not None else ""
    status = result.result
    h = hash_strings64([
        name or "",
        uid or "",
        result.policy,
        result.rule or "",
        str(getattr(status, "value", status) or ""),
        result.category or "",
        result.message or "",
    ])
    return str(h)


def report_id(name: str, namespace: Optional[str] = None) -> str:
    return str(hash_strings64([name or "", namespace or ""]))
