"""
PolicyReport and ClusterPolicyReport custom resources.

Both kinds are independent models that satisfy :class:`ReportInterface`,
which is all that consumers of reports should rely on.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional, Protocol, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from .fingerprint import report_id
from .results import LabelSelector, ObjectReference, PolicyReportResult
from .summary import PolicyReportSummary, summarize

GROUP = "wgpolicyk8s.io"
VERSION = "v1alpha2"
API_VERSION = f"{GROUP}/{VERSION}"


class ReportParseError(ValueError):
    """Raised when a document is not a policy report."""


@runtime_checkable
class ReportInterface(Protocol):
    def get_id(self) -> str: ...

    def get_name(self) -> str: ...

    def get_namespace(self) -> str: ...

    def get_scope(self) -> Optional[ObjectReference]: ...

    def get_results(self) -> List[PolicyReportResult]: ...

    def get_summary(self) -> PolicyReportSummary: ...

    def get_source(self) -> str: ...

    def get_kinds(self) -> List[str]: ...

    def get_severities(self) -> List[str]: ...


class ObjectMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    namespace: Optional[str] = None
    uid: Optional[str] = None
    resource_version: Optional[str] = Field(default=None, alias="resourceVersion")
    creation_timestamp: Optional[datetime] = Field(default=None, alias="creationTimestamp")
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


def _source(results: List[PolicyReportResult]) -> str:
    if not results:
        return ""
    return results[0].source or ""


def _kinds(results: List[PolicyReportResult]) -> List[str]:
    kinds: List[str] = []
    for r in results:
        res = r.get_resource()
        if res is None or not res.kind or res.kind in kinds:
            continue
        kinds.append(res.kind)
    return kinds


def _severities(results: List[PolicyReportResult]) -> List[str]:
    severities: List[str] = []
    for r in results:
        if not r.severity:
            continue
        sev = str(getattr(r.severity, "value", r.severity))
        if sev not in severities:
            severities.append(sev)
    return severities


class PolicyReport(BaseModel):
    """Namespaced report of policy results."""

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: Literal["PolicyReport"] = "PolicyReport"
    metadata: ObjectMeta
    scope: Optional[ObjectReference] = None
    scope_selector: Optional[LabelSelector] = Field(default=None, alias="scopeSelector")
    summary: PolicyReportSummary = Field(default_factory=PolicyReportSummary)
    results: List[PolicyReportResult] = Field(default_factory=list)

    def get_id(self) -> str:
        return report_id(self.metadata.name, self.get_namespace())

    def get_name(self) -> str:
        return self.metadata.name

    def get_namespace(self) -> str:
        return self.metadata.namespace or ""

    def get_scope(self) -> Optional[ObjectReference]:
        return self.scope

    def get_results(self) -> List[PolicyReportResult]:
        return self.results

    def get_summary(self) -> PolicyReportSummary:
        return summarize(self.results)

    def get_source(self) -> str:
        return _source(self.results)

    def get_kinds(self) -> List[str]:
        return _kinds(self.results)

    def get_severities(self) -> List[str]:
        return _severities(self.results)


class ClusterPolicyReport(BaseModel):
    """Cluster scoped report of policy results."""

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: Literal["ClusterPolicyReport"] = "ClusterPolicyReport"
    metadata: ObjectMeta
    scope: Optional[ObjectReference] = None
    scope_selector: Optional[LabelSelector] = Field(default=None, alias="scopeSelector")
    summary: PolicyReportSummary = Field(default_factory=PolicyReportSummary)
    results: List[PolicyReportResult] = Field(default_factory=list)

    def get_id(self) -> str:
        return report_id(self.metadata.name)

    def get_name(self) -> str:
        return self.metadata.name

    def get_namespace(self) -> str:
        return ""

    def get_scope(self) -> Optional[ObjectReference]:
        return self.scope

    def get_results(self) -> List[PolicyReportResult]:
        return self.results

    def get_summary(self) -> PolicyReportSummary:
        return summarize(self.results)

    def get_source(self) -> str:
        return _source(self.results)

    def get_kinds(self) -> List[str]:
        return _kinds(self.results)

    def get_severities(self) -> List[str]:
        return _severities(self.results)


Report = Union[PolicyReport, ClusterPolicyReport]

REPORT_KINDS = {
    "PolicyReport": PolicyReport,
    "ClusterPolicyReport": ClusterPolicyReport,
}


def parse_report(obj: Mapping[str, Any]) -> Report:
    kind = obj.get("kind") if isinstance(obj, Mapping) else None
    model = REPORT_KINDS.get(kind)
    if model is None:
        raise ReportParseError(f"not a policy report: kind={kind!r}")
    return model.model_validate(obj)
