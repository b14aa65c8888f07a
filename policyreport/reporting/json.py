import json
from typing import Any, Dict, List

from ..api.reports import Report
from ..api.results import PolicyReportResult


def result_payload(r: PolicyReportResult) -> Dict[str, Any]:
    payload = r.model_dump(mode="json", by_alias=True, exclude_none=True)
    payload["id"] = r.get_id()
    payload["priority"] = str(r.priority)
    return payload


def report_payload(report: Report) -> Dict[str, Any]:
    return {
        "id": report.get_id(),
        "kind": report.kind,
        "name": report.get_name(),
        "namespace": report.get_namespace() or None,
        "source": report.get_source(),
        "kinds": report.get_kinds(),
        "severities": report.get_severities(),
        "summary": report.get_summary().to_map(),
        "results": [result_payload(r) for r in report.get_results()],
    }


def emit(reports: List[Report]) -> str:
    return json.dumps([report_payload(r) for r in reports], indent=2)
