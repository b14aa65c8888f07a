import argparse, logging, sys
from typing import List, Optional, Sequence

from kubernetes.client import ApiException

from .api.priority import Priority
from .api.reports import Report
from .reporting import json as json_report, text as text_report
from .utils.kube import load_clients, list_policy_reports, list_cluster_policy_reports
from .utils.manifests import ManifestError, load_reports

logger = logging.getLogger(__name__)

PRIORITY_CHOICES = [p.label for p in Priority if p.label]


def run_cluster_read(args) -> List[Report]:
    clients = load_clients()
    custom = clients["custom"]
    reports: List[Report] = list_policy_reports(custom)
    if not args.skip_cluster_reports:
        reports.extend(list_cluster_policy_reports(custom))
    return reports


def filter_reports(reports: List[Report], min_priority: Priority = Priority.DEFAULT,
                   sources: Optional[Sequence[str]] = None) -> List[Report]:
    """Keep results at or above ``min_priority`` and, if given, from ``sources`` only."""
    wanted = set(sources or [])
    out: List[Report] = []
    for rep in reports:
        kept = [
            r for r in rep.get_results()
            if r.priority >= min_priority and (not wanted or (r.source or "") in wanted)
        ]
        if not kept and rep.get_results():
            continue
        out.append(rep.model_copy(update={"results": kept}))
    return out


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="policyreport - read and summarize PolicyReport results")
    ap.add_argument("--report", choices=["json","text"], default="json")
    ap.add_argument("--manifests", help="File or directory of YAML/JSON report manifests to read instead of the cluster")
    ap.add_argument("--min-priority", choices=PRIORITY_CHOICES, help="Only keep results at or above this priority")
    ap.add_argument("--source", action="append", default=[], help="Only keep results from this engine (repeatable)")
    ap.add_argument("--skip-cluster-reports", action="store_true", help="Skip ClusterPolicyReports")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG","INFO","WARNING","ERROR"])
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.manifests:
            reports = load_reports(args.manifests)
            if args.skip_cluster_reports:
                reports = [r for r in reports if r.kind != "ClusterPolicyReport"]
        else:
            reports = run_cluster_read(args)
    except (ManifestError, ApiException) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    reports = filter_reports(reports, Priority.parse(args.min_priority), args.source)
    logger.info("read %d reports", len(reports))

    if args.report == "json":
        print(json_report.emit(reports))
    else:
        print(text_report.emit(reports))

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
