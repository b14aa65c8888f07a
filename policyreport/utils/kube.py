import logging
from typing import Any, Dict, List

from kubernetes import client, config
from kubernetes.client import ApiException
from pydantic import ValidationError

from ..api.reports import GROUP, VERSION, Report, ReportParseError, parse_report

logger = logging.getLogger(__name__)

POLICY_REPORTS = "policyreports"
CLUSTER_POLICY_REPORTS = "clusterpolicyreports"

PAGE_SIZE = 200


def load_clients() -> Dict[str, Any]:
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()
    return {
        "custom": client.CustomObjectsApi(),
    }


def _list_objects(custom, plural: str) -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    cont = None
    while True:
        try:
            resp = custom.list_cluster_custom_object(
                GROUP, VERSION, plural, limit=PAGE_SIZE, _continue=cont
            )
        except ApiException as e:
            if e.status in (401, 403):
                logger.warning("no permission to list %s.%s, skipping", plural, GROUP)
                return []
            raise
        items.extend(resp.get("items") or [])
        cont = (resp.get("metadata") or {}).get("continue")
        if not cont:
            break
    logger.debug("listed %d %s", len(items), plural)
    return items


def _to_reports(items: List[Dict[str, Any]], kind: str) -> List[Report]:
    reports: List[Report] = []
    for obj in items:
        # list responses leave kind off the items
        obj = dict(obj, kind=obj.get("kind") or kind)
        try:
            reports.append(parse_report(obj))
        except (ReportParseError, ValidationError) as e:
            logger.warning("skipping object: %s", e)
    return reports


def list_policy_reports(custom) -> List[Report]:
    return _to_reports(_list_objects(custom, POLICY_REPORTS), "PolicyReport")


def list_cluster_policy_reports(custom) -> List[Report]:
    return _to_reports(_list_objects(custom, CLUSTER_POLICY_REPORTS), "ClusterPolicyReport")
