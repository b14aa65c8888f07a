from __future__ import annotations

from typing import Any

import pytest


def make_result(policy: str, result: str, *, kind: str | None = "Pod", name: str = "nginx",
                severity: str | None = None, source: str = "kyverno") -> dict[str, Any]:
    payload: dict[str, Any] = {
        "source": source,
        "policy": policy,
        "rule": f"{policy}-rule",
        "result": result,
        "message": f"{policy} evaluated to {result}",
    }
    if kind is not None:
        payload["resources"] = [{"apiVersion": "v1", "kind": kind, "namespace": "default", "name": name, "uid": f"uid-{name}"}]
    if severity is not None:
        payload["severity"] = severity
    return payload


@pytest.fixture
def namespaced_report() -> dict[str, Any]:
    return {
        "apiVersion": "wgpolicyk8s.io/v1alpha2",
        "kind": "PolicyReport",
        "metadata": {"name": "polr-ns-default", "namespace": "default", "creationTimestamp": "2024-01-01T00:00:00Z"},
        "summary": {"pass": 99, "fail": 0},
        "results": [
            make_result("require-labels", "pass", severity="medium"),
            make_result("require-labels", "fail", kind="Deployment", name="web", severity="high"),
            make_result("disallow-latest-tag", "warn", severity="medium"),
            make_result("check-namespace", "skip", kind=None),
        ],
    }


@pytest.fixture
def cluster_report() -> dict[str, Any]:
    return {
        "apiVersion": "wgpolicyk8s.io/v1alpha2",
        "kind": "ClusterPolicyReport",
        "metadata": {"name": "cpol-require-ns-labels"},
        "scope": {"apiVersion": "v1", "kind": "Namespace", "name": "team-a"},
        "results": [
            make_result("require-ns-labels", "error", kind="Namespace", name="team-a", severity="critical",
                        source="kube-bench"),
        ],
    }
