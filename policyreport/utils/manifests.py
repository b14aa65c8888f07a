import json
import logging
from pathlib import Path
from typing import Any, Iterator, List, Union

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..api.reports import REPORT_KINDS, Report, parse_report

logger = logging.getLogger(__name__)

MANIFEST_SUFFIXES = (".yaml", ".yml", ".json")


class ManifestError(RuntimeError):
    """Raised when a manifest file cannot be read or parsed."""


def _iter_files(path: Path) -> Iterator[Path]:
    if path.is_file():
        yield path
        return
    for p in sorted(path.rglob("*")):
        if p.is_file() and p.suffix.lower() in MANIFEST_SUFFIXES:
            yield p


def _load_documents(path: Path) -> List[Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"cannot read {path}: {e}") from e
    try:
        if path.suffix.lower() == ".json":
            return [json.loads(text)]
        return [d for d in YAML(typ="safe").load_all(text) if d is not None]
    except (ValueError, YAMLError) as e:
        raise ManifestError(f"cannot parse {path}: {e}") from e


def _flatten(doc: Any) -> Iterator[Any]:
    if isinstance(doc, dict) and doc.get("kind") == "List":
        for item in doc.get("items") or []:
            yield from _flatten(item)
    elif isinstance(doc, list):
        for item in doc:
            yield from _flatten(item)
    else:
        yield doc


def load_reports(path: Union[str, Path]) -> List[Report]:
    """Load every PolicyReport/ClusterPolicyReport found under ``path``."""
    root = Path(path)
    if not root.exists():
        raise ManifestError(f"no such file or directory: {root}")
    reports: List[Report] = []
    for f in _iter_files(root):
        for doc in _flatten(_load_documents(f)):
            if not isinstance(doc, dict) or doc.get("kind") not in REPORT_KINDS:
                continue
            try:
                reports.append(parse_report(doc))
            except ValidationError as e:
                logger.warning("%s: invalid %s: %s", f, doc.get("kind"), e)
        logger.debug("loaded %s", f)
    return reports
