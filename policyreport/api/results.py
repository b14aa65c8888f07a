"""Result entity of the wgpolicyk8s.io PolicyReport API and its vocabularies."""

import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from .fingerprint import result_fingerprint
from .priority import Priority, priority_from_severity

# properties key an upstream collector can use to assert its own result id
RESULT_ID_KEY = "resultID"

_ID_LOCK = threading.Lock()


class PolicyResult(str, Enum):
    """Outcome of a single policy rule evaluation."""

    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"
    ERROR = "error"
    SKIP = "skip"


class PolicySeverity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


def _known(enum: Type[Enum], value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, Enum):
        try:
            return enum(value)
        except ValueError:
            return value
    return value


class ObjectReference(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: Optional[str] = None
    namespace: Optional[str] = None
    name: Optional[str] = None
    uid: Optional[str] = None
    api_version: Optional[str] = Field(default=None, alias="apiVersion")
    resource_version: Optional[str] = Field(default=None, alias="resourceVersion")
    field_path: Optional[str] = Field(default=None, alias="fieldPath")


class LabelSelectorRequirement(BaseModel):
    key: str
    operator: str
    values: List[str] = Field(default_factory=list)


class LabelSelector(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    match_labels: Dict[str, str] = Field(default_factory=dict, alias="matchLabels")
    match_expressions: List[LabelSelectorRequirement] = Field(default_factory=list, alias="matchExpressions")


class Timestamp(BaseModel):
    seconds: int = 0
    nanos: int = 0

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.seconds + self.nanos / 1e9, tz=timezone.utc)


class PolicyReportResult(BaseModel):
    """
    Outcome of one policy rule evaluated against zero or more resources.

    A result applies to its explicit ``resources``, to the resources matched
    by ``resource_selector``, or, when neither is set, to the scope of the
    report holding it. The first resource is the primary subject.

    ``priority`` is an internal weighting. When it is not supplied it is
    derived from ``severity``. It is never part of the dumped shape, and
    neither is the identity returned by :meth:`get_id`.
    """

    model_config = ConfigDict(populate_by_name=True)

    source: Optional[str] = None
    policy: str
    rule: Optional[str] = None
    resources: List[ObjectReference] = Field(default_factory=list)
    resource_selector: Optional[LabelSelector] = Field(default=None, alias="resourceSelector")
    message: Optional[str] = None
    result: Optional[Union[PolicyResult, str]] = None
    scored: bool = False
    properties: Dict[str, str] = Field(default_factory=dict)
    timestamp: Optional[Timestamp] = None
    category: Optional[str] = None
    severity: Optional[Union[PolicySeverity, str]] = None
    priority: Optional[Priority] = Field(default=None, exclude=True)

    _id: Optional[str] = PrivateAttr(default=None)

    @field_validator("result", mode="before")
    @classmethod
    def _result_value(cls, v: Any) -> Any:
        return _known(PolicyResult, v)

    @field_validator("severity", mode="before")
    @classmethod
    def _severity_value(cls, v: Any) -> Any:
        return _known(PolicySeverity, v)

    @model_validator(mode="after")
    def _derive_priority(self) -> "PolicyReportResult":
        if self.priority is None:
            self.priority = priority_from_severity(self.severity)
        return self

    def get_resource(self) -> Optional[ObjectReference]:
        if not self.resources:
            return None
        return self.resources[0]

    def has_resource(self) -> bool:
        return len(self.resources) > 0

    def get_id(self) -> str:
        if self._id:
            return self._id
        with _ID_LOCK:
            if not self._id:
                override = self.properties.get(RESULT_ID_KEY)
                self._id = override if override else result_fingerprint(self)
        return self._id

    @property
    def id(self) -> str:
        return self.get_id()
