from enum import IntEnum
from typing import Any, Optional

from pydantic_core import core_schema


class Priority(IntEnum):
    """Internal weighting of a policy result, used for sorting and filtering."""

    DEFAULT = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    CRITICAL = 4
    ERROR = 5

    @property
    def label(self) -> str:
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label

    def __format__(self, spec: str) -> str:
        return format(self.label, spec)

    @classmethod
    def parse(cls, value: Optional[str]) -> "Priority":
        # unknown labels carry no information, they are not an error
        return _BY_LABEL.get(value or "", cls.DEFAULT)

    @classmethod
    def _coerce(cls, value: Any) -> "Priority":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        return cls(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        # dumped as the label, never the ordinal
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda p: p.label, when_used="always"
            ),
        )


_LABELS = {
    Priority.DEFAULT: "",
    Priority.DEBUG: "debug",
    Priority.INFO: "info",
    Priority.WARNING: "warning",
    Priority.CRITICAL: "critical",
    Priority.ERROR: "error",
}

_BY_LABEL = {label: p for p, label in _LABELS.items() if label}

# high is escalated to the ERROR tier on purpose
SEVERITY_PRIORITY = {
    "critical": Priority.CRITICAL,
    "high": Priority.ERROR,
    "medium": Priority.WARNING,
    "low": Priority.INFO,
    "info": Priority.INFO,
}


def string_to_priority(value: Optional[str]) -> Priority:
    return Priority.parse(value)


def priority_from_severity(severity: Optional[str]) -> Priority:
    if not severity:
        return Priority.DEBUG
    return SEVERITY_PRIORITY.get(str(getattr(severity, "value", severity)), Priority.DEBUG)
