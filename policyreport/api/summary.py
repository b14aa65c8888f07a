from typing import Any, Dict, Iterable

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import PydanticSerializationError

from .results import PolicyReportResult, PolicyResult


class SummarySerializationError(ValueError):
    """Raised when a summary cannot be rendered as a plain mapping."""


class PolicyReportSummary(BaseModel):
    """Status count summary of a set of policy results."""

    model_config = ConfigDict(populate_by_name=True)

    # policies whose requirements were met
    pass_: int = Field(default=0, ge=0, alias="pass")
    # policies whose requirements were not met
    fail: int = Field(default=0, ge=0)
    # non-scored policies whose requirements were not met
    warn: int = Field(default=0, ge=0)
    # policies that could not be evaluated
    error: int = Field(default=0, ge=0)
    # policies not selected for evaluation
    skip: int = Field(default=0, ge=0)

    def total(self) -> int:
        return self.pass_ + self.fail + self.warn + self.error + self.skip

    def to_map(self) -> Dict[str, Any]:
        try:
            return self.model_dump(mode="json", by_alias=True)
        except PydanticSerializationError as e:
            raise SummarySerializationError(f"cannot serialize summary: {e}") from e


_FIELD_BY_STATUS = {
    PolicyResult.PASS: "pass_",
    PolicyResult.FAIL: "fail",
    PolicyResult.WARN: "warn",
    PolicyResult.ERROR: "error",
    PolicyResult.SKIP: "skip",
}


def summarize(results: Iterable[PolicyReportResult]) -> PolicyReportSummary:
    counts = {name: 0 for name in _FIELD_BY_STATUS.values()}
    for r in results:
        name = _FIELD_BY_STATUS.get(r.result)
        # unknown or empty statuses are not counted
        if name is not None:
            counts[name] += 1
    return PolicyReportSummary(**counts)
