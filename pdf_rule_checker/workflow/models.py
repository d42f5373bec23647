"""Pydantic models for the submission workflow state."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from pdf_rule_checker.core.config import (
    CONFIDENCE_MAX,
    CONFIDENCE_MIN,
    DEFAULT_CONTENT_TYPE,
    NO_EVIDENCE_SENTINEL,
    RULE_SLOTS,
)


class ResultStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"


class WorkflowStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    READY = "ready"
    FAILED = "failed"


class ResultItem(BaseModel):
    """Verdict for a single rule as returned by the verification service."""

    rule: str = Field(..., description="Echo of the submitted rule text")
    status: ResultStatus = Field(..., description="pass or fail")
    evidence: str = Field(
        NO_EVIDENCE_SENTINEL,
        description="Located excerpt/citation, or the no-evidence sentinel",
    )
    reasoning: str = Field("", description="Free-text explanation")
    confidence: float = Field(
        ...,
        ge=CONFIDENCE_MIN,
        le=CONFIDENCE_MAX,
        description="Certainty of the verdict in percent",
    )

    model_config = {"extra": "ignore"}

    @field_validator("evidence", "reasoning", mode="before")
    @classmethod
    def none_to_default(cls, value, info):
        if value is None:
            return NO_EVIDENCE_SENTINEL if info.field_name == "evidence" else ""
        return value

    @property
    def has_evidence(self) -> bool:
        evidence = self.evidence.strip()
        return bool(evidence) and evidence != NO_EVIDENCE_SENTINEL


class SelectedFile(BaseModel):
    """A document picked by the user. Content never leaves via snapshots."""

    name: str
    content: bytes = Field(default=b"", repr=False, exclude=True)
    content_type: str = DEFAULT_CONTENT_TYPE
    # Uploader widget id; tells apart two uploads with equal name and size
    source_id: Optional[str] = Field(default=None, exclude=True)

    @property
    def size(self) -> int:
        return len(self.content)


def _blank_rules() -> List[str]:
    return [""] * RULE_SLOTS


class Submission(BaseModel):
    """User input held by the workflow: one optional file and the rule slots."""

    selected_file: Optional[SelectedFile] = None
    rules: List[str] = Field(default_factory=_blank_rules)

    @field_validator("rules")
    @classmethod
    def validate_rule_slots(cls, rules: List[str]) -> List[str]:
        if len(rules) != RULE_SLOTS:
            raise ValueError(f"Exactly {RULE_SLOTS} rules are required, got {len(rules)}")
        return rules

    @property
    def file_name(self) -> str:
        return self.selected_file.name if self.selected_file else ""

    def blank_rule_indices(self) -> List[int]:
        return [i for i, rule in enumerate(self.rules) if not rule.strip()]

    @property
    def is_complete(self) -> bool:
        return self.selected_file is not None and not self.blank_rule_indices()


class WorkflowState(BaseModel):
    """Display state; results survive status changes until explicitly cleared."""

    status: WorkflowStatus = WorkflowStatus.IDLE
    results: List[ResultItem] = Field(default_factory=list)
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def is_submitting(self) -> bool:
        return self.status == WorkflowStatus.SUBMITTING
