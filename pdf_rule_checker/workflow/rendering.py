"""
View-model helpers for the results table.

Turns ResultItem lists into display rows so that the UI layer holds no
formatting rules of its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from pdf_rule_checker.core.config import EMPTY_RESULTS_PLACEHOLDER, NO_EVIDENCE_SENTINEL
from pdf_rule_checker.workflow.models import ResultItem, ResultStatus

COLUMNS = ("Rule", "Status", "Evidence", "Reasoning", "Confidence")

POSITIVE = "positive"
NEGATIVE = "negative"


@dataclass(frozen=True)
class ResultRow:
    """One rendered table row."""

    rule: str
    status_label: str
    status_tag: str
    evidence: str
    evidence_located: bool
    reasoning: str
    confidence: str
    placeholder: bool = False


def status_tag(status: ResultStatus) -> str:
    return POSITIVE if status == ResultStatus.PASS else NEGATIVE


def format_confidence(confidence: float) -> str:
    """Format a 0-100 confidence as an integer percentage, rounding halves up, e.g. '92%'."""
    rounded = Decimal(str(confidence)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{int(rounded)}%"


def to_row(item: ResultItem) -> ResultRow:
    located = item.has_evidence
    return ResultRow(
        rule=item.rule,
        status_label="Pass" if item.status == ResultStatus.PASS else "Fail",
        status_tag=status_tag(item.status),
        evidence=item.evidence if located else NO_EVIDENCE_SENTINEL,
        evidence_located=located,
        reasoning=item.reasoning,
        confidence=format_confidence(item.confidence),
    )


def placeholder_row() -> ResultRow:
    return ResultRow(
        rule=EMPTY_RESULTS_PLACEHOLDER,
        status_label="",
        status_tag="",
        evidence="",
        evidence_located=False,
        reasoning="",
        confidence="",
        placeholder=True,
    )


def build_result_rows(results: Sequence[ResultItem]) -> List[ResultRow]:
    """
    Build table rows in submitted order.

    An empty result set yields a single placeholder row, never an empty body.
    """
    if not results:
        return [placeholder_row()]
    return [to_row(item) for item in results]


def results_summary(results: Sequence[ResultItem]) -> str:
    count = len(results)
    return f"{count} result" if count == 1 else f"{count} results"
