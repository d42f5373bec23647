"""Unit tests for workflow models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from pdf_rule_checker.workflow.models import (
    ResultItem,
    ResultStatus,
    SelectedFile,
    Submission,
    WorkflowState,
    WorkflowStatus,
)


class TestSubmission:
    """Tests for Submission completeness."""

    def test_default_has_three_blank_rules(self):
        submission = Submission()

        assert submission.rules == ["", "", ""]
        assert submission.selected_file is None
        assert submission.is_complete is False

    def test_defaults_are_not_shared(self):
        first, second = Submission(), Submission()
        first.rules[0] = "changed"

        assert second.rules[0] == ""

    def test_complete_with_file_and_rules(self):
        submission = Submission(
            selected_file=SelectedFile(name="a.pdf", content=b"%PDF"),
            rules=["A", "B", "C"],
        )

        assert submission.is_complete is True
        assert submission.file_name == "a.pdf"

    def test_whitespace_rule_is_blank(self):
        submission = Submission(
            selected_file=SelectedFile(name="a.pdf"),
            rules=["A", " \t ", "C"],
        )

        assert submission.blank_rule_indices() == [1]
        assert submission.is_complete is False

    @pytest.mark.parametrize("rules", [["A", "B"], ["A", "B", "C", "D"], []])
    def test_wrong_rule_count_rejected(self, rules):
        with pytest.raises(PydanticValidationError):
            Submission(rules=rules)


class TestResultItem:
    """Tests for ResultItem validation."""

    def test_valid_item(self):
        item = ResultItem(
            rule="Has signature block",
            status="pass",
            evidence="Page 4, Line 2",
            reasoning="Signature found",
            confidence=92,
        )

        assert item.status == ResultStatus.PASS
        assert item.has_evidence is True

    def test_sentinel_is_not_evidence(self):
        item = ResultItem(rule="A", status="fail", evidence="No evidence found", confidence=10)

        assert item.has_evidence is False

    @pytest.mark.parametrize("confidence", [-0.1, 100.5])
    def test_confidence_bounds(self, confidence):
        with pytest.raises(PydanticValidationError):
            ResultItem(rule="A", status="pass", confidence=confidence)

    def test_status_must_be_pass_or_fail(self):
        with pytest.raises(PydanticValidationError):
            ResultItem(rule="A", status="PASSED", confidence=50)


class TestWorkflowState:
    def test_default_is_idle(self):
        state = WorkflowState()

        assert state.status == WorkflowStatus.IDLE
        assert state.results == []
        assert state.is_submitting is False

    def test_dump_is_json_compatible(self):
        state = WorkflowState(
            status=WorkflowStatus.READY,
            results=[ResultItem(rule="A", status="pass", confidence=50)],
        )

        dumped = state.model_dump(mode="json")

        assert dumped["status"] == "ready"
        assert dumped["results"][0]["status"] == "pass"
        assert dumped["results"][0]["evidence"] == "No evidence found"
