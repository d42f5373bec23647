"""Exception hierarchy for the submission workflow.

Every failure the workflow can record inherits from WorkflowError and carries
a stable error code, a category, and a user-facing message. RuleIndexError is
the exception: it signals a programming error and is never recorded in state.
"""

from enum import Enum
from typing import Any, Optional

from pdf_rule_checker.core.config import (
    INCOMPLETE_RULES_MESSAGE,
    MALFORMED_RESULTS_MESSAGE,
    MISSING_FILE_MESSAGE,
    NO_RESULTS_MESSAGE,
    RULE_SLOTS,
    SUBMISSION_IN_PROGRESS_MESSAGE,
)


class ErrorCategory(str, Enum):
    """Error categories for classification and logging."""

    VALIDATION = "validation"
    TRANSPORT = "transport"
    EXTERNAL_SERVICE = "external_service"
    CONCURRENCY = "concurrency"


class WorkflowError(Exception):
    """Base exception for all recorded workflow failures.

    Attributes:
        message: Human-readable error message shown to the user
        error_code: Application-specific error code
        category: Error category for classification
        details: Additional context (dict)
    """

    error_code = "WORKFLOW_ERROR"
    category = ErrorCategory.VALIDATION

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dict for logging and display.

        Returns:
            Dict containing standardized error information
        """
        return {
            "code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "details": dict(self.details),
        }


class MissingFileError(WorkflowError):
    """No document attached at submission time."""

    error_code = "MISSING_FILE"

    def __init__(self, message: str = MISSING_FILE_MESSAGE):
        super().__init__(message, details={"field": "file"})


class IncompleteRulesError(WorkflowError):
    """One or more rule slots are blank after trimming.

    Args:
        blank_indices: Zero-based positions of the blank rules
    """

    error_code = "INCOMPLETE_RULES"

    def __init__(self, blank_indices: list[int], message: str = INCOMPLETE_RULES_MESSAGE):
        super().__init__(
            message,
            details={"field": "rules", "blank_indices": list(blank_indices)},
        )
        self.blank_indices = list(blank_indices)


class TransportError(WorkflowError):
    """Network, HTTP, or body-decoding failure talking to the service."""

    error_code = "TRANSPORT_ERROR"
    category = ErrorCategory.TRANSPORT

    def __init__(
        self,
        message: str,
        http_status: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        additional_details = details or {}
        if http_status is not None:
            additional_details["http_status"] = http_status
        super().__init__(message, details=additional_details)
        self.http_status = http_status


class MalformedResponseError(WorkflowError):
    """Response decoded but does not carry a usable `results` field."""

    error_code = "MALFORMED_RESPONSE"
    category = ErrorCategory.EXTERNAL_SERVICE

    def __init__(self, message: str = NO_RESULTS_MESSAGE, details: Optional[dict[str, Any]] = None):
        super().__init__(message, details=details)

    @classmethod
    def missing_results(cls) -> "MalformedResponseError":
        return cls(NO_RESULTS_MESSAGE, details={"reason": "missing_results"})

    @classmethod
    def invalid_results(cls, reason: str) -> "MalformedResponseError":
        return cls(MALFORMED_RESULTS_MESSAGE, details={"reason": reason})


class SubmissionInProgressError(WorkflowError):
    """submit() called while another submission is still outstanding."""

    error_code = "SUBMISSION_IN_PROGRESS"
    category = ErrorCategory.CONCURRENCY

    def __init__(self):
        super().__init__(SUBMISSION_IN_PROGRESS_MESSAGE)


class RuleIndexError(IndexError):
    """Rule slot index outside [0, RULE_SLOTS)."""

    def __init__(self, index: int):
        super().__init__(f"Rule index {index} out of range [0, {RULE_SLOTS})")
        self.index = index
