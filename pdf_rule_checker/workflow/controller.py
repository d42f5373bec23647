"""Submission workflow controller.

Owns the user's submission and the display state, and is the only place
where state transitions happen. One instance per user session.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Any, Dict, List, Optional

from pdf_rule_checker.clients.verification_client import VerificationClient
from pdf_rule_checker.core.config import GENERIC_FAILURE_MESSAGE, RULE_SLOTS
from pdf_rule_checker.core.exceptions import (
    IncompleteRulesError,
    MissingFileError,
    RuleIndexError,
    SubmissionInProgressError,
    WorkflowError,
)
from pdf_rule_checker.core.logging_utils import preview_rule, sanitize_filename
from pdf_rule_checker.workflow.file_checks import advisory_warnings
from pdf_rule_checker.workflow.models import (
    ResultItem,
    SelectedFile,
    Submission,
    WorkflowState,
    WorkflowStatus,
)

logger = logging.getLogger(__name__)


class SubmissionWorkflow:
    """
    State machine for selecting a document, entering rules, and submitting them.

    Transitions: select_file, edit_rule, remove_file, reset, submit.
    Only one submit() may be in flight; a second concurrent call raises
    SubmissionInProgressError and leaves state untouched.

    Args:
        client: Verification service client; defaults to one built from settings
    """

    def __init__(self, client: Optional[VerificationClient] = None) -> None:
        self.client = client or VerificationClient()
        self.submission = Submission()
        self.state = WorkflowState()
        self.last_error: Optional[WorkflowError] = None
        self._in_flight = threading.Lock()

    # --- read-only views ---

    @property
    def file_name(self) -> str:
        return self.submission.file_name

    @property
    def rules(self) -> List[str]:
        return list(self.submission.rules)

    @property
    def results(self) -> List[ResultItem]:
        return list(self.state.results)

    @property
    def is_submitting(self) -> bool:
        return self.state.is_submitting

    @property
    def file_warnings(self) -> List[str]:
        return advisory_warnings(self.submission.selected_file)

    def snapshot(self) -> Dict[str, Any]:
        """JSON-compatible dump of submission and state (file bytes excluded)."""
        return {
            "submission": self.submission.model_dump(mode="json"),
            "state": self.state.model_dump(mode="json"),
        }

    # --- transitions ---

    def select_file(self, file: Optional[SelectedFile]) -> None:
        """Replace the selected document; rules and results are kept."""
        self.submission = self.submission.model_copy(update={"selected_file": file})
        logger.debug(
            "File %s",
            "selected" if file else "cleared",
            extra={"file_name": sanitize_filename(file.name if file else None)},
        )

    def edit_rule(self, index: int, text: str) -> None:
        """Replace the rule in slot `index`. No validation happens here."""
        if not 0 <= index < RULE_SLOTS:
            raise RuleIndexError(index)
        rules = list(self.submission.rules)
        rules[index] = text
        self.submission = self.submission.model_copy(update={"rules": rules})

    def remove_file(self) -> None:
        """Detach the document and drop the results produced from it."""
        self.submission = self.submission.model_copy(update={"selected_file": None})
        status = self.state.status
        if status == WorkflowStatus.READY:
            status = WorkflowStatus.IDLE
        self.state = self.state.model_copy(update={"results": [], "status": status})
        logger.debug("File removed; results cleared")

    def reset(self) -> None:
        """Return to the initial empty submission and idle state."""
        self.submission = Submission()
        self.state = WorkflowState()
        self.last_error = None

    def submit(self) -> WorkflowState:
        """
        Validate the submission and send it to the verification service.

        Precondition failures and service failures are recorded in
        `state` (status FAILED) and `last_error` rather than raised.

        Returns:
            WorkflowState: The state after the attempt

        Raises:
            SubmissionInProgressError: If another submission is outstanding
        """
        if not self._in_flight.acquire(blocking=False):
            raise SubmissionInProgressError()

        try:
            self.last_error = None
            self.state = self.state.model_copy(update={"error": None, "error_code": None})

            precondition_error = self._check_preconditions()
            if precondition_error is not None:
                self._fail(precondition_error)
                return self.state

            submission = self.submission
            submission_id = uuid.uuid4().hex
            self.state = self.state.model_copy(update={"status": WorkflowStatus.SUBMITTING})
            logger.info(
                "Submitting document with rules [%s]",
                ", ".join(preview_rule(rule) for rule in submission.rules),
                extra={"submission_id": submission_id, "rule_count": len(submission.rules)},
            )

            try:
                results = self.client.verify(
                    submission.selected_file,
                    list(submission.rules),
                    submission_id=submission_id,
                )
            except WorkflowError as e:
                self._fail(e, submission_id=submission_id)
                return self.state

            self.state = WorkflowState(status=WorkflowStatus.READY, results=results)
            logger.info(
                "Submission completed",
                extra={"submission_id": submission_id, "result_count": len(results)},
            )
            return self.state
        finally:
            # SUBMITTING must not outlive the attempt
            if self.state.status == WorkflowStatus.SUBMITTING:
                self.state = self.state.model_copy(
                    update={
                        "status": WorkflowStatus.FAILED,
                        "error": self.state.error or GENERIC_FAILURE_MESSAGE,
                    }
                )
            self._in_flight.release()

    # --- helpers ---

    def _check_preconditions(self) -> Optional[WorkflowError]:
        if self.submission.is_complete:
            return None
        if self.submission.selected_file is None:
            return MissingFileError()
        return IncompleteRulesError(self.submission.blank_rule_indices())

    def _fail(self, error: WorkflowError, submission_id: Optional[str] = None) -> None:
        self.last_error = error
        self.state = self.state.model_copy(
            update={
                "status": WorkflowStatus.FAILED,
                "error": error.message or GENERIC_FAILURE_MESSAGE,
                "error_code": error.error_code,
            }
        )
        logger.warning(
            "Submission failed: %s",
            error.message,
            extra={
                "submission_id": submission_id,
                "error_code": error.error_code,
                "error": error.to_dict(),
            },
        )
