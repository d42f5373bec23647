"""
Glue between Streamlit widget events and the submission workflow.

Kept free of Streamlit imports: `session` is anything with dict-style
access (st.session_state in the app, a plain dict in tests).
"""

import logging
from typing import Any, MutableMapping, Optional

from pdf_rule_checker.core.config import DEFAULT_CONTENT_TYPE
from pdf_rule_checker.core.exceptions import SubmissionInProgressError
from pdf_rule_checker.workflow.controller import SubmissionWorkflow
from pdf_rule_checker.workflow.models import SelectedFile, WorkflowState

logger = logging.getLogger(__name__)

PENDING_SUBMIT_KEY = "pending_submit"


def request_submit(session: MutableMapping[str, Any]) -> None:
    """on_click callback for the Check button. Runs before the page is redrawn."""
    session[PENDING_SUBMIT_KEY] = True


def submit_disabled(session: MutableMapping[str, Any], workflow: SubmissionWorkflow) -> bool:
    return bool(session.get(PENDING_SUBMIT_KEY, False)) or workflow.is_submitting


def run_pending_submit(
    session: MutableMapping[str, Any],
    workflow: SubmissionWorkflow,
) -> Optional[WorkflowState]:
    """
    Run the submission requested by the last click, at most once.

    Returns:
        WorkflowState after the attempt, or None when nothing was requested
        or another submission is still outstanding
    """
    if not session.get(PENDING_SUBMIT_KEY, False):
        return None
    try:
        return workflow.submit()
    except SubmissionInProgressError:
        logger.info("Ignoring click while a submission is outstanding")
        return None
    finally:
        session[PENDING_SUBMIT_KEY] = False


def sync_uploaded_file(workflow: SubmissionWorkflow, uploaded: Any) -> None:
    """
    Mirror the uploader widget into the workflow.

    A file is considered new when its uploader id differs from the one
    held, so a replacement with the same name and size is still picked up.
    """
    current = workflow.submission.selected_file

    if uploaded is None:
        if current is not None:
            workflow.select_file(None)
        return

    if current is not None and current.source_id == uploaded.file_id:
        return

    workflow.select_file(
        SelectedFile(
            name=uploaded.name,
            content=uploaded.getvalue(),
            content_type=uploaded.type or DEFAULT_CONTENT_TYPE,
            source_id=uploaded.file_id,
        )
    )
