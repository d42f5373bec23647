"""Unit tests for the Streamlit session glue."""

import threading
from unittest.mock import MagicMock, patch

import pytest
import requests

from pdf_rule_checker.clients.verification_client import VerificationClient
from pdf_rule_checker.ui.session import (
    PENDING_SUBMIT_KEY,
    request_submit,
    run_pending_submit,
    submit_disabled,
    sync_uploaded_file,
)
from pdf_rule_checker.workflow.controller import SubmissionWorkflow
from pdf_rule_checker.workflow.models import SelectedFile, WorkflowStatus

ENDPOINT = "https://verifier.example.com/api/check"
RULES = ["Has signature block", "Dated within 30 days", "Contains clause X"]
RESULTS = [
    {"rule": rule, "status": "pass", "evidence": "Page 1, Line 1", "reasoning": "ok", "confidence": 90}
    for rule in RULES
]


def make_response(body):
    response = MagicMock(spec=requests.Response)
    response.status_code = 200
    response.ok = True
    response.json.return_value = body
    return response


def make_upload(file_id, name="agreement.pdf", content=b"%PDF-1.4\n%aaaa", type="application/pdf"):
    upload = MagicMock()
    upload.file_id = file_id
    upload.name = name
    upload.type = type
    upload.getvalue.return_value = content
    return upload


def filled_workflow():
    workflow = SubmissionWorkflow(client=VerificationClient(endpoint=ENDPOINT))
    workflow.select_file(SelectedFile(name="agreement.pdf", content=b"%PDF-1.4"))
    for i, rule in enumerate(RULES):
        workflow.edit_rule(i, rule)
    return workflow


class TestSubmitButton:
    """Tests for the Check button click handling."""

    def test_click_marks_submit_pending(self):
        session = {}

        request_submit(session)

        assert session[PENDING_SUBMIT_KEY] is True

    def test_button_disabled_while_pending(self):
        session = {}
        workflow = filled_workflow()

        assert submit_disabled(session, workflow) is False
        request_submit(session)
        assert submit_disabled(session, workflow) is True

    def test_button_disabled_while_submitting(self):
        session = {}
        workflow = MagicMock()
        workflow.is_submitting = True

        assert submit_disabled(session, workflow) is True

    def test_nothing_runs_without_click(self):
        session = {}
        workflow = MagicMock()

        assert run_pending_submit(session, workflow) is None
        workflow.submit.assert_not_called()

    def test_click_sends_exactly_one_request(self):
        session = {}
        workflow = filled_workflow()

        with patch("requests.post") as mock_post:
            mock_post.return_value = make_response({"results": RESULTS})
            request_submit(session)
            state = run_pending_submit(session, workflow)
            # A rerun queued behind the click finds nothing pending
            again = run_pending_submit(session, workflow)

        assert mock_post.call_count == 1
        assert state.status == WorkflowStatus.READY
        assert again is None
        assert session[PENDING_SUBMIT_KEY] is False
        assert submit_disabled(session, workflow) is False

    def test_flag_cleared_when_submit_raises(self):
        session = {}
        workflow = MagicMock()
        workflow.submit.side_effect = RuntimeError("boom")
        request_submit(session)

        with pytest.raises(RuntimeError):
            run_pending_submit(session, workflow)

        assert session[PENDING_SUBMIT_KEY] is False

    def test_click_during_outstanding_submission_is_ignored(self):
        session = {}
        workflow = filled_workflow()
        started = threading.Event()
        release = threading.Event()

        def slow_post(*args, **kwargs):
            started.set()
            release.wait(timeout=5)
            return make_response({"results": RESULTS})

        with patch("requests.post", side_effect=slow_post) as mock_post:
            worker = threading.Thread(target=workflow.submit)
            worker.start()
            started.wait(timeout=5)

            request_submit(session)
            assert run_pending_submit(session, workflow) is None

            release.set()
            worker.join(timeout=5)

        assert mock_post.call_count == 1
        assert session[PENDING_SUBMIT_KEY] is False
        assert workflow.state.status == WorkflowStatus.READY


class TestSyncUploadedFile:
    """Tests for mirroring the uploader widget into the workflow."""

    def test_new_upload_is_selected(self):
        workflow = SubmissionWorkflow(client=MagicMock())

        sync_uploaded_file(workflow, make_upload("upload-1"))

        selected = workflow.submission.selected_file
        assert selected.name == "agreement.pdf"
        assert selected.content == b"%PDF-1.4\n%aaaa"
        assert selected.source_id == "upload-1"

    def test_same_upload_is_not_reselected(self):
        workflow = SubmissionWorkflow(client=MagicMock())
        upload = make_upload("upload-1")
        sync_uploaded_file(workflow, upload)
        selected = workflow.submission.selected_file

        sync_uploaded_file(workflow, upload)

        assert workflow.submission.selected_file is selected
        upload.getvalue.assert_called_once()

    def test_replacement_with_same_name_and_size_is_picked_up(self):
        workflow = SubmissionWorkflow(client=MagicMock())
        sync_uploaded_file(workflow, make_upload("upload-1", content=b"%PDF-1.4\n%aaaa"))

        sync_uploaded_file(workflow, make_upload("upload-2", content=b"%PDF-1.4\n%bbbb"))

        selected = workflow.submission.selected_file
        assert selected.content == b"%PDF-1.4\n%bbbb"
        assert selected.source_id == "upload-2"

    def test_missing_content_type_defaults_to_pdf(self):
        workflow = SubmissionWorkflow(client=MagicMock())

        sync_uploaded_file(workflow, make_upload("upload-1", type=""))

        assert workflow.submission.selected_file.content_type == "application/pdf"

    def test_cleared_uploader_clears_file(self):
        workflow = SubmissionWorkflow(client=MagicMock())
        sync_uploaded_file(workflow, make_upload("upload-1"))

        sync_uploaded_file(workflow, None)

        assert workflow.submission.selected_file is None

    def test_cleared_uploader_without_file_is_noop(self):
        workflow = MagicMock()
        workflow.submission.selected_file = None

        sync_uploaded_file(workflow, None)

        workflow.select_file.assert_not_called()
