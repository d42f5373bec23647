"""HTTP client for the remote verification service.

Sends one multipart POST per submission and converts every failure into
either TransportError or MalformedResponseError.
"""

import json
import logging
import time
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from pdf_rule_checker.core.config import (
    ERROR_BODY_MAX_CHARS,
    FILE_FIELD,
    GENERIC_FAILURE_MESSAGE,
    RESULTS_FIELD,
    RULES_FIELD,
)
from pdf_rule_checker.core.exceptions import MalformedResponseError, TransportError
from pdf_rule_checker.core.logging_utils import sanitize_filename
from pdf_rule_checker.core.settings import verifier_settings
from pdf_rule_checker.workflow.models import ResultItem, SelectedFile

logger = logging.getLogger(__name__)


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:ERROR_BODY_MAX_CHARS]
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("title") or body.get("error")
        if detail:
            return str(detail)[:ERROR_BODY_MAX_CHARS]
    return response.text[:ERROR_BODY_MAX_CHARS]


def parse_results(body: Any) -> List[ResultItem]:
    """
    Validate a decoded response body and return its result items.

    Raises:
        MalformedResponseError: If `results` is missing or not a list of
            well-formed result items.
    """
    if not isinstance(body, dict) or RESULTS_FIELD not in body or body[RESULTS_FIELD] is None:
        raise MalformedResponseError.missing_results()

    raw_results = body[RESULTS_FIELD]
    if not isinstance(raw_results, list):
        raise MalformedResponseError.invalid_results(
            f"'{RESULTS_FIELD}' is {type(raw_results).__name__}, expected list"
        )

    try:
        return [ResultItem.model_validate(item) for item in raw_results]
    except ValidationError as e:
        raise MalformedResponseError.invalid_results(
            f"{e.error_count()} invalid field(s) in results"
        ) from e


class VerificationClient:
    """
    Client for the verification service endpoint.

    Args:
        endpoint: Full URL of the check endpoint
        timeout_seconds: Request timeout; None waits indefinitely
        session: Optional requests.Session to reuse connections (owned by caller)
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = endpoint or verifier_settings.VERIFY_API_URL
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else verifier_settings.VERIFY_TIMEOUT_SECONDS
        )
        self._session = session

    def _post(self, **kwargs) -> requests.Response:
        if self._session is not None:
            return self._session.post(self.endpoint, **kwargs)
        return requests.post(self.endpoint, **kwargs)

    def verify(
        self,
        file: SelectedFile,
        rules: List[str],
        submission_id: Optional[str] = None,
    ) -> List[ResultItem]:
        """
        Submit a document and its rules for verification.

        Args:
            file: The selected document
            rules: Rule strings in slot order
            submission_id: Correlation id for logs

        Returns:
            list[ResultItem]: Verdicts in the order returned by the service

        Raises:
            TransportError: Connection failure, HTTP error status, or non-JSON body
            MalformedResponseError: Body lacks a well-formed `results` list
        """
        files = {FILE_FIELD: (file.name, file.content, file.content_type)}
        data = {RULES_FIELD: json.dumps(rules)}
        log_extra = {
            "submission_id": submission_id,
            "endpoint": self.endpoint,
            "file_name": sanitize_filename(file.name),
            "rule_count": len(rules),
        }

        logger.info("Sending submission to verification service", extra=log_extra)
        start_time = time.perf_counter()

        try:
            response = self._post(files=files, data=data, timeout=self.timeout_seconds)
        except requests.exceptions.Timeout as e:
            raise TransportError(
                f"Verification service did not respond within {self.timeout_seconds} seconds."
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(
                f"Could not connect to verification service at {self.endpoint}."
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e) or GENERIC_FAILURE_MESSAGE) from e

        duration_ms = round((time.perf_counter() - start_time) * 1000, 1)
        log_extra.update({"http_status": response.status_code, "duration_ms": duration_ms})

        if not response.ok:
            detail = _error_detail(response)
            logger.warning("Verification service returned an error status", extra=log_extra)
            raise TransportError(
                f"Verification service error ({response.status_code}): {detail or response.reason}",
                http_status=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.warning("Verification service returned a non-JSON body", extra=log_extra)
            raise TransportError(
                str(e) or GENERIC_FAILURE_MESSAGE, http_status=response.status_code
            ) from e

        results = parse_results(body)

        if len(results) != len(rules):
            logger.warning(
                "Result count %d does not match rule count %d",
                len(results),
                len(rules),
                extra=log_extra,
            )

        log_extra["result_count"] = len(results)
        logger.info("Verification results received", extra=log_extra)
        return results
