# =============================================================================
# Submission Constraints
# =============================================================================

RULE_SLOTS = 3  # Exactly three rule inputs per submission


# =============================================================================
# Verification Service Contract
# =============================================================================

FILE_FIELD = "file"
RULES_FIELD = "rules"
RESULTS_FIELD = "results"

NO_EVIDENCE_SENTINEL = "No evidence found"  # Service could not substantiate a claim
CONFIDENCE_MIN = 0
CONFIDENCE_MAX = 100

DEFAULT_CONTENT_TYPE = "application/pdf"
ERROR_BODY_MAX_CHARS = 500  # Truncation limit for error bodies in messages/logs


# =============================================================================
# Advisory File Limits (enforced by the service, only warned about here)
# =============================================================================

ADVERTISED_FILE_HINT = "Max 20MB — PDF only."
PDF_MAGIC = b"%PDF"


# =============================================================================
# User-facing Messages
# =============================================================================

MISSING_FILE_MESSAGE = "Please upload a PDF file."
INCOMPLETE_RULES_MESSAGE = f"Please fill all {RULE_SLOTS} rules."
NO_RESULTS_MESSAGE = "No results returned."
MALFORMED_RESULTS_MESSAGE = "Malformed results returned."
GENERIC_FAILURE_MESSAGE = "Something went wrong."
SUBMISSION_IN_PROGRESS_MESSAGE = "A submission is already in progress."
EMPTY_RESULTS_PLACEHOLDER = "— no results yet —"
