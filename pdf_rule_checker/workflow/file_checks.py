"""Advisory checks for a selected document.

The verification service enforces the size and type limits. These checks only
produce warnings for the user; they never block selection or submission.
"""

import logging
from typing import List, Optional

from pdf_rule_checker.core.config import PDF_MAGIC
from pdf_rule_checker.core.settings import VerifierSettings, verifier_settings
from pdf_rule_checker.workflow.models import SelectedFile

logger = logging.getLogger(__name__)


def looks_like_pdf(header: bytes) -> bool:
    """
    Check the magic bytes of a document.

    Example:
        >>> looks_like_pdf(b'%PDF-1.7')
        True
    """
    return header.startswith(PDF_MAGIC)


def advisory_warnings(
    file: Optional[SelectedFile],
    settings: Optional[VerifierSettings] = None,
) -> List[str]:
    """
    Collect non-blocking warnings about a selected document.

    Args:
        file: The selected document, or None
        settings: Source of the advertised size cap; defaults to the loaded settings

    Returns:
        list[str]: Human-readable warnings, empty when nothing looks off
    """
    if file is None:
        return []

    settings = settings or verifier_settings

    warnings: List[str] = []

    if file.size == 0:
        warnings.append("The selected file is empty.")
    elif not looks_like_pdf(file.content[:8]):
        warnings.append("The selected file does not look like a PDF; the service may reject it.")

    if file.size > settings.max_file_size_bytes:
        size_mb = file.size / (1024 * 1024)
        warnings.append(
            f"The selected file is {size_mb:.2f}MB (max: {settings.MAX_FILE_SIZE_MB}MB); the service may reject it."
        )

    if warnings:
        logger.debug("Advisory file warnings: %s", warnings)
    return warnings
