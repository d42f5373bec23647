"""PDF Rule Checker: submit a document with three rules to a verification service."""

__version__ = "0.1.0"
