"""Sanitizers for exporting call trees."""

from .anonymizer import anonymize, SENSITIVE_FIELDS

__all__ = ["anonymize", "SENSITIVE_FIELDS"]
