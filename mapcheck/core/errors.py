"""
Exceptions raised by the mapping analysis core.

Analysis problems in the inspected schemas are reported through results
(MissingInEntity, TypeMismatch, ...), never through exceptions. The only
condition that aborts an analysis is a malformed input descriptor.
"""

from typing import Optional


class MappingAnalysisError(Exception):
    """Base exception for all mapcheck failures."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.message = message
        self.code = code

    def to_response(self) -> dict:
        """Convert to the error payload returned by the API."""
        return {"error": {"code": self.code, "message": self.message}}


class InvalidDescriptor(MappingAnalysisError, ValueError):
    """A schema or property descriptor violates the input contract (e.g. empty name)."""

    def __init__(self, message: str, schema: Optional[str] = None, prop: Optional[str] = None):
        super().__init__(message, "INVALID_DESCRIPTOR")
        self.schema = schema
        self.prop = prop
