"""
Audit error types.
"""


class AuditError(Exception):
    """Base class for errors surfaced to audit callers."""


class InvalidSiteUrlError(AuditError, ValueError):
    """The requested site URL has no auditable origin."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid site URL {value!r}: {reason}")
