"""
exceptions.py - Error types raised by the succession engine.

Only programmer-error-class inputs raise. Data-quality problems in a snapshot
are reported as Issue entries on the result instead (see model.Issue).

Module: succession_engine.exceptions
"""

__all__ = ['SuccessionError', 'NotFoundError', 'DataIntegrityError']


class SuccessionError(Exception):
    """Base class for all succession engine errors."""


class NotFoundError(SuccessionError, LookupError):
    """A member required by the operation is absent from the supplied graph."""

    def __init__(self, member_id: str, what: str = "Member") -> None:
        self.member_id = member_id
        super().__init__(f"{what} (ID: {member_id}) not found in the provided family graph.")


class DataIntegrityError(SuccessionError, ValueError):
    """The snapshot is structurally unusable, e.g. a person recorded as their own ancestor."""
