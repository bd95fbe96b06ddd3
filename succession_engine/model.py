"""
Shared result models.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

Severity = Literal["info", "warning", "error"]


@dataclass(frozen=True)
class Issue:
    """
    A non-fatal data-quality finding attached to a result.

    Attributes:
        issue_type: Machine-readable category (e.g. 'dangling_relationship', 'missing_house').
        severity: 'info', 'warning' or 'error'.
        message: Human-readable description.
        person_id: Member the issue is about, if any.
        related_person_ids: Other members involved.
    """
    issue_type: str
    severity: Severity
    message: str
    person_id: Optional[str] = None
    related_person_ids: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"[{self.severity}] {self.issue_type}: {self.message}"
