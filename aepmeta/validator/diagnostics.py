"""Diagnostic records produced by precondition checks."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A problem found on a named model or operation"""

    code: str
    severity: Severity
    message: str
    target: str

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "target": self.target,
        }

    def __str__(self) -> str:
        return f"{self.severity.value} {self.code} [{self.target}]: {self.message}"
