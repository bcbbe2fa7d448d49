"""
Structured errors for fsplay.

A failed file operation is described by an immutable ErrorReport carrying
the operation category, a readable reason and the call site that produced
it. FileSystemError is the exception used to propagate a report.
"""

import inspect
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict


class ErrorCategory(Enum):
    """Kinds of file operation that can fail."""
    READ = "Read"
    WRITE = "Write"
    RENAME = "Rename"
    MOVE = "Move"
    DELETE = "Delete"


@dataclass(frozen=True)
class ErrorReport:
    """Describes a failed file operation without a stack trace."""
    category: ErrorCategory
    reason: str
    origin_function: str
    origin_file: str
    origin_line: int

    def __post_init__(self):
        if not isinstance(self.category, ErrorCategory):
            raise TypeError(f"category must be an ErrorCategory, got {self.category!r}")
        if isinstance(self.origin_line, bool) or not isinstance(self.origin_line, int):
            raise TypeError(f"origin_line must be an int, got {self.origin_line!r}")
        if self.origin_line < 0:
            raise ValueError(f"origin_line must be non-negative, got {self.origin_line}")

    @classmethod
    def capture(cls, category: ErrorCategory, reason: str) -> "ErrorReport":
        """Factory method that records the caller's function, file and line."""
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        try:
            if caller is None:
                return cls(category, reason, "<unknown>", "<unknown>", 0)
            return cls(
                category=category,
                reason=reason,
                origin_function=caller.f_code.co_name,
                origin_file=caller.f_code.co_filename,
                origin_line=caller.f_lineno,
            )
        finally:
            # Break the frame reference cycle
            del frame, caller

    def format(self) -> str:
        """
        Render the report as a multi-line diagnostic string.

        Formatting has no side effects; the receiver decides whether the
        text is printed or logged.
        """
        return (
            f"\nERROR - operation: [{self.category.value}];\n"
            f"reason: [{self.reason}];\n"
            f"in method: [{self.origin_function}];\n"
            f"in file: [{self.origin_file}];\n"
            f"at line: [{self.origin_line}]\n"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the report to a JSON-friendly dict."""
        data = asdict(self)
        data["category"] = self.category.value
        return data


class FileSystemError(Exception):
    """Raised when a file operation fails; carries an ErrorReport."""

    def __init__(self, report: ErrorReport):
        super().__init__(report.reason)
        self.report = report

    @property
    def category(self) -> ErrorCategory:
        return self.report.category
