# fsplay - Core Module
"""
Core infrastructure for fsplay, a small file-system toolkit.
Provides the structured error type, the bounded reader, the audit log and
configuration loading.
"""

from .errors import ErrorCategory, ErrorReport, FileSystemError
from .logger import AuditLogger, AuditEntry, ActionType, ActionStatus
from .reader import read_bytes

__all__ = [
    "ErrorCategory",
    "ErrorReport",
    "FileSystemError",
    "AuditLogger",
    "AuditEntry",
    "ActionType",
    "ActionStatus",
    "read_bytes",
]

__version__ = "0.1.0"
