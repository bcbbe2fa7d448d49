"""
Audit Logger for fsplay.

Provides append-only logging of every file operation with timestamps,
targets and outcomes for debugging and review.
"""

import csv
import io
import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Dict, Any
from enum import Enum

from .errors import ErrorCategory, ErrorReport


class ActionType(Enum):
    """Types of file operations that can be logged."""
    READ = "read"
    WRITE = "write"
    RENAME = "rename"
    MOVE = "move"
    COPY = "copy"
    DELETE = "delete"
    LIST = "list"


class ActionStatus(Enum):
    """Outcome of a file operation."""
    EXECUTED = "executed"
    OUT_OF_BOUNDS = "out_of_bounds"
    FAILED = "failed"


EXPORT_FIELDS = ["timestamp", "action_type", "action_description", "target", "status", "result"]

_CATEGORY_ACTIONS = {
    ErrorCategory.READ: ActionType.READ,
    ErrorCategory.WRITE: ActionType.WRITE,
    ErrorCategory.RENAME: ActionType.RENAME,
    ErrorCategory.MOVE: ActionType.MOVE,
    ErrorCategory.DELETE: ActionType.DELETE,
}


@dataclass
class AuditEntry:
    """Represents a single audit log entry."""
    timestamp: str
    action_type: str
    action_description: str
    target: Optional[str]
    status: str
    result: Optional[str]
    metadata: Dict[str, Any]

    @classmethod
    def create(
        cls,
        action_type: ActionType,
        action_description: str,
        target: Optional[str] = None,
        status: ActionStatus = ActionStatus.EXECUTED,
        result: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "AuditEntry":
        """Factory method to create an audit entry with current timestamp."""
        return cls(
            timestamp=datetime.now().isoformat(),
            action_type=action_type.value,
            action_description=action_description,
            target=target,
            status=status.value,
            result=result,
            metadata=metadata or {}
        )

    def to_json(self) -> str:
        """Convert entry to JSON string."""
        return json.dumps(asdict(self), ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "AuditEntry":
        """Create entry from JSON string."""
        data = json.loads(json_str)
        return cls(**data)


class AuditLogger:
    """
    Append-only audit logger for fsplay.

    Every file operation is recorded in a JSONL file.
    """

    def __init__(self, log_path: str = "data/audit_log.jsonl"):
        """
        Initialize the audit logger.

        Args:
            log_path: Path to the JSONL log file
        """
        self.log_path = Path(log_path)
        self._ensure_log_directory()

    def _ensure_log_directory(self) -> None:
        """Create the log directory and file if they don't exist."""
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.log_path.exists():
            self.log_path.touch()

    def _iter_entries(self):
        """Yield entries in file order, skipping corrupt lines."""
        if not self.log_path.exists():
            return

        with open(self.log_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    yield AuditEntry.from_json(line)
                except (json.JSONDecodeError, TypeError):
                    continue

    def log(self, entry: AuditEntry) -> None:
        """
        Append an audit entry to the log.

        Args:
            entry: The AuditEntry to log
        """
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(entry.to_json() + "\n")

    def log_action(
        self,
        action_type: ActionType,
        description: str,
        target: Optional[str] = None,
        status: ActionStatus = ActionStatus.EXECUTED,
        result: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> AuditEntry:
        """
        Convenience method to create and log an entry in one call.

        Returns the created AuditEntry.
        """
        entry = AuditEntry.create(
            action_type=action_type,
            action_description=description,
            target=target,
            status=status,
            result=result,
            metadata=metadata
        )
        self.log(entry)
        return entry

    def log_error(self, report: ErrorReport, target: Optional[str] = None) -> AuditEntry:
        """Record a failed operation described by an ErrorReport."""
        return self.log_action(
            action_type=_CATEGORY_ACTIONS[report.category],
            description=f"{report.category.value} failed: {report.reason}",
            target=target,
            status=ActionStatus.FAILED,
            result=report.reason,
            metadata=report.to_dict()
        )

    def get_recent(self, limit: int = 100) -> List[AuditEntry]:
        """
        Get the most recent audit entries.

        Args:
            limit: Maximum number of entries to return

        Returns:
            List of AuditEntry objects, most recent first
        """
        entries = list(self._iter_entries())
        if limit <= 0:
            return []
        return list(reversed(entries[-limit:]))

    def get_by_action_type(self, action_type: ActionType, limit: int = 100) -> List[AuditEntry]:
        """
        Get audit entries filtered by action type.

        Args:
            action_type: The ActionType to filter by
            limit: Maximum number of entries to return

        Returns:
            List of matching AuditEntry objects, oldest first
        """
        entries = []
        for entry in self._iter_entries():
            if len(entries) >= limit:
                break
            if entry.action_type == action_type.value:
                entries.append(entry)
        return entries

    def get_failures(self, limit: int = 50) -> List[AuditEntry]:
        """Get operations that failed with an error."""
        entries = []
        for entry in self._iter_entries():
            if len(entries) >= limit:
                break
            if entry.status == ActionStatus.FAILED.value:
                entries.append(entry)
        return entries

    def export(self, format: str = "json") -> str:
        """
        Export the entire audit log, most recent first.

        Args:
            format: Export format ("json" or "csv")

        Returns:
            String containing the exported data
        """
        entries = self.get_recent(limit=10000)

        if format == "json":
            return json.dumps([asdict(e) for e in entries], indent=2)
        elif format == "csv":
            buffer = io.StringIO()
            writer = csv.writer(buffer, lineterminator="\n")
            writer.writerow(EXPORT_FIELDS)
            for e in entries:
                writer.writerow([e.timestamp, e.action_type, e.action_description, e.target or "", e.status, e.result or ""])
            return buffer.getvalue()
        else:
            raise ValueError(f"Unsupported export format: {format}")

    def clear(self, confirm: bool = False) -> bool:
        """
        Clear the audit log, keeping a timestamped backup.

        Args:
            confirm: Must be True to actually clear the log

        Returns:
            True if cleared, False otherwise
        """
        if not confirm:
            return False

        if self.log_path.exists():
            backup_path = self.log_path.with_suffix(f".backup.{datetime.now().strftime('%Y%m%d_%H%M%S')}.jsonl")
            self.log_path.rename(backup_path)
            self.log_path.touch()
            return True

        return False
