"""
Tests for the audit logger.
"""

import csv
import io
import json
import tempfile

import pytest

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fsplay.errors import ErrorCategory, ErrorReport
from fsplay.logger import AuditLogger, AuditEntry, ActionType, ActionStatus


class TestAuditEntry:
    """Test AuditEntry dataclass."""

    def test_json_round_trip(self):
        entry = AuditEntry.create(
            action_type=ActionType.MOVE,
            action_description="Moved a to b",
            target="b",
            metadata={"source": "a"}
        )

        restored = AuditEntry.from_json(entry.to_json())

        assert restored == entry
        assert restored.status == "executed"


class TestAuditLogger:
    """Test AuditLogger class."""

    @pytest.fixture
    def temp_dir(self):
        with tempfile.TemporaryDirectory() as d:
            yield Path(d)

    @pytest.fixture
    def logger(self, temp_dir):
        """Create a logger with temp file."""
        return AuditLogger(log_path=str(temp_dir / "logs" / "audit.jsonl"))

    def test_creates_log_file(self, logger):
        assert logger.log_path.exists()

    def test_log_action(self, logger):
        """Test logging an action."""
        entry = logger.log_action(
            action_type=ActionType.READ,
            description="Test action",
            target="/tmp/a.txt",
            status=ActionStatus.EXECUTED
        )

        assert entry.action_description == "Test action"
        assert entry.status == "executed"
        assert entry.target == "/tmp/a.txt"

    def test_get_recent(self, logger):
        """Most recent entries come first."""
        for i in range(5):
            logger.log_action(action_type=ActionType.READ, description=f"Action {i}")

        entries = logger.get_recent(limit=3)

        assert [e.action_description for e in entries] == ["Action 4", "Action 3", "Action 2"]

    def test_get_recent_empty(self, logger):
        assert logger.get_recent() == []

    def test_log_error(self, logger):
        report = ErrorReport(ErrorCategory.RENAME, "Destination already exists: b.txt", "rename_file", "file_ops.py", 10)

        entry = logger.log_error(report, target="/tmp/b.txt")

        assert entry.action_type == "rename"
        assert entry.status == "failed"
        assert entry.result == "Destination already exists: b.txt"
        assert entry.metadata["origin_line"] == 10

    def test_get_failures(self, logger):
        logger.log_action(action_type=ActionType.WRITE, description="fine")
        logger.log_error(ErrorReport(ErrorCategory.WRITE, "disk full", "write_file", "file_ops.py", 3))

        failures = logger.get_failures()

        assert len(failures) == 1
        assert failures[0].result == "disk full"

    def test_get_by_action_type(self, logger):
        logger.log_action(action_type=ActionType.COPY, description="copy")
        logger.log_action(action_type=ActionType.LIST, description="list")
        logger.log_action(action_type=ActionType.COPY, description="copy again")

        copies = logger.get_by_action_type(ActionType.COPY)

        assert [e.action_description for e in copies] == ["copy", "copy again"]

    def test_skips_corrupt_lines(self, logger):
        logger.log_action(action_type=ActionType.READ, description="good")
        with open(logger.log_path, "a", encoding="utf-8") as f:
            f.write("not json\n")
            f.write("\n")

        assert len(logger.get_recent()) == 1

    def test_export_json(self, logger):
        logger.log_action(action_type=ActionType.DELETE, description="gone")

        data = json.loads(logger.export("json"))

        assert data[0]["action_type"] == "delete"

    def test_export_csv(self, logger):
        logger.log_action(action_type=ActionType.DELETE, description="gone", target="/tmp/x")

        rows = list(csv.reader(io.StringIO(logger.export("csv"))))

        assert rows[0] == ["timestamp", "action_type", "action_description", "target", "status", "result"]
        assert rows[1][1:] == ["delete", "gone", "/tmp/x", "executed", ""]

    def test_export_csv_quotes_fields(self, logger):
        target = '/x/we "said", hi.txt'
        logger.log_action(action_type=ActionType.READ, description=f"Read file: {target}", target=target)

        rows = list(csv.reader(io.StringIO(logger.export("csv"))))

        assert len(rows[1]) == 6
        assert rows[1][2] == f"Read file: {target}"
        assert rows[1][3] == target

    def test_export_csv_empty(self, logger):
        assert logger.export("csv") == "timestamp,action_type,action_description,target,status,result\n"

    def test_export_unknown_format(self, logger):
        with pytest.raises(ValueError):
            logger.export("xml")

    def test_clear_requires_confirmation(self, logger):
        logger.log_action(action_type=ActionType.READ, description="keep")

        assert not logger.clear()
        assert len(logger.get_recent()) == 1

    def test_clear_keeps_backup(self, logger):
        logger.log_action(action_type=ActionType.READ, description="old")

        assert logger.clear(confirm=True)
        assert logger.get_recent() == []
        backups = list(logger.log_path.parent.glob("*.backup.*"))
        assert len(backups) == 1
