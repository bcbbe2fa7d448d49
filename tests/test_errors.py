"""
Tests for the ErrorReport type.
"""

import dataclasses

import pytest

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fsplay.errors import ErrorCategory, ErrorReport, FileSystemError


def make_report(**overrides):
    fields = dict(
        category=ErrorCategory.READ,
        reason="Error during read file.",
        origin_function="read_bytes",
        origin_file="reader.py",
        origin_line=42,
    )
    fields.update(overrides)
    return ErrorReport(**fields)


class TestErrorCategory:
    """Test ErrorCategory enum."""

    def test_categories_are_closed_set(self):
        """Only the five file operation kinds exist."""
        assert [c.value for c in ErrorCategory] == ["Read", "Write", "Rename", "Move", "Delete"]


class TestErrorReport:
    """Test ErrorReport construction and formatting."""

    def test_create_report(self):
        report = make_report()

        assert report.category == ErrorCategory.READ
        assert report.reason == "Error during read file."
        assert report.origin_function == "read_bytes"
        assert report.origin_file == "reader.py"
        assert report.origin_line == 42

    def test_report_is_immutable(self):
        report = make_report()

        with pytest.raises(dataclasses.FrozenInstanceError):
            report.reason = "changed"

    def test_all_fields_required(self):
        """No field has a default."""
        with pytest.raises(TypeError):
            ErrorReport(ErrorCategory.READ, "reason", "func", "file.py")

    def test_negative_line_rejected(self):
        with pytest.raises(ValueError):
            make_report(origin_line=-1)

    def test_line_zero_allowed(self):
        assert make_report(origin_line=0).origin_line == 0

    def test_category_must_be_enum(self):
        with pytest.raises(TypeError):
            make_report(category="Read")

    def test_format_template(self):
        report = make_report(category=ErrorCategory.MOVE, reason="Source file not found: a.txt")

        assert report.format() == (
            "\nERROR - operation: [Move];\n"
            "reason: [Source file not found: a.txt];\n"
            "in method: [read_bytes];\n"
            "in file: [reader.py];\n"
            "at line: [42]\n"
        )

    def test_format_is_pure(self, capsys):
        """Formatting never prints."""
        report = make_report()

        first = report.format()
        second = report.format()

        assert first == second
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_capture_records_caller(self):
        report = ErrorReport.capture(ErrorCategory.DELETE, "gone")

        assert report.category == ErrorCategory.DELETE
        assert report.reason == "gone"
        assert report.origin_function == "test_capture_records_caller"
        assert Path(report.origin_file).name == "test_errors.py"
        assert report.origin_line > 0

    def test_to_dict(self):
        data = make_report(category=ErrorCategory.RENAME).to_dict()

        assert data == {
            "category": "Rename",
            "reason": "Error during read file.",
            "origin_function": "read_bytes",
            "origin_file": "reader.py",
            "origin_line": 42,
        }


class TestFileSystemError:
    """Test the exception carrying a report."""

    def test_carries_report(self):
        report = make_report(category=ErrorCategory.WRITE, reason="disk full")
        error = FileSystemError(report)

        assert error.report is report
        assert error.category == ErrorCategory.WRITE
        assert str(error) == "disk full"

    def test_can_be_raised_and_caught(self):
        with pytest.raises(FileSystemError) as exc_info:
            raise FileSystemError(make_report())

        assert exc_info.value.report.category == ErrorCategory.READ
