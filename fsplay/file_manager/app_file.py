"""
A single file bound to an app directory.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from .directories import AppDirectory
from .file_ops import FileInfo, FileOperator


KARMA_FILE = "karma.txt"
KARMA_TEXT = "We were talking\nAbout the space\nBetween us all"
DHARMA_TEXT = "And the people\nWho hide themselves\nBehind a wall"


class AppFile:
    """Convenience wrapper around FileOperator for one named file."""

    def __init__(self, file_name: str, current_directory: AppDirectory, operator: FileOperator):
        self.file_name = file_name
        self.current_directory = current_directory
        self.operator = operator

    @property
    def full_path(self) -> Path:
        return self.operator.layout.build_full_path(self.file_name, self.current_directory)

    def write(self) -> List[Path]:
        """Write the sample verses to karma.txt and to this file."""
        return [
            self.operator.write_file(KARMA_TEXT, self.current_directory, KARMA_FILE),
            self.operator.write_file(DHARMA_TEXT, self.current_directory, self.file_name),
        ]

    def read(self, offset: int = 0, length: int = 48) -> Optional[str]:
        return self.operator.read_bytes(self.file_name, length, offset, self.current_directory)

    def move_to_documents(self) -> Path:
        """Move this file from the Inbox to Documents."""
        path = self.operator.move_file(self.file_name, AppDirectory.INBOX, AppDirectory.DOCUMENTS)
        self.current_directory = AppDirectory.DOCUMENTS
        return path

    def delete_temp_file(self) -> bool:
        return self.operator.delete_file(AppDirectory.TEMP, self.file_name)

    def list(self) -> List[FileInfo]:
        return self.operator.list_directory(self.current_directory)

    def attributes(self) -> Dict[str, Any]:
        return self.operator.attributes(self.current_directory, self.file_name)
