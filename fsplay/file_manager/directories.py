"""
Named app directories and their locations on disk.
"""

from enum import Enum
from pathlib import Path
from typing import Optional


class AppDirectory(Enum):
    """Directories an app can read from and write to."""
    DOCUMENTS = "Documents"
    INBOX = "Inbox"
    LIBRARY = "Library"
    TEMP = "tmp"


class DirectoryLayout:
    """
    Resolves app directories under a single root.

    Inbox lives inside Documents. Temp defaults to ``<root>/tmp`` but can
    point anywhere.
    """

    def __init__(self, root: Path, temp_dir: Optional[Path] = None):
        self.root = Path(root)
        self.temp_dir = Path(temp_dir) if temp_dir else self.root / AppDirectory.TEMP.value

    def get_path(self, directory: AppDirectory) -> Path:
        if directory is AppDirectory.DOCUMENTS:
            return self.root / AppDirectory.DOCUMENTS.value
        if directory is AppDirectory.INBOX:
            return self.root / AppDirectory.DOCUMENTS.value / AppDirectory.INBOX.value
        if directory is AppDirectory.LIBRARY:
            return self.root / AppDirectory.LIBRARY.value
        if directory is AppDirectory.TEMP:
            return self.temp_dir
        raise ValueError(f"Unknown app directory: {directory!r}")

    def build_full_path(self, name: str, directory: AppDirectory) -> Path:
        return self.get_path(directory) / name

    def ensure(self) -> None:
        """Create every app directory that doesn't exist yet."""
        for directory in AppDirectory:
            self.get_path(directory).mkdir(parents=True, exist_ok=True)
