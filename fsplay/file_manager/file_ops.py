"""
File operations for fsplay.

Thin wrappers over the OS file API, scoped to app directories. Every
operation is recorded in the audit log; failures raise FileSystemError.
"""

import shutil
import stat
from pathlib import Path
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..errors import ErrorCategory, ErrorReport, FileSystemError
from ..logger import AuditLogger, ActionType
from ..reader import read_bytes
from . import status
from .directories import AppDirectory, DirectoryLayout


@dataclass
class FileInfo:
    """Information about a file or directory."""
    path: str
    name: str
    size: int
    modified: str
    is_dir: bool
    is_file: bool
    extension: str
    permissions: str


class FileOperator:
    """Operations on files inside app directories."""

    def __init__(self, layout: DirectoryLayout, logger: AuditLogger):
        """
        Initialize FileOperator.

        Args:
            layout: Resolves app directories to paths
            logger: Audit logger instance
        """
        self.layout = layout
        self.logger = logger

    def _fail(self, report: ErrorReport, target: Path) -> FileSystemError:
        """Log a failure and build the exception to raise."""
        self.logger.log_error(report, target=str(target))
        return FileSystemError(report)

    def write_file(self, contents: str, directory: AppDirectory, name: str) -> Path:
        """
        Write text to a file, replacing any existing content.

        Args:
            contents: Text to write (encoded as UTF-8)
            directory: App directory to write into
            name: File name

        Returns:
            Path of the written file

        Raises:
            FileSystemError: Category Write if the file can't be written
        """
        path = self.layout.build_full_path(name, directory)
        data = contents.encode("utf-8")

        try:
            path.write_bytes(data)
        except OSError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.WRITE, f"Error writing file: {e.strerror or e}"),
                path
            ) from e

        self.logger.log_action(
            action_type=ActionType.WRITE,
            description=f"Wrote file: {path}",
            target=str(path),
            result=f"File written ({len(data)} bytes)"
        )
        return path

    def read_file(self, directory: AppDirectory, name: str) -> str:
        """
        Read the whole contents of a file as UTF-8 text.

        Raises:
            FileSystemError: Category Read if the file is missing or not UTF-8
        """
        path = self.layout.build_full_path(name, directory)

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.READ, f"Error reading file: {e.strerror or e}"),
                path
            ) from e
        except UnicodeDecodeError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.READ, "File is not valid UTF-8."),
                path
            ) from e

        self.logger.log_action(
            action_type=ActionType.READ,
            description=f"Read file: {path}",
            target=str(path),
            result=f"{len(text)} characters"
        )
        return text

    def read_bytes(
        self,
        name: str,
        length: int,
        offset: int = 0,
        directory: AppDirectory = AppDirectory.DOCUMENTS
    ) -> Optional[str]:
        """
        Read an exact byte window from a file in an app directory.

        Returns None when the window lies outside the file.
        """
        path = self.layout.build_full_path(name, directory)
        return read_bytes(str(path), length, offset, logger=self.logger)

    def delete_file(self, directory: AppDirectory, name: str) -> bool:
        """
        Delete a file.

        Raises:
            FileSystemError: Category Delete if the file can't be removed
        """
        path = self.layout.build_full_path(name, directory)

        try:
            file_size = path.stat().st_size
            path.unlink()
        except OSError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.DELETE, f"Error deleting file: {e.strerror or e}"),
                path
            ) from e

        self.logger.log_action(
            action_type=ActionType.DELETE,
            description=f"Deleted file: {path}",
            target=str(path),
            result=f"File deleted ({file_size} bytes)"
        )
        return True

    def rename_file(self, directory: AppDirectory, old_name: str, new_name: str) -> Path:
        """
        Rename a file within its app directory.

        Raises:
            FileSystemError: Category Rename if the file is missing or the
                new name is taken
        """
        old_path = self.layout.build_full_path(old_name, directory)
        new_path = self.layout.build_full_path(new_name, directory)

        if new_path.exists():
            raise self._fail(
                ErrorReport.capture(ErrorCategory.RENAME, f"Destination already exists: {new_name}"),
                new_path
            )

        try:
            old_path.rename(new_path)
        except OSError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.RENAME, f"Error renaming file: {e.strerror or e}"),
                old_path
            ) from e

        self.logger.log_action(
            action_type=ActionType.RENAME,
            description=f"Renamed {old_path} to {new_path}",
            target=str(new_path),
            metadata={"source": str(old_path)}
        )
        return new_path

    def move_file(self, name: str, from_directory: AppDirectory, to_directory: AppDirectory) -> Path:
        """
        Move a file to another app directory, keeping its name.

        Raises:
            FileSystemError: Category Move if the source is missing or the
                destination is taken
        """
        src = self.layout.build_full_path(name, from_directory)
        dst = self.layout.build_full_path(name, to_directory)

        if not src.exists():
            raise self._fail(
                ErrorReport.capture(ErrorCategory.MOVE, f"Source file not found: {name}"),
                src
            )
        if dst.exists():
            raise self._fail(
                ErrorReport.capture(ErrorCategory.MOVE, f"Destination already exists: {dst}"),
                dst
            )

        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(src), str(dst))
        except OSError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.MOVE, f"Error moving file: {e.strerror or e}"),
                src
            ) from e

        self.logger.log_action(
            action_type=ActionType.MOVE,
            description=f"Moved {src} to {dst}",
            target=str(dst),
            metadata={"source": str(src)}
        )
        return dst

    def copy_file(
        self,
        name: str,
        from_directory: AppDirectory,
        to_directory: AppDirectory,
        new_name: Optional[str] = None
    ) -> Path:
        """
        Copy a file to an app directory.

        The copy is named ``new_name``, or ``name + "1"`` when omitted so a
        copy into the same directory doesn't collide with the original.

        Raises:
            FileSystemError: Category Write if the copy can't be created
        """
        src = self.layout.build_full_path(name, from_directory)
        dst = self.layout.build_full_path(new_name or name + "1", to_directory)

        if not src.is_file():
            raise self._fail(
                ErrorReport.capture(ErrorCategory.WRITE, f"Source file not found: {name}"),
                src
            )
        if dst.exists():
            raise self._fail(
                ErrorReport.capture(ErrorCategory.WRITE, f"Destination already exists: {dst}"),
                dst
            )

        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)  # copy2 preserves metadata
        except OSError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.WRITE, f"Error copying file: {e.strerror or e}"),
                dst
            ) from e

        self.logger.log_action(
            action_type=ActionType.COPY,
            description=f"Copied {src} to {dst}",
            target=str(dst),
            metadata={"source": str(src), "size": dst.stat().st_size}
        )
        return dst

    def change_extension(self, name: str, directory: AppDirectory, new_extension: str) -> str:
        """
        Replace a file's extension.

        Returns:
            The new file name

        Raises:
            FileSystemError: Category Rename if the extension is empty or
                not a plain suffix, or the rename fails
        """
        path = self.layout.build_full_path(name, directory)
        extension = new_extension.lstrip(".")
        if not extension:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.RENAME, f"Invalid extension: {new_extension!r}"),
                path
            )

        try:
            new_name = Path(name).with_suffix(f".{extension}").name
        except ValueError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.RENAME, f"Invalid extension: {new_extension!r}"),
                path
            ) from e

        self.rename_file(directory, name, new_name)
        return new_name

    def list_directory(self, directory: AppDirectory) -> List[FileInfo]:
        """
        List contents of an app directory.

        Returns:
            FileInfo objects sorted by name

        Raises:
            FileSystemError: Category Read if the directory can't be listed
        """
        path = self.layout.get_path(directory)

        try:
            items = sorted(path.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.READ, f"Error listing directory: {e.strerror or e}"),
                path
            ) from e

        files = []
        for item in items:
            try:
                files.append(self._file_info(item))
            except OSError:
                # Removed between listing and stat
                continue

        self.logger.log_action(
            action_type=ActionType.LIST,
            description=f"Listed directory: {path}",
            target=str(path),
            result=f"{len(files)} entries"
        )
        return files

    def _file_info(self, path_obj: Path) -> FileInfo:
        st = path_obj.stat()
        is_file = stat.S_ISREG(st.st_mode)
        return FileInfo(
            path=str(path_obj.resolve()),
            name=path_obj.name,
            size=st.st_size if is_file else 0,
            modified=datetime.fromtimestamp(st.st_mtime).isoformat(),
            is_dir=stat.S_ISDIR(st.st_mode),
            is_file=is_file,
            extension=path_obj.suffix,
            permissions=oct(st.st_mode)[-3:]
        )

    def get_file_info(self, path: str) -> FileInfo:
        """
        Get information about a file or directory.

        Raises:
            FileSystemError: Category Read if the path can't be inspected
        """
        path_obj = Path(path)

        try:
            return self._file_info(path_obj)
        except OSError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.READ, f"Path not found: {path}"),
                path_obj
            ) from e

    def attributes(self, directory: AppDirectory, name: str) -> Dict[str, Any]:
        """Return the raw stat attributes of a file."""
        path = self.layout.build_full_path(name, directory)

        try:
            st = path.stat()
        except OSError as e:
            raise self._fail(
                ErrorReport.capture(ErrorCategory.READ, f"Error reading attributes: {e.strerror or e}"),
                path
            ) from e

        return {
            "type": "directory" if stat.S_ISDIR(st.st_mode) else "file",
            "size": st.st_size,
            "permissions": oct(st.st_mode)[-3:],
            "owner_uid": st.st_uid,
            "group_gid": st.st_gid,
            "inode": st.st_ino,
            "links": st.st_nlink,
            "modified": datetime.fromtimestamp(st.st_mtime).isoformat(),
            "accessed": datetime.fromtimestamp(st.st_atime).isoformat(),
            "changed": datetime.fromtimestamp(st.st_ctime).isoformat(),
            "readable": status.is_readable(path),
            "writable": status.is_writable(path),
        }
