"""
File manager module for fsplay.

Provides file and directory operations scoped to named app directories.
"""

from .directories import AppDirectory, DirectoryLayout
from .file_ops import FileOperator, FileInfo
from .app_file import AppFile

__all__ = ['AppDirectory', 'DirectoryLayout', 'FileOperator', 'FileInfo', 'AppFile']
