"""Status checks for files."""

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def exists(path: PathLike) -> bool:
    return os.path.exists(path)


def is_readable(path: PathLike) -> bool:
    return os.access(path, os.R_OK)


def is_writable(path: PathLike) -> bool:
    return os.access(path, os.W_OK)
