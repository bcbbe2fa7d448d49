"""
Bounded file reads.

Reads an exact byte window from a file after validating it against the
file's real size. The file handle is always released before returning.
"""

import os
from typing import Callable, Optional

from .errors import ErrorCategory, ErrorReport, FileSystemError
from .logger import AuditLogger, ActionType, ActionStatus


READ_ERROR_REASON = "Error during read file."
DECODE_ERROR_REASON = "Requested byte range is not valid UTF-8."


def _check_non_negative(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def read_bytes(
    file_path: str,
    length: int,
    offset: int = 0,
    *,
    opener: Callable = open,
    logger: Optional[AuditLogger] = None
) -> Optional[str]:
    """
    Read exactly ``length`` bytes starting at ``offset`` and decode as UTF-8.

    Args:
        file_path: Path to the file
        length: Number of bytes to read
        offset: Absolute byte offset to start from (default: 0)
        opener: Callable used to open the file in binary mode
        logger: Optional audit logger for the outcome

    Returns:
        The decoded text, or None when the window lies outside the file.
        A request outside the file is not an error.

    Raises:
        ValueError: If length or offset is negative
        FileSystemError: If the file cannot be opened, sized or read, or
            the bytes are not valid UTF-8 (category Read)
    """
    _check_non_negative("length", length)
    _check_non_negative("offset", offset)

    try:
        handle = opener(file_path, "rb")
    except OSError as e:
        report = ErrorReport.capture(ErrorCategory.READ, READ_ERROR_REASON)
        if logger is not None:
            logger.log_error(report, target=str(file_path))
        raise FileSystemError(report) from e

    with handle:
        try:
            total = handle.seek(0, os.SEEK_END)
            in_bounds = length <= total and offset + length <= total
            if in_bounds:
                # Measuring the size moved the cursor to EOF
                handle.seek(offset)
                data = handle.read(length)
        except OSError as e:
            report = ErrorReport.capture(ErrorCategory.READ, READ_ERROR_REASON)
            if logger is not None:
                logger.log_error(report, target=str(file_path))
            raise FileSystemError(report) from e

        if not in_bounds:
            if logger is not None:
                logger.log_action(
                    action_type=ActionType.READ,
                    description=f"Cannot read out of bounds: {file_path}",
                    target=str(file_path),
                    status=ActionStatus.OUT_OF_BOUNDS,
                    metadata={"length": length, "offset": offset, "size": total}
                )
            return None

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            report = ErrorReport.capture(ErrorCategory.READ, DECODE_ERROR_REASON)
            if logger is not None:
                logger.log_error(report, target=str(file_path))
            raise FileSystemError(report) from e

    if logger is not None:
        logger.log_action(
            action_type=ActionType.READ,
            description=f"Read {length} bytes at offset {offset}: {file_path}",
            target=str(file_path),
            status=ActionStatus.EXECUTED,
            metadata={"length": length, "offset": offset, "size": total}
        )

    return text
