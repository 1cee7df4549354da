# frontend/pipeline.py
"""Source reading for the analysis driver."""

from __future__ import annotations
from pathlib import Path
from typing import Optional, Union


class SourceReadError(Exception):
    """Raised when an input source cannot be opened or read.

    A run that raises this has produced no results at all, as opposed to a
    run over an empty file, which produces empty collections.
    """

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None):
        self.path = str(path)
        self.cause = cause
        detail = f": {cause.strerror or cause}" if isinstance(cause, OSError) else ""
        super().__init__(f"could not open {self.path}{detail}")


def read_source(path: Union[str, Path]) -> str:
    """Read a source file as text.

    Args:
        path: File to read

    Returns:
        File contents (undecodable bytes replaced)

    Raises:
        SourceReadError: if the file cannot be opened or read
    """
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise SourceReadError(path, e) from e

