"""Error taxonomy for Review Mode.

Every error raised by the core derives from :class:`ReviewError` and is
recoverable at the navigator boundary: the prior review session (if
any) is left untouched and the host is expected to show ``str(exc)``
to the user.  Each class carries a short machine readable ``code`` so
hosts can branch without ``isinstance`` chains.

An empty discovery result and an unresolved slot are *not* errors and
have no class here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ReviewError(Exception):
    """Base class for all Review Mode failures."""

    code = "review_error"


class InsufficientInput(ReviewError):
    """Fewer than two files were supplied."""

    code = "insufficient_input"

    def __init__(self, count: int) -> None:
        super().__init__(f"Review mode needs at least 2 loaded files, got {count}.")
        self.count = count


class DegenerateInput(ReviewError):
    """The seed filenames carry no usable naming structure."""

    code = "degenerate_input"


class CrossDirectoryError(ReviewError):
    """The seed files do not share one parent directory."""

    code = "cross_directory"

    def __init__(self, directories: list[Path]) -> None:
        listed = ", ".join(str(d) for d in directories)
        super().__init__(f"Loaded files must share one directory, found: {listed}")
        self.directories = directories


class InvalidPattern(ReviewError):
    """A slot pattern failed validation.

    ``last_valid`` holds the pattern text the slot falls back to.
    """

    code = "invalid_pattern"

    def __init__(self, slot: int, text: str, reason: str, last_valid: Optional[str] = None) -> None:
        super().__init__(f"Invalid pattern for slot {slot} ({text!r}): {reason}")
        self.slot = slot
        self.text = text
        self.reason = reason
        self.last_valid = last_valid


class ScanError(ReviewError):
    """The review directory could not be listed."""

    code = "scan_error"

    def __init__(self, directory: Path, reason: str) -> None:
        super().__init__(f"Cannot scan {directory}: {reason}")
        self.directory = directory
        self.reason = reason


class ReviewInactive(ReviewError):
    """A session operation was requested while review mode is off."""

    code = "inactive"

    def __init__(self) -> None:
        super().__init__("Review mode is not active.")
