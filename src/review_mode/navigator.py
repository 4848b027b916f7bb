"""Review navigator: the state machine behind Review Mode.

The navigator is either inactive (no session) or active (one
:class:`ReviewSession`).  Every public method runs to completion on the
caller's thread and either replaces the session wholesale or raises a
:class:`~review_mode.errors.ReviewError` with the previous session
untouched.  State-changing calls return the :class:`ResolvedSet` for
the session's current radix; the host compares it with the previous
one (:meth:`ResolvedSet.changed_slots`) and reloads only what changed.

Typical use::

    navigator = ReviewNavigator()
    resolved = navigator.activate(["/shots/shot_001_diffuse.jpg", "/shots/shot_001_specular.jpg"])
    resolved = navigator.next()
    navigator.deactivate()
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config_service import ReviewSettings
from .errors import ReviewInactive
from .patterns import PatternSet, build_pattern_set
from .radix import PathLike, extract_radix
from .resolver import resolve_file_set
from .scanner import DirectoryIndex, scan_radixes

logger = logging.getLogger(__name__)


class ReviewState(enum.Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass(frozen=True)
class ReviewSession:
    """Pattern set, discovered radixes and the current position."""

    directory: Path
    patterns: PatternSet
    radixes: Tuple[str, ...]
    index: Optional[int]

    @property
    def current_radix(self) -> Optional[str]:
        if self.index is None:
            return None
        return self.radixes[self.index]


@dataclass(frozen=True)
class ResolvedSet:
    """One path (or ``None`` for a placeholder) per slot for the current radix."""

    radix: Optional[str]
    index: Optional[int]
    total: int
    paths: Tuple[Optional[Path], ...]

    def changed_slots(self, previous: Optional["ResolvedSet"]) -> List[int]:
        """Slot indices whose path differs from ``previous``."""
        if previous is None or len(previous.paths) != len(self.paths):
            return list(range(len(self.paths)))
        return [i for i, (old, new) in enumerate(zip(previous.paths, self.paths)) if old != new]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "radix": self.radix,
            "index": self.index,
            "total": self.total,
            "paths": [str(p) if p is not None else None for p in self.paths],
        }


class ReviewNavigator:
    """Owns the review session and turns navigation requests into file sets."""

    def __init__(self, settings: Optional[ReviewSettings] = None) -> None:
        self.settings = settings or ReviewSettings()
        self._session: Optional[ReviewSession] = None
        self._resolved: Optional[ResolvedSet] = None

    @property
    def state(self) -> ReviewState:
        return ReviewState.ACTIVE if self._session is not None else ReviewState.INACTIVE

    @property
    def session(self) -> Optional[ReviewSession]:
        return self._session

    @property
    def resolved(self) -> Optional[ResolvedSet]:
        return self._resolved

    @property
    def position(self) -> Tuple[Optional[int], int]:
        """``(index, total)`` for a "set 3 of 12" indicator."""
        if self._session is None:
            return None, 0
        return self._session.index, len(self._session.radixes)

    def _require_session(self) -> ReviewSession:
        if self._session is None:
            raise ReviewInactive()
        return self._session

    def _read(self, directory: Path) -> DirectoryIndex:
        return DirectoryIndex.read(directory, self.settings.ignore_rules)

    def _resolve(self, session: ReviewSession, index: DirectoryIndex) -> ResolvedSet:
        radix = session.current_radix
        if radix is None:
            paths: Tuple[Optional[Path], ...] = (None,) * len(session.patterns)
        else:
            paths = tuple(resolve_file_set(radix, session.patterns, index))
        return ResolvedSet(radix=radix, index=session.index, total=len(session.radixes), paths=paths)

    def _commit(self, session: ReviewSession, resolved: ResolvedSet) -> ResolvedSet:
        self._session = session
        self._resolved = resolved
        return resolved

    def _build(self, loaded_paths: Sequence[PathLike]) -> ResolvedSet:
        extraction = extract_radix(loaded_paths, self.settings.separators)
        patterns = build_pattern_set(extraction, self.settings.generalize_digits, self.settings.separators)
        index = self._read(extraction.directory)
        radixes = scan_radixes(index, patterns, self.settings.min_slots_matched)
        if extraction.radix in radixes:
            position: Optional[int] = radixes.index(extraction.radix)
        else:
            position = 0 if radixes else None
        session = ReviewSession(
            directory=extraction.directory,
            patterns=patterns,
            radixes=tuple(radixes),
            index=position,
        )
        logger.info(
            "Review session on %s: radix %r, %d slots, %d sets found",
            extraction.directory,
            extraction.radix,
            len(patterns),
            len(radixes),
        )
        return self._commit(session, self._resolve(session, index))

    def activate(self, loaded_paths: Sequence[PathLike]) -> ResolvedSet:
        """Infer patterns from the loaded files and scan their directory.

        Calling this while active replaces the current session.
        """
        return self._build(loaded_paths)

    def recompute(self, loaded_paths: Sequence[PathLike]) -> ResolvedSet:
        """Re-derive the patterns from the currently loaded files."""
        self._require_session()
        return self._build(loaded_paths)

    def sync_loaded_files(self, loaded_paths: Sequence[PathLike]) -> ResolvedSet:
        """Recompute if the number of loaded files no longer matches the slots."""
        session = self._require_session()
        if len(loaded_paths) != len(session.patterns):
            logger.info(
                "Loaded file count changed from %d to %d, recomputing", len(session.patterns), len(loaded_paths)
            )
            return self.recompute(loaded_paths)
        return self._resolved

    def navigate(self, step: int) -> ResolvedSet:
        """Move ``step`` sets forward or back; moving past either end does nothing."""
        session = self._require_session()
        if session.index is None:
            return self._resolved
        target = session.index + step
        if not 0 <= target < len(session.radixes):
            return self._resolved
        moved = replace(session, index=target)
        return self._commit(moved, self._resolve(moved, self._read(session.directory)))

    def next(self) -> ResolvedSet:
        return self.navigate(1)

    def previous(self) -> ResolvedSet:
        return self.navigate(-1)

    def refresh(self, pattern_texts: Optional[Sequence[str]] = None) -> ResolvedSet:
        """Re-scan the directory, optionally with user-edited pattern text.

        The radix template is kept.  The current index is clamped into
        range when fewer sets are found than before.
        """
        session = self._require_session()
        patterns = session.patterns
        if pattern_texts is not None:
            patterns = patterns.with_texts(pattern_texts)
        index = self._read(session.directory)
        radixes = scan_radixes(index, patterns, self.settings.min_slots_matched)
        if not radixes:
            position: Optional[int] = None
        else:
            position = min(session.index or 0, len(radixes) - 1)
        refreshed = ReviewSession(
            directory=session.directory,
            patterns=patterns,
            radixes=tuple(radixes),
            index=position,
        )
        return self._commit(refreshed, self._resolve(refreshed, index))

    def resolve(self, radix: str) -> ResolvedSet:
        """Resolve any radix against the session patterns without moving."""
        session = self._require_session()
        paths = tuple(resolve_file_set(radix, session.patterns, self._read(session.directory)))
        index = session.radixes.index(radix) if radix in session.radixes else None
        return ResolvedSet(radix=radix, index=index, total=len(session.radixes), paths=paths)

    def deactivate(self) -> None:
        self._session = None
        self._resolved = None
