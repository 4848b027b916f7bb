"""Directory snapshots and radix discovery."""

from __future__ import annotations

import logging
import os
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .errors import ScanError
from .patterns import PatternSet
from .radix import natural_order

logger = logging.getLogger(__name__)

DEFAULT_MIN_SLOTS_MATCHED = 2
DEFAULT_IGNORE_RULES: Tuple[str, ...] = (".", "Thumbs.db", "desktop.ini")


def should_ignore(name: str, ignore_rules: Iterable[str]) -> bool:
    """Return True if ``name`` equals or starts with one of the rules."""
    for rule in ignore_rules:
        if name == rule or name.startswith(rule):
            return True
    return False


@dataclass(frozen=True)
class DirectoryIndex:
    """Names of the regular files in one directory at the time it was read.

    An index is a throwaway snapshot: it is built for one operation and
    dropped afterwards, so changes on disk show up on the next call.
    """

    directory: Path
    entries: Tuple[str, ...]

    @classmethod
    def read(cls, directory: Path, ignore_rules: Iterable[str] = DEFAULT_IGNORE_RULES) -> "DirectoryIndex":
        """List ``directory`` non-recursively.

        Raises :class:`ScanError` when the directory cannot be listed.
        """
        rules = tuple(ignore_rules)
        names: List[str] = []
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    if should_ignore(entry.name, rules):
                        continue
                    try:
                        if not entry.is_file():
                            continue
                    except OSError as exc:
                        logger.debug("Skipping %s: %s", entry.name, exc)
                        continue
                    names.append(entry.name)
        except OSError as exc:
            raise ScanError(directory, exc.strerror or str(exc)) from exc
        return cls(directory=directory, entries=tuple(sorted(names)))

    def path(self, name: str) -> Path:
        return self.directory / name

    def assign(self, patterns: PatternSet) -> Dict[str, Tuple[int, str]]:
        """Map each matching entry to the ``(slot index, radix)`` that claims it."""
        assigned: Dict[str, Tuple[int, str]] = {}
        for name in self.entries:
            hit = patterns.classify(name)
            if hit is not None:
                assigned[name] = hit
        return assigned


def effective_threshold(min_slots_matched: int, slot_count: int) -> int:
    if min_slots_matched < 1:
        raise ValueError(f"min_slots_matched must be at least 1, got {min_slots_matched}")
    return min(min_slots_matched, slot_count)


def scan_radixes(
    index: DirectoryIndex,
    patterns: PatternSet,
    min_slots_matched: int = DEFAULT_MIN_SLOTS_MATCHED,
) -> List[str]:
    """Return every radix in ``index`` that fills enough slots, in natural order.

    A radix qualifies when files for at least ``min_slots_matched``
    distinct slots exist (capped at the number of slots, so a
    threshold larger than the set still means "all slots").
    """
    threshold = effective_threshold(min_slots_matched, len(patterns))
    slots_by_radix: Dict[str, Set[int]] = defaultdict(set)
    for slot, radix in index.assign(patterns).values():
        slots_by_radix[radix].add(slot)
    qualifying = [radix for radix, slots in slots_by_radix.items() if len(slots) >= threshold]
    logger.debug(
        "Scanned %d entries in %s: %d candidate radixes, %d qualifying (threshold %d)",
        len(index.entries),
        index.directory,
        len(slots_by_radix),
        len(qualifying),
        threshold,
    )
    return natural_order(qualifying)


def scan_directory(
    directory: Path,
    patterns: PatternSet,
    min_slots_matched: int = DEFAULT_MIN_SLOTS_MATCHED,
    ignore_rules: Optional[Iterable[str]] = None,
) -> List[str]:
    """Read ``directory`` and scan it in one step."""
    index = DirectoryIndex.read(directory, DEFAULT_IGNORE_RULES if ignore_rules is None else ignore_rules)
    return scan_radixes(index, patterns, min_slots_matched)
