"""Resolve a radix to one concrete file per slot.

When several files in the directory match the same slot for the same
radix (``shot_001_diffuse.jpg`` and ``shot_001_diffuse_old.jpg`` under
a hand-widened pattern, say), the lexicographically smallest filename
wins.  This is not an error: the same directory contents must always
resolve to the same files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .patterns import PatternSet, SlotPattern
from .scanner import DirectoryIndex

logger = logging.getLogger(__name__)


def resolve_file(radix: str, slot: SlotPattern, entries: Iterable[str]) -> Optional[str]:
    """Return the filename filling ``slot`` for ``radix``, or ``None``."""
    candidates = sorted(name for name in entries if slot.radix_of(name) == radix)
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.debug(
            "Slot %d for radix %r matches %d files, using %s",
            slot.index,
            radix,
            len(candidates),
            candidates[0],
        )
    return candidates[0]


def resolve_file_set(radix: str, patterns: PatternSet, index: DirectoryIndex) -> List[Optional[Path]]:
    """Resolve every slot of ``patterns`` for ``radix``.

    Files are first assigned to slots the way the scanner assigns them,
    so one file never fills two slots.
    """
    assigned = index.assign(patterns)
    resolved: List[Optional[Path]] = []
    for slot in patterns.slots:
        own = [name for name, (slot_index, _radix) in assigned.items() if slot_index == slot.index]
        name = resolve_file(radix, slot, own)
        resolved.append(index.path(name) if name is not None else None)
    return resolved
