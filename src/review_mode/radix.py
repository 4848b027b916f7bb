"""Radix extraction from a seed set of filenames.

The radix is the part of a filename shared by every file of one related
set (``shot_001`` in ``shot_001_diffuse.jpg``).  Whatever follows the
radix is the file's *remainder* and later seeds that file's slot
pattern.

Boundary rules, applied to the longest common prefix of the seed
names:

1. Digit runs.  If the prefix ends inside or right before a run of ASCII
   digits and the run is the same in every name, the whole run stays in
   the radix (``shot_001a`` / ``shot_001b`` -> ``shot_001``).  If the
   run differs between names it tells the slots apart, so the prefix is
   cut back to where the run starts (``frame001_v1`` / ``frame001_v2``
   -> ``frame001_v`` before rule 2 applies).
2. Separators.  Trailing separators are trimmed.  A prefix that stops
   in the middle of a word in every name walks back to its last
   separator.

Numeric padding is never normalised: ``shot_1`` and ``shot_001`` are
two different radixes.  :func:`natural_order` sorts them with numeric
runs compared as integers and falls back to plain string order on ties,
so ``shot_001`` precedes ``shot_1``.
"""

from __future__ import annotations

import logging
import os
import string
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

from natsort import natsorted

from .errors import CrossDirectoryError, DegenerateInput, InsufficientInput

logger = logging.getLogger(__name__)

DEFAULT_SEPARATORS = "_-."

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class RadixExtraction:
    """Result of analysing a seed set of files."""

    directory: Path
    radix: str
    filenames: Tuple[str, ...]
    remainders: Tuple[str, ...]


def _shared_directory(paths: Sequence[PathLike]) -> Path:
    parents: List[Path] = []
    for raw in paths:
        parent = Path(raw).expanduser().absolute().parent
        if parent not in parents:
            parents.append(parent)
    if len(parents) > 1:
        raise CrossDirectoryError(parents)
    return parents[0]


def _continues_with(names: Sequence[str], offset: int, chars: str) -> List[bool]:
    return [len(name) > offset and name[offset] in chars for name in names]


def find_radix(names: Sequence[str], separators: str = DEFAULT_SEPARATORS) -> str:
    """Return the radix shared by ``names`` (may be empty)."""
    prefix = os.path.commonprefix(list(names))
    end = len(prefix)
    trailing_digits = end - len(prefix.rstrip(string.digits))
    digit_next = _continues_with(names, end, string.digits)
    if trailing_digits or any(digit_next):
        if not any(digit_next):
            return prefix
        prefix = prefix[: end - trailing_digits]
        end = len(prefix)
    if not prefix:
        return ""
    if prefix[-1] in separators:
        return prefix.rstrip(separators)
    if separators and all(len(name) > end and name[end] not in separators for name in names):
        # mid-word: the word belongs to the remainders
        cut = max(prefix.rfind(sep) for sep in separators)
        return prefix[:cut] if cut > 0 else ""
    return prefix


def extract_radix(paths: Sequence[PathLike], separators: str = DEFAULT_SEPARATORS) -> RadixExtraction:
    """Split the loaded files into a shared radix and per-file remainders.

    Raises :class:`InsufficientInput` for fewer than two paths,
    :class:`CrossDirectoryError` when the files live in different
    directories and :class:`DegenerateInput` when the names share no
    usable structure (identical names, no common radix, or two files
    with the same remainder).
    """
    if len(paths) < 2:
        raise InsufficientInput(len(paths))
    directory = _shared_directory(paths)
    names = tuple(Path(p).name for p in paths)
    if len(set(names)) == 1:
        raise DegenerateInput(f"All loaded files are named {names[0]!r}; nothing distinguishes the slots.")
    radix = find_radix(names, separators)
    if not radix:
        raise DegenerateInput("Loaded filenames share no common radix.")
    remainders = tuple(name[len(radix):] for name in names)
    if any(not remainder for remainder in remainders):
        raise DegenerateInput(f"A loaded file is named exactly {radix!r}; its slot would match every file.")
    if len(set(remainders)) != len(remainders):
        raise DegenerateInput("Two loaded files share the same remainder after the radix.")
    logger.debug("Extracted radix %r with remainders %s from %s", radix, remainders, directory)
    return RadixExtraction(directory=directory, radix=radix, filenames=names, remainders=remainders)


def derive_label(remainder: str, separators: str = DEFAULT_SEPARATORS) -> str:
    """Human readable slot label: remainder without leading separators or extension.

    ``_diffuse.jpg`` gives ``diffuse``; a bare extension such as ``.jpg``
    gives ``jpg``.
    """
    stripped = remainder.lstrip(separators)
    stem, dot, extension = stripped.rpartition(".")
    if not dot:
        return stripped
    return stem or extension


def natural_order(radixes: Iterable[str]) -> List[str]:
    """De-duplicate and sort radixes, numeric runs compared as integers."""
    return natsorted(sorted(set(radixes)))
