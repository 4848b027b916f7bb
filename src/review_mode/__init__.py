"""Top‑level package for Review Mode.

Review Mode is the file-set discovery core of a multi-image comparison
viewer.  Given a handful of images the user already opened side by
side, it infers the naming convention they share, derives one
editable pattern per role ("slot"), then finds and steps through every
other file-set in the same directory that follows the convention.

The implementation is intentionally small and deterministic: the same
directory contents always produce the same sets in the same order,
and ties between candidate files are broken lexicographically.

The public API surface consists of the following key classes and
functions:

* :func:`review_mode.radix.extract_radix` – splits seed filenames into
  a shared radix and per-file remainders.
* :func:`review_mode.patterns.build_pattern_set` – turns remainders
  into one generalized, editable pattern per slot.
* :func:`review_mode.scanner.scan_radixes` – discovers every qualifying
  radix in a directory snapshot.
* :func:`review_mode.resolver.resolve_file_set` – picks one file per
  slot for a radix.
* :class:`review_mode.navigator.ReviewNavigator` – the review session
  state machine used by hosts.
* :class:`review_mode.config_service.ConfigService` – resolves and
  validates the on-disk settings.
* :mod:`review_mode.cli` – a command-line front end for inspecting
  what review mode would find, via ``python -m review_mode.cli``.

Qt hosts can use :class:`review_mode.ui.controller.ReviewController`,
which exposes the navigator through signals and slots.
"""

from .config_service import ConfigService, ReviewSettings  # noqa: F401
from .errors import (  # noqa: F401
    CrossDirectoryError,
    DegenerateInput,
    InsufficientInput,
    InvalidPattern,
    ReviewError,
    ReviewInactive,
    ScanError,
)
from .navigator import ResolvedSet, ReviewNavigator, ReviewSession, ReviewState  # noqa: F401
from .patterns import PatternSet, SlotPattern, build_pattern_set  # noqa: F401
from .radix import extract_radix, natural_order  # noqa: F401
from .resolver import resolve_file, resolve_file_set  # noqa: F401
from .scanner import DirectoryIndex, scan_radixes  # noqa: F401

__version__ = "0.2.0"
