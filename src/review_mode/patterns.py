"""Slot patterns: building, validating and applying them.

A slot pattern is a Python regular expression matched against bare
filenames.  The part of the name captured by the ``radix`` named group
(or, for hand-written patterns without that name, by group 1) is the
radix of the file-set the file belongs to.  Generated patterns look
like::

    ^(?P<radix>.+)_diffuse_[0-9]+k\\.jpg$

Pattern text is what the user sees and edits; :class:`SlotPattern`
keeps the compiled form next to it.  Edits always go through
:func:`compile_pattern`, so a slot can never hold text that does not
compile, and a rejected edit leaves the slot on its previous pattern.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from .errors import InvalidPattern
from .radix import DEFAULT_SEPARATORS, RadixExtraction, derive_label

RADIX_GROUP = "radix"
DIGIT_CLASS = "[0-9]+"

_DIGIT_RUN = re.compile(r"([0-9]+)")


def compile_pattern(slot: int, text: str, last_valid: Optional[str] = None) -> "re.Pattern[str]":
    """Compile user or generated pattern text for ``slot``.

    Raises :class:`InvalidPattern` if the text does not compile or has
    no group that could capture the radix.
    """
    try:
        regex = re.compile(text)
    except re.error as exc:
        raise InvalidPattern(slot, text, str(exc), last_valid) from exc
    if regex.groups == 0:
        raise InvalidPattern(slot, text, "pattern has no group capturing the radix", last_valid)
    return regex


def capture_radix(regex: "re.Pattern[str]", filename: str) -> Optional[str]:
    """Return the radix ``regex`` captures from ``filename``, or ``None``."""
    match = regex.search(filename)
    if match is None:
        return None
    if RADIX_GROUP in regex.groupindex:
        value = match.group(RADIX_GROUP)
    else:
        value = match.group(1)
    return value or None


def _skeleton(remainder: str) -> str:
    return _DIGIT_RUN.sub("\0", remainder)


def pattern_text(remainder: str, generalize_digits: bool = True) -> str:
    """Generated pattern text for one remainder."""
    body = []
    for i, part in enumerate(_DIGIT_RUN.split(remainder)):
        # split() with a capturing group puts digit runs at odd positions
        if i % 2 and generalize_digits:
            body.append(DIGIT_CLASS)
        else:
            body.append(re.escape(part))
    return f"^(?P<{RADIX_GROUP}>.+){''.join(body)}$"


@dataclass(frozen=True)
class SlotPattern:
    """One slot: its seed remainder, display label and current pattern."""

    index: int
    remainder: str
    label: str
    text: str
    regex: "re.Pattern[str]" = field(compare=False, repr=False)

    @classmethod
    def create(cls, index: int, remainder: str, text: str, separators: str = DEFAULT_SEPARATORS) -> "SlotPattern":
        return cls(
            index=index,
            remainder=remainder,
            label=derive_label(remainder, separators),
            text=text,
            regex=compile_pattern(index, text),
        )

    def with_text(self, text: str) -> "SlotPattern":
        """Return this slot with edited pattern text.

        On failure the raised :class:`InvalidPattern` names the current
        text as the slot's last valid pattern.
        """
        if text == self.text:
            return self
        regex = compile_pattern(self.index, text, last_valid=self.text)
        return SlotPattern(self.index, self.remainder, self.label, text, regex)

    def radix_of(self, filename: str) -> Optional[str]:
        return capture_radix(self.regex, filename)


@dataclass(frozen=True)
class PatternSet:
    """Radix template plus one pattern per slot, in slot order."""

    radix: str
    slots: Tuple[SlotPattern, ...]

    @property
    def texts(self) -> Tuple[str, ...]:
        return tuple(slot.text for slot in self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def classify(self, filename: str) -> Optional[Tuple[int, str]]:
        """Return ``(slot index, radix)`` of the slot that claims ``filename``.

        When several slots match, the one leaving the shortest radix
        (the most specific tail) claims the file: with slots ``.jpg``
        and ``_x.jpg``, ``shot_001_x.jpg`` belongs to ``_x.jpg`` as
        ``shot_001`` rather than to ``.jpg`` as ``shot_001_x``.  Equal
        radix lengths go to the lower slot index.
        """
        best: Optional[Tuple[int, str]] = None
        for slot in self.slots:
            radix = slot.radix_of(filename)
            if radix is not None and (best is None or len(radix) < len(best[1])):
                best = (slot.index, radix)
        return best

    def with_texts(self, texts: Sequence[str]) -> "PatternSet":
        """Return a new set with every slot's text replaced.

        The slot count is fixed; a sequence of the wrong length is
        rejected like an invalid pattern.  Nothing is replaced unless
        every text is valid.
        """
        if len(texts) != len(self.slots):
            slot = min(len(texts), len(self.slots))
            raise InvalidPattern(
                slot,
                "",
                f"expected {len(self.slots)} patterns, got {len(texts)}",
                self.slots[slot].text if slot < len(self.slots) else None,
            )
        slots = tuple(slot.with_text(text) for slot, text in zip(self.slots, texts))
        return PatternSet(radix=self.radix, slots=slots)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "radix": self.radix,
            "slots": [
                {"index": s.index, "label": s.label, "remainder": s.remainder, "pattern": s.text}
                for s in self.slots
            ],
        }


def build_pattern_set(
    extraction: RadixExtraction,
    generalize_digits: bool = True,
    separators: str = DEFAULT_SEPARATORS,
) -> PatternSet:
    """Turn an extraction result into one generated pattern per slot.

    Digit runs in a remainder become ``[0-9]+`` unless the slot's
    digit-free skeleton equals another slot's (``_v1.jpg`` and
    ``_v2.jpg``): those slots differ only by their digits, which must
    then stay literal.
    """
    skeletons = [_skeleton(r) for r in extraction.remainders]
    slots = []
    for index, remainder in enumerate(extraction.remainders):
        generalize = generalize_digits and skeletons.count(skeletons[index]) == 1
        text = pattern_text(remainder, generalize_digits=generalize)
        slots.append(SlotPattern.create(index, remainder, text, separators))
    return PatternSet(radix=extraction.radix, slots=tuple(slots))
