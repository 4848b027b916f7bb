from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from PySide6.QtCore import QObject, Signal

from review_mode.errors import InvalidPattern, ReviewError
from review_mode.navigator import ResolvedSet, ReviewNavigator

logger = logging.getLogger(__name__)


class ReviewController(QObject):
    """Signal/slot facade over :class:`ReviewNavigator` for a Qt viewer.

    The viewer supplies ``loaded_files``, a callable returning the paths
    currently shown in its cells, in cell order.  All calls happen on
    the GUI thread and signals are delivered directly.
    """

    activeChanged = Signal(bool)
    patternSetChanged = Signal(object)  # PatternSet
    positionChanged = Signal(int, int)  # index (-1 when there is no current set), total
    resolvedSetChanged = Signal(object, list)  # ResolvedSet, changed slot indices
    patternRejected = Signal(int, str)  # slot, last valid pattern text
    reviewFailed = Signal(str, str)  # error code, message

    def __init__(
        self,
        loaded_files: Callable[[], Sequence[str]],
        navigator: Optional[ReviewNavigator] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._loaded_files = loaded_files
        self._navigator = navigator or ReviewNavigator()

    @property
    def navigator(self) -> ReviewNavigator:
        return self._navigator

    def is_active(self) -> bool:
        return self._navigator.session is not None

    def activate(self) -> bool:
        return self._run(lambda: self._navigator.activate(list(self._loaded_files())))

    def recompute(self) -> bool:
        return self._run(lambda: self._navigator.recompute(list(self._loaded_files())))

    def sync(self) -> bool:
        return self._run(lambda: self._navigator.sync_loaded_files(list(self._loaded_files())))

    def refresh(self, pattern_texts: Optional[List[str]] = None) -> bool:
        return self._run(lambda: self._navigator.refresh(pattern_texts))

    def next(self) -> bool:
        return self._run(self._navigator.next)

    def previous(self) -> bool:
        return self._run(self._navigator.previous)

    def deactivate(self) -> None:
        if not self.is_active():
            return
        self._navigator.deactivate()
        self.activeChanged.emit(False)
        self.positionChanged.emit(-1, 0)

    def _run(self, action: Callable[[], ResolvedSet]) -> bool:
        was_active = self.is_active()
        before = self._navigator.session
        previous = self._navigator.resolved
        try:
            resolved = action()
        except InvalidPattern as exc:
            logger.warning("Rejected pattern edit: %s", exc)
            self.patternRejected.emit(exc.slot, exc.last_valid or "")
            self.reviewFailed.emit(exc.code, str(exc))
            return False
        except ReviewError as exc:
            logger.warning("Review action failed: %s", exc)
            self.reviewFailed.emit(exc.code, str(exc))
            return False
        session = self._navigator.session
        if not was_active:
            self.activeChanged.emit(True)
        if before is None or before.patterns != session.patterns:
            self.patternSetChanged.emit(session.patterns)
        index, total = self._navigator.position
        self.positionChanged.emit(-1 if index is None else index, total)
        self.resolvedSetChanged.emit(resolved, resolved.changed_slots(previous))
        return True
