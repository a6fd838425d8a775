"""
Courtside Core Errors - Presenter Capability
==============================================
The classifier never touches a UI toolkit. It calls a Presenter,
and whatever UI layer hosts the core implements one.

Messages passed to a presenter are plain user-facing strings.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Deque, Optional, Protocol, Tuple

logger = logging.getLogger("courtside.presenter")


class ToastLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    BLOCKING = "blocking"


class Presenter(Protocol):
    def show_modal(self, message: str) -> None:
        """Critical takeover that needs explicit acknowledgment."""
        ...  # pragma: no cover

    def show_toast(self, level: ToastLevel, message: str) -> None:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class LoggingPresenter:
    """Presenter for headless processes (workers, scripts)."""

    _LEVELS = {
        ToastLevel.INFO: logging.INFO,
        ToastLevel.WARNING: logging.WARNING,
        ToastLevel.BLOCKING: logging.ERROR,
    }

    def show_modal(self, message: str) -> None:
        logger.critical(f"[MODAL] {message}")

    def show_toast(self, level: ToastLevel, message: str) -> None:
        logger.log(self._LEVELS[level], f"[TOAST {level.value.upper()}] {message}")


@dataclass(frozen=True)
class Presentation:
    """One queued presentation call."""

    surface: str  # "modal" | "toast"
    message: str
    level: Optional[ToastLevel] = None

    def to_dict(self) -> dict:
        return {
            "surface": self.surface,
            "level": self.level.value if self.level else None,
            "message": self.message,
        }


class BufferedPresenter:
    """
    Queues presentations until a UI drains them.

    The browser console polls the drain endpoint; tests read
    `presentations` directly.
    """

    def __init__(self, max_pending: int = 200) -> None:
        if max_pending < 1:
            raise ValueError("max_pending must be >= 1.")
        self._pending: Deque[Presentation] = deque(maxlen=max_pending)
        self._lock = Lock()

    def show_modal(self, message: str) -> None:
        self._push(Presentation(surface="modal", message=message))

    def show_toast(self, level: ToastLevel, message: str) -> None:
        self._push(Presentation(surface="toast", message=message, level=level))

    def _push(self, presentation: Presentation) -> None:
        with self._lock:
            self._pending.append(presentation)

    @property
    def presentations(self) -> Tuple[Presentation, ...]:
        with self._lock:
            return tuple(self._pending)

    def drain(self) -> Tuple[Presentation, ...]:
        with self._lock:
            drained = tuple(self._pending)
            self._pending.clear()
            return drained
