"""
Courtside Core Errors - Global Hooks
======================================
Routes exceptions nobody caught into the classifier:

    sys.excepthook              -> action "global_python_error"
    threading.excepthook        -> action "unhandled_thread_error"
    asyncio loop handler        -> action "unhandled_task_exception"

Previous hooks are always chained, so interpreter tracebacks and
asyncio's default reporting still happen. KeyboardInterrupt and
SystemExit are passed through without classification.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from typing import Any, Dict, Optional

from core.errors.classifier import ErrorClassifier
from core.errors.models import FaultContext

logger = logging.getLogger("courtside.errors")


def _route(classifier: ErrorClassifier, exc: Optional[BaseException], action: str) -> None:
    if exc is None or not isinstance(exc, Exception):
        return
    try:
        classifier.handle(exc, FaultContext(action=action))
    except Exception as routing_exc:
        logger.error(f"Global error routing failed ({action}): {routing_exc}", exc_info=True)


class GlobalErrorHandling:
    """Handle returned by install_global_error_handling."""

    def __init__(
        self,
        classifier: ErrorClassifier,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._classifier = classifier
        self._loop = loop
        self._previous_excepthook = None
        self._previous_thread_hook = None
        self._previous_loop_handler = None
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> "GlobalErrorHandling":
        if self._installed:
            return self
        self._previous_excepthook = sys.excepthook
        self._previous_thread_hook = threading.excepthook
        sys.excepthook = self._excepthook
        threading.excepthook = self._thread_excepthook
        if self._loop is not None:
            self._previous_loop_handler = self._loop.get_exception_handler()
            self._loop.set_exception_handler(self._loop_handler)
        self._installed = True
        logger.info("Global error handling installed")
        return self

    def uninstall(self) -> None:
        if not self._installed:
            return
        if sys.excepthook == self._excepthook:
            sys.excepthook = self._previous_excepthook
        if threading.excepthook == self._thread_excepthook:
            threading.excepthook = self._previous_thread_hook
        if self._loop is not None:
            self._loop.set_exception_handler(self._previous_loop_handler)
        self._installed = False

    # ── hooks ─────────────────────────────────────────────────

    def _excepthook(self, exc_type, exc_value, exc_traceback) -> None:
        _route(self._classifier, exc_value, "global_python_error")
        self._previous_excepthook(exc_type, exc_value, exc_traceback)

    def _thread_excepthook(self, args: Any) -> None:
        _route(self._classifier, args.exc_value, "unhandled_thread_error")
        self._previous_thread_hook(args)

    def _loop_handler(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        _route(self._classifier, context.get("exception"), "unhandled_task_exception")
        if self._previous_loop_handler is not None:
            self._previous_loop_handler(loop, context)
        else:
            loop.default_exception_handler(context)


def install_global_error_handling(
    classifier: ErrorClassifier,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> GlobalErrorHandling:
    """Install the hooks and return a handle whose uninstall() restores them."""
    return GlobalErrorHandling(classifier, loop).install()
