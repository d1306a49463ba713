"""Primary-then-fallback document rendering.

The primary renderer runs on a daemon thread with a bounded wait. Any
exception, or running past the timeout, counts as a render failure: it
is logged and the fallback renderer's output is returned instead. A
render that never finishes is abandoned; being a daemon thread, it
cannot keep the process alive. The fallback is expected not to fail; if
it does, that is a bug and it propagates.
"""

from __future__ import annotations

import queue
import threading

import structlog

from shopcore.domain.exceptions import RenderFailed
from shopcore.domain.model.invoice import InvoiceLayout
from shopcore.domain.service.document_renderer import DocumentRenderer

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0


class RenderDispatcher:

    def __init__(
        self,
        primary: DocumentRenderer,
        fallback: DocumentRenderer,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._timeout = timeout_seconds

    def render(self, layout: InvoiceLayout) -> tuple[bytes, bool]:
        """Return ``(content, degraded)``."""
        try:
            return self._render_primary(layout), False
        except RenderFailed as exc:
            logger.warning(
                "invoice_render_degraded",
                order_number=layout.order_number,
                renderer=self._primary.name,
                reason=str(exc),
            )
        return self._fallback.render(layout), True

    def _render_primary(self, layout: InvoiceLayout) -> bytes:
        outcome: queue.Queue = queue.Queue(maxsize=1)

        def run() -> None:
            try:
                outcome.put((True, self._primary.render(layout)))
            except Exception as exc:
                outcome.put((False, exc))

        worker = threading.Thread(target=run, name="invoice-render", daemon=True)
        worker.start()
        try:
            ok, value = outcome.get(timeout=self._timeout)
        except queue.Empty:
            raise RenderFailed(f"timed out after {self._timeout}s") from None

        if not ok:
            raise RenderFailed(f"{type(value).__name__}: {value}") from value
        if not value:
            raise RenderFailed("renderer returned an empty document")
        return value
