"""Abstract renderer turning an InvoiceLayout into document bytes."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.invoice import InvoiceLayout


class DocumentRenderer(ABC):

    name: str = "renderer"

    @abstractmethod
    def render(self, layout: InvoiceLayout) -> bytes:
        """Return the finished document. May raise on any failure."""
