"""Application service: Generate Invoice use case.

Read-then-render: loads the order, lays it out from its persisted
fields and renders it. Rendering problems never reach the caller; they
degrade the document instead (see RenderDispatcher). Nothing is cached
or stored, so repeated calls for the same order are safe.
"""

from __future__ import annotations

import structlog

from shopcore.application.render_dispatcher import RenderDispatcher
from shopcore.domain.exceptions import EntityNotFoundError
from shopcore.domain.model.invoice import CompanyDetails, InvoiceDocument, InvoiceLayout
from shopcore.domain.model.principal import (
    Principal,
    require_owner_or_admin,
    require_principal,
)
from shopcore.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class GenerateInvoiceHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        dispatcher: RenderDispatcher,
        company: CompanyDetails | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._dispatcher = dispatcher
        self._company = company or CompanyDetails()

    def handle(self, order_id: str, principal: Principal | None) -> InvoiceDocument:
        """Render the invoice for ``order_id``.

        Raises:
            Unauthenticated: no principal.
            EntityNotFoundError: no such order.
            Forbidden: a non-admin asking for someone else's order.
        """
        principal = require_principal(principal)
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        require_owner_or_admin(principal, order.customer_id, f"Order {order_id}")

        layout = InvoiceLayout.from_order(order, self._company)
        content, degraded = self._dispatcher.render(layout)

        logger.info(
            "invoice_generated",
            order_id=order.id,
            order_number=order.order_number,
            degraded=degraded,
            size=len(content),
        )
        return InvoiceDocument(
            order_id=order.id,
            order_number=order.order_number,
            content=content,
            degraded=degraded,
        )
