"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from shopcore.application.export_collection import BulkExportHandler
from shopcore.application.generate_invoice import GenerateInvoiceHandler
from shopcore.application.render_dispatcher import RenderDispatcher
from shopcore.domain.model.invoice import CompanyDetails
from shopcore.infrastructure.config import Settings, get_settings
from shopcore.infrastructure.persistence.gateway_order_repository import (
    GatewayOrderRepository,
)
from shopcore.infrastructure.persistence.json_cart_store import cart_store_factory
from shopcore.infrastructure.persistence.json_gateway import JsonFileGateway
from shopcore.infrastructure.rendering.fallback_renderer import MinimalPdfRenderer
from shopcore.infrastructure.rendering.reportlab_renderer import ReportlabInvoiceRenderer


def gateway(settings: Settings | None = None) -> JsonFileGateway:
    settings = settings or get_settings()
    return JsonFileGateway(settings.store_path)


def order_repository(settings: Settings | None = None) -> GatewayOrderRepository:
    return GatewayOrderRepository(gateway(settings))


def cart_stores(settings: Settings | None = None):
    settings = settings or get_settings()
    return cart_store_factory(settings.carts_dir)


def export_handler(settings: Settings | None = None) -> BulkExportHandler:
    settings = settings or get_settings()
    return BulkExportHandler(
        gateway(settings),
        size_ceiling=settings.export_size_ceiling,
        chunk_size=settings.export_chunk_size,
    )


def invoice_handler(settings: Settings | None = None) -> GenerateInvoiceHandler:
    settings = settings or get_settings()
    dispatcher = RenderDispatcher(
        primary=ReportlabInvoiceRenderer(),
        fallback=MinimalPdfRenderer(),
        timeout_seconds=settings.invoice_render_timeout_seconds,
    )
    company = CompanyDetails(
        name=settings.company_name,
        email=settings.company_email,
        support_email=settings.company_support_email,
    )
    return GenerateInvoiceHandler(order_repository(settings), dispatcher, company)
