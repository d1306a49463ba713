"""Flat tabular projections used by the admin exports.

Each entity type names its source collection, the relations a chunk
must join to build a row, and the function that flattens one hydrated
record into an export row.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from shopcore.domain.repository.gateway import Record

ExportRecord = dict[str, object]


@dataclass(frozen=True)
class ExportProjection:
    collection: str
    include: tuple[str, ...]
    project: Callable[[Record], ExportRecord]


def _date(value) -> str:
    if not value:
        return "N/A"
    try:
        return datetime.fromisoformat(str(value)).strftime("%Y-%m-%d")
    except ValueError:
        return str(value)


def _address(value) -> dict:
    # Older records kept addresses as JSON strings.
    if isinstance(value, str):
        try:
            value = json.loads(value or "{}")
        except ValueError:
            return {}
    return value if isinstance(value, dict) else {}


def project_order(order: Record) -> ExportRecord:
    customer = order.get("customer") or {}
    shipping = _address(order.get("shipping_address"))
    return {
        "Order ID": order["id"],
        "Order Number": order.get("order_number"),
        "Customer Name": customer.get("name") or "No Name",
        "Customer Email": customer.get("email") or "No Email",
        "Status": order.get("status"),
        "Total": order.get("total"),
        "Subtotal": order.get("subtotal"),
        "Tax": order.get("tax"),
        "Shipping": order.get("shipping"),
        "Discount": order.get("discount"),
        "Items Count": len(order.get("items") or []),
        "Shipping City": shipping.get("city") or "N/A",
        "Shipping Country": shipping.get("country") or "N/A",
        "Notes": order.get("notes") or "No Notes",
        "Created At": _date(order.get("created_at")),
        "Updated At": _date(order.get("updated_at")),
    }


def project_user(user: Record) -> ExportRecord:
    counts = user.get("_count") or {}
    return {
        "User ID": user["id"],
        "Name": user.get("name") or "No Name",
        "Email": user.get("email"),
        "Role": user.get("role"),
        "Orders Count": counts.get("orders", 0),
        "Created At": _date(user.get("created_at")),
        "Updated At": _date(user.get("updated_at")),
    }


def project_category(category: Record) -> ExportRecord:
    counts = category.get("_count") or {}
    return {
        "Category ID": category["id"],
        "Name": category.get("name") or "No Name",
        "Slug": category.get("slug") or "N/A",
        "Description": category.get("description") or "No Description",
        "Parent ID": category.get("parent_id") or "N/A",
        "Products Count": counts.get("products", 0),
        "Subcategories Count": counts.get("children", 0),
        "Created At": _date(category.get("created_at")),
        "Updated At": _date(category.get("updated_at")),
    }


EXPORT_PROJECTIONS: dict[str, ExportProjection] = {
    "orders": ExportProjection(
        collection="orders",
        include=("customer", "items"),
        project=project_order,
    ),
    "users": ExportProjection(
        collection="users",
        include=("_count.orders",),
        project=project_user,
    ),
    "categories": ExportProjection(
        collection="categories",
        include=("_count.products", "_count.children"),
        project=project_category,
    ),
}
