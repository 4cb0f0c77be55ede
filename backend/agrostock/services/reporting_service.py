# Overview: Service-layer read models for the dashboard and the AI summary snapshot.

from __future__ import annotations

from .intake_service import count_pending_entries
from .inventory_service import list_low_stock_products, list_products
from .sales_service import get_sales_totals, list_sales
from .supplier_service import count_active_suppliers


def get_dashboard_stats() -> dict:
    """
    Headline figures for the dashboard.

    Returns:
        {
            "total_revenue": Decimal,
            "total_revenue_cents": int,
            "low_stock_count": int,
            "pending_approvals": int,
            "active_suppliers": int,
        }
    """
    totals = get_sales_totals()
    return {
        "total_revenue": totals["revenue"],
        "total_revenue_cents": totals["revenue_cents"],
        "low_stock_count": len(list_low_stock_products()),
        "pending_approvals": count_pending_entries(),
        "active_suppliers": count_active_suppliers(),
    }


def build_summary_snapshot() -> tuple[list[dict], list[dict]]:
    """Products and sales as plain JSON-serialisable dicts, for the AI summary."""
    products = [product.to_dict() for product in list_products()]
    sales = [sale.to_dict() for sale in list_sales()]
    return products, sales
