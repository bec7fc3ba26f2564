"""
Excel export service.
"""
import logging
import time
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional, Sequence
import pandas as pd
from app.db.database import settings
from app.schemas.movement import Movement
from app.services.aggregation import compute_stats, top_destinations, top_products
from app.services.filter_engine import ViewType, unit_quantity, view_columns

logger = logging.getLogger(__name__)

BASE_COLUMNS = [
    ("invoice_number", "Invoice"),
    ("description", "Description"),
    ("access_key", "Access Key"),
    ("supplier", "Supplier"),
    ("destination", "Destination"),
    ("plate", "Plate"),
    ("container", "Container"),
    ("invoice_date", "Invoice Date"),
    ("unloading_date", "Unloading Date"),
    ("weight", "Weight (t)"),
    ("value", "Value"),
]


def _cell(value):
    return float(value) if isinstance(value, Decimal) else value


def generate_movements_workbook(
    movements: Sequence[Movement],
    view: Optional[ViewType] = None,
    path: Optional[str] = None,
) -> str:
    """
    Generate Excel workbook for a table view with sheets:
    - Movements (base columns, the view's extra columns, quantity and status)
    - Summary
    - By Destination / By Product (when there is held stock)
    """
    start_time = time.perf_counter()
    if path:
        file_path = Path(path)
    else:
        export_dir = Path(settings.export_dir)
        export_dir.mkdir(parents=True, exist_ok=True)
        view_name = view.value if view else "all"
        file_path = export_dir / f"movements_{view_name}_{datetime.now():%Y%m%d_%H%M%S}.xlsx"

    columns = BASE_COLUMNS + [(col.field, col.label) for col in view_columns(view)]
    headers = [label for _, label in columns] + ["Quantity", "Status"]
    rows = []
    for m in movements:
        row = {label: _cell(getattr(m, field)) for field, label in columns}
        row["Quantity"] = unit_quantity(m)
        row["Status"] = m.status.value
        rows.append(row)

    stats = compute_stats(movements)
    with pd.ExcelWriter(file_path, engine="openpyxl") as writer:
        pd.DataFrame(rows, columns=headers).to_excel(writer, sheet_name="Movements", index=False)

        summary_data = {
            "Metric": [
                "Movements",
                "In Stock",
                "Rejected",
                "Shipped",
                "Total Weight (t)",
                "Total Value",
            ],
            "Value": [
                len(movements),
                stats.in_stock_count,
                stats.rejected_count,
                stats.shipped_count,
                float(stats.total_weight),
                float(stats.total_value),
            ],
        }
        pd.DataFrame(summary_data).to_excel(writer, sheet_name="Summary", index=False)

        destinations = top_destinations(movements)
        if destinations:
            pd.DataFrame(
                [{"Destination": g.label, "Count": g.count} for g in destinations]
            ).to_excel(writer, sheet_name="By Destination", index=False)

        products = top_products(movements)
        if products:
            pd.DataFrame(
                [{"Product": g.label, "Count": g.count} for g in products]
            ).to_excel(writer, sheet_name="By Product", index=False)

    duration = round(time.perf_counter() - start_time, 3)
    logger.info("Exported %d movements to %s in %.2fs", len(movements), file_path, duration)
    return str(file_path)
