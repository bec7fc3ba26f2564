import pandas as pd

from app.models.movement import MovementStatus
from app.services.excel_export import generate_movements_workbook
from app.services.filter_engine import ViewType


def test_workbook_contains_view_columns_and_summary(tmp_path, make_movement):
    movements = [
        make_movement(status=MovementStatus.IN_STOCK, invoice_number="10", destination="Port A",
                      weight="2.5", arrival_time="07:45"),
        make_movement(status=MovementStatus.SHIPPED, invoice_number="11", weight=4),
    ]

    path = generate_movements_workbook(movements, ViewType.PERFORMANCE, path=tmp_path / "perf.xlsx")
    sheets = pd.read_excel(path, sheet_name=None)

    assert set(sheets) == {"Movements", "Summary", "By Destination", "By Product"}
    table = sheets["Movements"]
    assert list(table.columns[-5:]) == ["Arrival", "Entry", "Exit", "Quantity", "Status"]
    assert table["Quantity"].tolist() == [1, 0]
    assert table["Weight (t)"].tolist() == [2.5, 4.0]

    summary = dict(zip(sheets["Summary"]["Metric"], sheets["Summary"]["Value"]))
    assert summary["Movements"] == 2
    assert summary["Total Weight (t)"] == 6.5
    assert sheets["By Destination"]["Destination"].tolist() == ["Port A"]


def test_workbook_for_empty_view(tmp_path):
    path = generate_movements_workbook([], ViewType.EXITS, path=tmp_path / "empty.xlsx")
    sheets = pd.read_excel(path, sheet_name=None)

    assert set(sheets) == {"Movements", "Summary"}
    assert sheets["Movements"].empty
