from decimal import Decimal
from unittest.mock import patch

import pytest

from app.schemas.movement import MovementInput
from app.services.llm_insights import INSIGHT_ERROR_MESSAGE


@pytest.fixture
def seeded(store):
    # Created oldest first; the store lists newest first
    store.create(MovementInput(invoice_number="1", status="in_stock", destination="Port A",
                               description="Corn", weight=2, invoice_date="2026-01-10"))
    store.create(MovementInput(invoice_number="2", status="shipped", destination="Port B",
                               weight=5, invoice_date="2026-02-10"))
    store.create(MovementInput(invoice_number="3", status="in_stock", destination="Port A",
                               description="Corn", weight=3, invoice_date=""))
    return store


def invoice_numbers(response):
    return [row["invoice_number"] for row in response.json()]


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_create_and_get_movement(client, store):
    response = client.post("/api/movements/", json={
        "invoice_number": "55",
        "weight": "1,250.5",
        "value": "oops",
        "status": "rejected",
        "destination": None,
    })

    assert response.status_code == 201
    body = response.json()
    assert Decimal(body["weight"]) == Decimal("1250.5")
    assert Decimal(body["value"]) == Decimal("0")
    assert body["destination"] == ""
    assert body["id"]

    fetched = client.get(f"/api/movements/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["invoice_number"] == "55"
    assert len(store) == 1


def test_create_rejects_unknown_status(client):
    response = client.post("/api/movements/", json={"status": "lost"})

    assert response.status_code == 422


def test_update_movement(client, seeded):
    target = seeded.all()[1]

    response = client.put(f"/api/movements/{target.id}", json={"invoice_number": "2b", "status": "returned"})

    assert response.status_code == 200
    assert response.json()["status"] == "returned"
    assert [m.invoice_number for m in seeded.all()] == ["3", "2b", "1"]


def test_delete_movement(client, seeded):
    target = seeded.all()[0]

    response = client.delete(f"/api/movements/{target.id}")

    assert response.status_code == 204
    assert len(seeded) == 2


def test_missing_movement_returns_404(client):
    assert client.get("/api/movements/missing").status_code == 404
    assert client.put("/api/movements/missing", json={}).status_code == 404
    assert client.delete("/api/movements/missing").status_code == 404


def test_list_movements_newest_first_with_quantity(client, seeded):
    response = client.get("/api/movements/")

    assert response.status_code == 200
    assert invoice_numbers(response) == ["3", "2", "1"]
    assert [row["quantity"] for row in response.json()] == [1, 0, 1]


def test_list_movements_by_view(client, seeded):
    assert invoice_numbers(client.get("/api/movements/", params={"view": "entries"})) == ["3", "1"]
    assert invoice_numbers(client.get("/api/movements/", params={"view": "exits"})) == ["2"]


def test_list_movements_by_status_and_dates(client, seeded):
    response = client.get("/api/movements/", params={
        "status": "in_stock",
        "date_field": "invoice_date",
        "date_start": "2026-01-01",
    })

    assert invoice_numbers(response) == ["1"]


def test_list_movements_rejects_bad_filters(client, seeded):
    assert client.get("/api/movements/", params={"status": "lost"}).status_code == 422
    assert client.get("/api/movements/", params={"view": "nowhere"}).status_code == 422


def test_view_columns_endpoint(client):
    response = client.get("/api/movements/columns", params={"view": "performance"})

    assert response.status_code == 200
    assert [c["field"] for c in response.json()] == ["arrival_time", "entry_time", "exit_time"]


def test_export_endpoint(client, seeded):
    response = client.get("/api/movements/export", params={"view": "entries"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert response.content[:2] == b"PK"


def test_dashboard(client, seeded):
    response = client.get("/api/dashboard/")

    assert response.status_code == 200
    body = response.json()
    assert body["stats"]["in_stock_count"] == 2
    assert body["stats"]["shipped_count"] == 1
    assert Decimal(body["stats"]["total_weight"]) == Decimal("10")
    assert body["top_destinations"] == [{"label": "Port A", "count": 2}]
    assert body["top_products"] == [{"label": "Corn", "count": 2}]
    assert [row["destination"] for row in body["status_by_destination"]] == ["Port A", "Port B"]


def test_insight_flow(client, seeded, fake_openai_client):
    assert client.get("/api/insights/").json()["status"] == "idle"

    with patch("app.services.llm_insights.get_openai_client", return_value=fake_openai_client("All good.")):
        response = client.post("/api/insights/")

    assert response.status_code == 200
    assert response.json() == {"status": "completed", "text": "All good.", "is_error": False}

    dismissed = client.delete("/api/insights/")
    assert dismissed.json()["status"] == "idle"


def test_insight_failure_returns_fallback(client, seeded, fake_openai_client):
    client_error = fake_openai_client(error=RuntimeError("invalid api key"))
    with patch("app.services.llm_insights.get_openai_client", return_value=client_error):
        response = client.post("/api/insights/")

    assert response.status_code == 200
    assert response.json()["text"] == INSIGHT_ERROR_MESSAGE
    assert response.json()["is_error"] is True


def test_insight_refused_while_pending(client, insight_task):
    insight_task.try_start()

    response = client.post("/api/insights/")

    assert response.status_code == 409
    assert insight_task.is_pending


def test_failed_save_maps_to_500_and_keeps_movements(client, seeded, repository):
    before = seeded.all()
    target = before[0]

    with patch.object(repository, "save", side_effect=RuntimeError("disk full")):
        created = client.post("/api/movements/", json={"invoice_number": "9"})
        updated = client.put(f"/api/movements/{target.id}", json={"invoice_number": "X"})
        deleted = client.delete(f"/api/movements/{target.id}")

    assert created.status_code == 500
    assert "disk full" in created.json()["detail"]
    assert updated.status_code == 500
    assert deleted.status_code == 500
    assert seeded.all() == before
    assert invoice_numbers(client.get("/api/movements/")) == ["3", "2", "1"]
