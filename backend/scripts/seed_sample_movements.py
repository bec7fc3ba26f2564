"""
Script to seed the database with sample movements for testing.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from app.db.database import SessionLocal, engine, Base
from app.db.repository import SqlMovementRepository
from app.models import MovementStatus
from app.schemas.movement import MovementInput
from app.services.movement_store import MovementStore

SAMPLE_MOVEMENTS = [
    {"invoice_number": "1001", "description": "Soybean", "supplier": "Agro Norte", "destination": "Port A",
     "weight": "32.5", "value": "48000", "invoice_date": "2026-09-01", "unloading_date": "2026-09-03",
     "status": MovementStatus.IN_STOCK},
    {"invoice_number": "1002", "description": "Corn", "supplier": "Agro Norte", "destination": "Port B",
     "weight": "28", "value": "21000", "invoice_date": "2026-09-04", "unloading_date": "2026-09-05",
     "status": MovementStatus.REJECTED},
    {"invoice_number": "1003", "description": "Soybean", "supplier": "Cerrado Grains", "destination": "Port A",
     "weight": "30", "value": "45500", "invoice_date": "2026-09-08", "unloading_date": "2026-09-09",
     "status": MovementStatus.SHIPPED, "exit_billing_date": "2026-09-15", "exit_cte": "CTE-77"},
    {"invoice_number": "1004", "description": "Cotton", "supplier": "Cerrado Grains", "destination": "",
     "weight": "12.75", "value": "30100", "invoice_date": "2026-09-10", "unloading_date": "",
     "status": MovementStatus.RETURNED},
]


def seed_sample_movements():
    Base.metadata.create_all(bind=engine)
    try:
        store = MovementStore(SqlMovementRepository(SessionLocal))
        if len(store):
            print(f"Database already holds {len(store)} movements; skipping seed")
            return

        # Oldest first, since the store prepends
        for data in SAMPLE_MOVEMENTS:
            movement = store.create(MovementInput(**data))
            print(f"Created movement: {movement.invoice_number} (ID: {movement.id})")
    except Exception as e:
        print(f"Error: {e}")
        raise

if __name__ == "__main__":
    seed_sample_movements()
