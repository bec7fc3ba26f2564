"""
Dashboard API endpoints.
"""
from fastapi import APIRouter, Depends
from app.schemas.dashboard import DashboardSummary
from app.services.aggregation import build_dashboard
from app.services.movement_store import MovementStore, get_movement_store

router = APIRouter()


@router.get("/", response_model=DashboardSummary)
async def get_dashboard(
    store: MovementStore = Depends(get_movement_store)
):
    """Statistics and groupings over every movement."""
    return build_dashboard(store.all())
