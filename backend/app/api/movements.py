"""
Movement API endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import FileResponse
from typing import List, Optional, Union
from app.models.movement import MovementStatus
from app.schemas.movement import Movement, MovementInput, MovementRow, ViewColumn
from app.services.excel_export import generate_movements_workbook
from app.services.filter_engine import (
    STATUS_FILTER_ALL,
    DateField,
    ViewType,
    filter_movements,
    to_rows,
    view_columns,
)
from app.services.movement_store import MovementNotFound, MovementStore, get_movement_store

logger = logging.getLogger(__name__)
router = APIRouter()


def parse_status_filter(value: str) -> Union[MovementStatus, str]:
    if value == STATUS_FILTER_ALL:
        return STATUS_FILTER_ALL
    try:
        return MovementStatus(value)
    except ValueError:
        allowed = ", ".join([STATUS_FILTER_ALL] + [s.value for s in MovementStatus])
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown status filter '{value}'. Expected one of: {allowed}"
        )


def _filtered(
    store: MovementStore,
    view: Optional[ViewType],
    status_filter: str,
    date_field: DateField,
    date_start: str,
    date_end: str,
) -> List[Movement]:
    return filter_movements(
        store.all(),
        view=view,
        status_filter=parse_status_filter(status_filter),
        date_field=date_field,
        date_start=date_start,
        date_end=date_end,
    )


@router.get("/", response_model=List[MovementRow])
async def list_movements(
    view: Optional[ViewType] = None,
    status_filter: str = Query(STATUS_FILTER_ALL, alias="status"),
    date_field: DateField = DateField.INVOICE_DATE,
    date_start: str = "",
    date_end: str = "",
    store: MovementStore = Depends(get_movement_store)
):
    """List movements for a table view, newest first."""
    movements = _filtered(store, view, status_filter, date_field, date_start, date_end)
    return to_rows(movements)


@router.get("/columns", response_model=List[ViewColumn])
async def get_view_columns(view: ViewType):
    """Extra columns shown by a table view."""
    return view_columns(view)


@router.get("/export")
async def export_movements(
    view: Optional[ViewType] = None,
    status_filter: str = Query(STATUS_FILTER_ALL, alias="status"),
    date_field: DateField = DateField.INVOICE_DATE,
    date_start: str = "",
    date_end: str = "",
    store: MovementStore = Depends(get_movement_store)
):
    """Download the filtered table view as an Excel workbook."""
    movements = _filtered(store, view, status_filter, date_field, date_start, date_end)
    try:
        file_path = generate_movements_workbook(movements, view)
        return FileResponse(
            file_path,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            filename=f"movements_{view.value if view else 'all'}.xlsx"
        )
    except Exception as e:
        logger.exception("Error generating movements export")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error generating Excel export: {str(e)}"
        )


@router.get("/{movement_id}", response_model=Movement)
async def get_movement(
    movement_id: str,
    store: MovementStore = Depends(get_movement_store)
):
    """Get a specific movement."""
    try:
        return store.get(movement_id)
    except MovementNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/", response_model=Movement, status_code=status.HTTP_201_CREATED)
async def create_movement(
    movement_data: MovementInput,
    store: MovementStore = Depends(get_movement_store)
):
    """Create a new movement."""
    try:
        return store.create(movement_data)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save movement: {str(e)}"
        )


@router.put("/{movement_id}", response_model=Movement)
async def update_movement(
    movement_id: str,
    movement_data: MovementInput,
    store: MovementStore = Depends(get_movement_store)
):
    """Replace every field of an existing movement."""
    try:
        return store.update(movement_id, movement_data)
    except MovementNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save movement: {str(e)}"
        )


@router.delete("/{movement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_movement(
    movement_id: str,
    store: MovementStore = Depends(get_movement_store)
):
    """Delete a movement. Clients confirm with the user before calling this."""
    try:
        store.delete(movement_id)
    except MovementNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete movement: {str(e)}"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
