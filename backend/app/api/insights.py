"""
Insight API endpoints (LLM summary of the movements).
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from app.schemas.insight import InsightState
from app.services.llm_insights import InsightTask, get_insight_task, run_insight
from app.services.movement_store import MovementStore, get_movement_store

router = APIRouter()


@router.post("/", response_model=InsightState)
async def create_insight(
    store: MovementStore = Depends(get_movement_store),
    task: InsightTask = Depends(get_insight_task)
):
    """Generate an executive summary of the current movements."""
    if not task.try_start():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An insight is already being generated"
        )
    return await run_in_threadpool(run_insight, task, store.all())


@router.get("/", response_model=InsightState)
async def get_insight(task: InsightTask = Depends(get_insight_task)):
    """Current insight state."""
    return task.snapshot()


@router.delete("/", response_model=InsightState)
async def dismiss_insight(task: InsightTask = Depends(get_insight_task)):
    """Dismiss the displayed insight."""
    task.dismiss()
    return task.snapshot()
