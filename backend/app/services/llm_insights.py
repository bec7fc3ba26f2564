"""
LLM integration for dashboard insights.
"""
import os
import time
import threading
import logging
from typing import Iterable, List, Optional, Sequence
from openai import OpenAI
from app.schemas.insight import InsightState, InsightStatus
from app.schemas.movement import Movement

# Lazy initialization of OpenAI client
_openai_client = None
_insight_task = None
_insight_task_lock = threading.Lock()
logger = logging.getLogger(__name__)

NO_INSIGHT_MESSAGE = "No insights could be generated right now."
INSIGHT_ERROR_MESSAGE = "Error connecting to the AI service. Check your API key."


class InsightServiceError(Exception):
    """The summarization service could not produce a summary."""


def get_openai_client():
    """Get or initialize OpenAI client lazily."""
    global _openai_client
    if _openai_client is None:
        openai_api_key = os.getenv("OPENAI_API_KEY")
        if openai_api_key:
            try:
                _openai_client = OpenAI(api_key=openai_api_key)
            except Exception as e:
                # Log error but don't crash the app
                logger.warning("Failed to initialize OpenAI client: %s", e)
                _openai_client = False  # Use False to indicate initialization failed
    return _openai_client if _openai_client is not False else None


def distinct_suppliers(movements: Iterable[Movement]) -> List[str]:
    seen = []
    for movement in movements:
        if movement.supplier and movement.supplier not in seen:
            seen.append(movement.supplier)
    return seen


def build_insight_prompt(movements: Sequence[Movement]) -> str:
    statuses = ", ".join(m.status.value for m in movements)
    suppliers = ", ".join(distinct_suppliers(movements))
    return f"""Analyze the following inventory and logistics data and write a 3-sentence executive summary.

Total records: {len(movements)}.
Statuses: {statuses or 'none'}.
Suppliers: {suppliers or 'none'}.

Focus on performance bottlenecks and stock levels."""


def generate_insight(movements: Sequence[Movement], client=None) -> str:
    """
    Ask the model for a short executive summary of ``movements``.

    Raises InsightServiceError when the client is missing or the call fails.
    """
    client = client or get_openai_client()
    if not client:
        raise InsightServiceError("OpenAI API key not configured. Please set OPENAI_API_KEY.")

    start_time = time.perf_counter()
    prompt = build_insight_prompt(movements)
    try:
        response = client.chat.completions.create(
            model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            messages=[
                {"role": "system", "content": "You are a logistics analyst who writes concise, data-backed executive summaries."},
                {"role": "user", "content": prompt},
            ],
            temperature=0.4,
            max_tokens=300,
        )
        content = response.choices[0].message.content
    except Exception as e:
        raise InsightServiceError(str(e)) from e

    duration = round(time.perf_counter() - start_time, 3)
    logger.info("Generated insight for %d movements in %.2fs", len(movements), duration)
    return (content or "").strip() or NO_INSIGHT_MESSAGE


class InsightTask:
    """
    Tracks the single summarization request: idle, pending, or completed.

    Only one request may be pending at a time. There is no cancellation; a
    completed result stays until dismissed or replaced by the next request.
    """

    def __init__(self):
        self.status = InsightStatus.IDLE
        self.text: Optional[str] = None
        self.is_error = False

    @property
    def is_pending(self) -> bool:
        return self.status == InsightStatus.PENDING

    def try_start(self) -> bool:
        if self.is_pending:
            return False
        self.status = InsightStatus.PENDING
        self.text = None
        self.is_error = False
        return True

    def complete(self, text: str) -> None:
        self.status = InsightStatus.COMPLETED
        self.text = text
        self.is_error = False

    def fail(self, message: str) -> None:
        self.status = InsightStatus.COMPLETED
        self.text = message
        self.is_error = True

    def dismiss(self) -> None:
        if self.is_pending:
            return
        self.status = InsightStatus.IDLE
        self.text = None
        self.is_error = False

    def snapshot(self) -> InsightState:
        return InsightState(status=self.status, text=self.text, is_error=self.is_error)


def run_insight(task: InsightTask, movements: Sequence[Movement], client=None) -> InsightState:
    """
    Run one summarization through ``task``; the caller must have started it.

    Failures are logged and replaced by INSIGHT_ERROR_MESSAGE, never raised.
    """
    try:
        task.complete(generate_insight(movements, client=client))
    except InsightServiceError as e:
        logger.warning("Insight generation failed: %s", e)
        task.fail(INSIGHT_ERROR_MESSAGE)
    finally:
        if task.is_pending:
            task.fail(INSIGHT_ERROR_MESSAGE)
    return task.snapshot()


def get_insight_task() -> InsightTask:
    global _insight_task
    if _insight_task is None:
        with _insight_task_lock:
            if _insight_task is None:
                _insight_task = InsightTask()
    return _insight_task
