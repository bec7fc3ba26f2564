"""
Movement store - the canonical ordered collection of movements.
"""
import logging
import threading
import uuid
from datetime import datetime
from typing import List, Optional
from app.db.database import SessionLocal
from app.db.repository import MovementRepository, SqlMovementRepository
from app.schemas.movement import Movement, MovementInput

logger = logging.getLogger(__name__)

_store = None
_store_lock = threading.Lock()


class MovementNotFound(LookupError):
    def __init__(self, movement_id: str):
        super().__init__(f"Movement {movement_id} not found")
        self.movement_id = movement_id


def current_month_label(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%B")


class MovementStore:
    """
    Owns the movements, newest first.

    Every mutation saves the full ordered snapshot through the repository; if
    the save fails the in-memory collection is restored and the error raised.
    """

    def __init__(self, repository: MovementRepository):
        self._repository = repository
        self._movements: List[Movement] = list(repository.load())
        logger.info("Loaded %d movements", len(self._movements))

    def __len__(self) -> int:
        return len(self._movements)

    def all(self) -> List[Movement]:
        return list(self._movements)

    def get(self, movement_id: str) -> Movement:
        return self._movements[self._index_of(movement_id)]

    def create(self, data: MovementInput) -> Movement:
        fields = data.model_dump()
        if not fields["month"]:
            fields["month"] = current_month_label()
        movement = Movement(id=self._new_id(), **fields)
        self._commit([movement] + self._movements)
        logger.info("Created movement %s (%s)", movement.id, movement.status.value)
        return movement

    def update(self, movement_id: str, data: MovementInput) -> Movement:
        index = self._index_of(movement_id)
        movement = Movement(id=movement_id, **data.model_dump())
        movements = list(self._movements)
        movements[index] = movement
        self._commit(movements)
        logger.info("Updated movement %s (%s)", movement_id, movement.status.value)
        return movement

    def delete(self, movement_id: str) -> None:
        index = self._index_of(movement_id)
        movements = list(self._movements)
        del movements[index]
        self._commit(movements)
        logger.info("Deleted movement %s", movement_id)

    def _index_of(self, movement_id: str) -> int:
        for index, movement in enumerate(self._movements):
            if movement.id == movement_id:
                return index
        raise MovementNotFound(movement_id)

    def _new_id(self) -> str:
        existing = {m.id for m in self._movements}
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in existing:
                return candidate

    def _commit(self, movements: List[Movement]) -> None:
        previous = self._movements
        self._movements = movements
        try:
            self._repository.save(list(movements))
        except Exception:
            self._movements = previous
            logger.exception("Failed to save movements; changes rolled back")
            raise


def get_movement_store() -> MovementStore:
    """Get or initialize the database-backed store lazily."""
    global _store
    # Sync dependency: FastAPI resolves it on threadpool workers
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = MovementStore(SqlMovementRepository(SessionLocal))
    return _store
