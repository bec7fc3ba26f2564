"""
Persistence collaborators for the movement store.

Each repository exposes the same load/save pair: ``load()`` returns the stored
movements in store order (newest first) and ``save(movements)`` replaces the
stored collection with the given ordered snapshot.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Union

from sqlalchemy.orm import Session, sessionmaker

from app.models.movement import MovementRecord
from app.schemas.movement import Movement

logger = logging.getLogger(__name__)


class MovementRepository(Protocol):
    def load(self) -> List[Movement]:
        ...

    def save(self, movements: List[Movement]) -> None:
        ...


class MemoryMovementRepository:
    """Keeps the snapshot in process memory."""

    def __init__(self, initial: Optional[Iterable[Movement]] = None):
        self._movements: List[Movement] = list(initial or [])
        self.save_count = 0

    def load(self) -> List[Movement]:
        return list(self._movements)

    def save(self, movements: List[Movement]) -> None:
        self._movements = list(movements)
        self.save_count += 1


class SqlMovementRepository:
    """Stores the snapshot in the ``movements`` table, ordered by ``position``."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def load(self) -> List[Movement]:
        db: Session = self._session_factory()
        try:
            records = db.query(MovementRecord).order_by(MovementRecord.position).all()
            return [Movement.model_validate(record) for record in records]
        finally:
            db.close()

    def save(self, movements: List[Movement]) -> None:
        db: Session = self._session_factory()
        try:
            db.query(MovementRecord).delete()
            db.add_all(
                MovementRecord(position=position, **movement.model_dump())
                for position, movement in enumerate(movements)
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
        logger.debug("Saved %d movements to database", len(movements))


class JsonFileMovementRepository:
    """Stores the snapshot as a JSON list; decimals are kept as strings."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[Movement]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as fh:
            raw = json.load(fh) or []
        return [Movement.model_validate(item) for item in raw]

    def save(self, movements: List[Movement]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [movement.model_dump(mode="json") for movement in movements]
        # Replaced atomically via a sibling temp file
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except Exception:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
