"""
Filter engine - selects the movements a table view displays.
"""
import enum
import logging
from typing import Iterable, List, Optional, Union
from app.config.view_loader import get_view_column_config
from app.models.movement import MovementStatus, HELD_STATUSES, OUTBOUND_STATUSES
from app.schemas.movement import Movement, MovementRow, ViewColumn

logger = logging.getLogger(__name__)

STATUS_FILTER_ALL = "all"


class ViewType(str, enum.Enum):
    DASHBOARD = "dashboard"
    ENTRIES = "entries"
    EXITS = "exits"
    PERFORMANCE = "performance"
    BILLING = "billing"


class DateField(str, enum.Enum):
    INVOICE_DATE = "invoice_date"
    UNLOADING_DATE = "unloading_date"


VIEW_STATUSES = {
    ViewType.ENTRIES: HELD_STATUSES,
    ViewType.EXITS: OUTBOUND_STATUSES,
}


def filter_movements(
    movements: Iterable[Movement],
    view: Optional[ViewType] = None,
    status_filter: Union[MovementStatus, str] = STATUS_FILTER_ALL,
    date_field: Union[DateField, str] = DateField.INVOICE_DATE,
    date_start: Optional[str] = "",
    date_end: Optional[str] = "",
) -> List[Movement]:
    """
    Apply the view, status and date range predicates to ``movements``.

    All predicates must pass; input order is preserved. Dates are ISO
    ``YYYY-MM-DD`` strings compared lexicographically. A movement with an empty
    date is dropped by any active bound and kept when neither bound is set.
    """
    allowed = VIEW_STATUSES.get(view) if view is not None else None
    # Raises ValueError for a name that is not a date field
    date_field = DateField(date_field)
    date_start = date_start or ""
    date_end = date_end or ""

    result = []
    for movement in movements:
        if allowed is not None and movement.status not in allowed:
            continue
        if status_filter != STATUS_FILTER_ALL and movement.status != status_filter:
            continue
        if date_start or date_end:
            value = getattr(movement, date_field.value)
            if not value:
                continue
            if date_start and value < date_start:
                continue
            if date_end and value > date_end:
                continue
        result.append(movement)
    return result


def unit_quantity(movement: Movement) -> int:
    """Held movements count as one unit in the table; outbound ones as zero."""
    return 1 if movement.status in HELD_STATUSES else 0


def to_rows(movements: Iterable[Movement]) -> List[MovementRow]:
    return [MovementRow(**m.model_dump(), quantity=unit_quantity(m)) for m in movements]


def view_columns(view: Optional[ViewType]) -> List[ViewColumn]:
    """Extra columns ``view`` shows next to the base movement columns."""
    if view is None:
        return []
    columns = []
    for cfg in get_view_column_config(view.value):
        field = cfg.get("field")
        if field not in Movement.model_fields:
            logger.warning("Ignoring unknown column %r in %s view config", field, view.value)
            continue
        columns.append(ViewColumn(field=field, label=cfg.get("label") or field))
    return columns
