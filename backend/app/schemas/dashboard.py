"""
Dashboard schemas - derived views, never persisted.
"""
from pydantic import BaseModel
from decimal import Decimal
from typing import Dict, List
from app.models.movement import MovementStatus


class AggregateStats(BaseModel):
    in_stock_count: int = 0
    rejected_count: int = 0
    shipped_count: int = 0
    total_weight: Decimal = Decimal("0")
    total_value: Decimal = Decimal("0")


class RankedGroup(BaseModel):
    label: str
    count: int


class StatusCounts(BaseModel):
    """One counter per movement status."""

    in_stock: int = 0
    rejected: int = 0
    shipped: int = 0
    returned: int = 0

    def increment(self, status: MovementStatus) -> None:
        name = STATUS_COUNTER_FIELDS[status]
        setattr(self, name, getattr(self, name) + 1)

    @property
    def total(self) -> int:
        return self.in_stock + self.rejected + self.shipped + self.returned


# Every status needs a counter here; a status added to MovementStatus without
# one would otherwise never be tallied.
STATUS_COUNTER_FIELDS: Dict[MovementStatus, str] = {
    MovementStatus.IN_STOCK: "in_stock",
    MovementStatus.REJECTED: "rejected",
    MovementStatus.SHIPPED: "shipped",
    MovementStatus.RETURNED: "returned",
}

_untallied = [s.value for s in MovementStatus if STATUS_COUNTER_FIELDS.get(s) not in StatusCounts.model_fields]
if _untallied:
    raise RuntimeError(f"StatusCounts has no counter for statuses: {', '.join(_untallied)}")


class StatusByDestinationRow(BaseModel):
    destination: str
    in_stock_count: int = 0
    rejected_count: int = 0
    shipped_count: int = 0
    returned_count: int = 0
    total: int = 0

    @classmethod
    def from_counts(cls, destination: str, counts: StatusCounts) -> "StatusByDestinationRow":
        return cls(
            destination=destination,
            in_stock_count=counts.in_stock,
            rejected_count=counts.rejected,
            shipped_count=counts.shipped,
            returned_count=counts.returned,
            total=counts.total,
        )


class StatusShare(BaseModel):
    status: MovementStatus
    count: int


class DashboardSummary(BaseModel):
    stats: AggregateStats
    top_destinations: List[RankedGroup]
    top_products: List[RankedGroup]
    status_by_destination: List[StatusByDestinationRow]
    status_distribution: List[StatusShare]
