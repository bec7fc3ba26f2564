"""
Aggregation engine - dashboard statistics and groupings over all movements.

Every function recomputes from the collection it is given; nothing is cached.
"""
from collections import Counter
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Sequence
from app.models.movement import MovementStatus, HELD_STATUSES
from app.schemas.dashboard import (
    AggregateStats,
    DashboardSummary,
    RankedGroup,
    StatusByDestinationRow,
    StatusCounts,
    StatusShare,
)
from app.schemas.movement import Movement
from app.services.normalizer import destination_label, product_label

TOP_GROUPS_LIMIT = 5
STATUS_BY_DESTINATION_LIMIT = 6

# Statuses charted in the dashboard status distribution
DISTRIBUTION_STATUSES = (MovementStatus.IN_STOCK, MovementStatus.REJECTED, MovementStatus.SHIPPED)


def compute_stats(movements: Iterable[Movement]) -> AggregateStats:
    counts = Counter()
    total_weight = Decimal("0")
    total_value = Decimal("0")
    for movement in movements:
        counts[movement.status] += 1
        total_weight += movement.weight
        total_value += movement.value
    return AggregateStats(
        in_stock_count=counts[MovementStatus.IN_STOCK],
        rejected_count=counts[MovementStatus.REJECTED],
        shipped_count=counts[MovementStatus.SHIPPED],
        total_weight=total_weight,
        total_value=total_value,
    )


def _rank_held(
    movements: Iterable[Movement],
    label_for: Callable[[Movement], str],
    limit: int,
) -> List[RankedGroup]:
    counts: Dict[str, int] = {}
    for movement in movements:
        if movement.status not in HELD_STATUSES:
            continue
        label = label_for(movement)
        counts[label] = counts.get(label, 0) + 1
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [RankedGroup(label=label, count=count) for label, count in ranked[:limit]]


def top_destinations(movements: Iterable[Movement], limit: int = TOP_GROUPS_LIMIT) -> List[RankedGroup]:
    """Destinations holding the most in-stock or rejected movements."""
    return _rank_held(movements, lambda m: destination_label(m.destination), limit)


def top_products(movements: Iterable[Movement], limit: int = TOP_GROUPS_LIMIT) -> List[RankedGroup]:
    """Products (by description) with the most in-stock or rejected movements."""
    return _rank_held(movements, lambda m: product_label(m.description), limit)


def status_by_destination(
    movements: Iterable[Movement],
    limit: int = STATUS_BY_DESTINATION_LIMIT,
) -> List[StatusByDestinationRow]:
    """Per-destination status counts for the busiest destinations."""
    groups: Dict[str, StatusCounts] = {}
    for movement in movements:
        label = destination_label(movement.destination)
        if label not in groups:
            groups[label] = StatusCounts()
        groups[label].increment(movement.status)
    ranked = sorted(groups.items(), key=lambda item: item[1].total, reverse=True)
    return [StatusByDestinationRow.from_counts(label, counts) for label, counts in ranked[:limit]]


def status_distribution(movements: Iterable[Movement]) -> List[StatusShare]:
    stats = compute_stats(movements)
    counts = {
        MovementStatus.IN_STOCK: stats.in_stock_count,
        MovementStatus.REJECTED: stats.rejected_count,
        MovementStatus.SHIPPED: stats.shipped_count,
    }
    return [StatusShare(status=status, count=counts[status]) for status in DISTRIBUTION_STATUSES]


def build_dashboard(movements: Sequence[Movement]) -> DashboardSummary:
    return DashboardSummary(
        stats=compute_stats(movements),
        top_destinations=top_destinations(movements),
        top_products=top_products(movements),
        status_by_destination=status_by_destination(movements),
        status_distribution=status_distribution(movements),
    )
