from .movement import MovementInput, Movement, MovementRow, ViewColumn
from .dashboard import (
    AggregateStats,
    RankedGroup,
    StatusCounts,
    StatusByDestinationRow,
    StatusShare,
    DashboardSummary,
)
from .insight import InsightStatus, InsightState

__all__ = [
    "MovementInput",
    "Movement",
    "MovementRow",
    "ViewColumn",
    "AggregateStats",
    "RankedGroup",
    "StatusCounts",
    "StatusByDestinationRow",
    "StatusShare",
    "DashboardSummary",
    "InsightStatus",
    "InsightState",
]
