from .movement import MovementRecord, MovementStatus, HELD_STATUSES, OUTBOUND_STATUSES

__all__ = [
    "MovementRecord",
    "MovementStatus",
    "HELD_STATUSES",
    "OUTBOUND_STATUSES",
]
