"""
Movement model - one inbound/outbound shipment record.
"""
from sqlalchemy import Column, String, Integer, Numeric, Enum as SQLEnum
import enum
from app.db.database import Base


class MovementStatus(str, enum.Enum):
    IN_STOCK = "in_stock"
    REJECTED = "rejected"
    SHIPPED = "shipped"
    RETURNED = "returned"


# Held inventory shows up in the entries view and in stock groupings
HELD_STATUSES = frozenset({MovementStatus.IN_STOCK, MovementStatus.REJECTED})
OUTBOUND_STATUSES = frozenset({MovementStatus.SHIPPED, MovementStatus.RETURNED})

# Numeric(precision, scale) of the amount columns
WEIGHT_PRECISION, WEIGHT_SCALE = 12, 3
VALUE_PRECISION, VALUE_SCALE = 14, 2


class MovementRecord(Base):
    __tablename__ = "movements"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, index=True)  # 0 = newest
    status = Column(
        SQLEnum(
            MovementStatus,
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=MovementStatus.IN_STOCK.value,
    )

    # Entry
    month = Column(String, nullable=False, default="")
    invoice_number = Column(String, nullable=False, default="")
    access_key = Column(String, nullable=False, default="")
    weight = Column(Numeric(WEIGHT_PRECISION, WEIGHT_SCALE), nullable=False, default=0)  # tonnes
    value = Column(Numeric(VALUE_PRECISION, VALUE_SCALE), nullable=False, default=0)
    description = Column(String, nullable=False, default="")
    supplier = Column(String, nullable=False, default="")
    invoice_date = Column(String, nullable=False, default="")  # YYYY-MM-DD
    unloading_date = Column(String, nullable=False, default="")
    plate = Column(String, nullable=False, default="")
    container = Column(String, nullable=False, default="")
    destination = Column(String, nullable=False, default="")

    # Exit
    exit_billing_date = Column(String, nullable=False, default="")
    exit_cte = Column(String, nullable=False, default="")

    # Performance (HH:MM)
    arrival_time = Column(String, nullable=False, default="")
    entry_time = Column(String, nullable=False, default="")
    exit_time = Column(String, nullable=False, default="")

    # Billing
    billing_issue_date = Column(String, nullable=False, default="")
    billing_cte = Column(String, nullable=False, default="")
    billing_cte_issue_date = Column(String, nullable=False, default="")
    carrier_cte = Column(String, nullable=False, default="")
