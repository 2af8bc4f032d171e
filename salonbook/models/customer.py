"""Customer model - a client in the salon's book."""

from sqlalchemy import JSON, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from salonbook.models.base import Base, IdMixin


class CustomerRecord(Base, IdMixin):
    """A salon client with visit, interest and reminder data.

    Timestamps are kept as the ISO strings the book was given rather than
    database-generated values: "now" is always supplied by the caller.

    Reminder history structure (stored in reminder_history JSON):
    [
        {"sent_at": "2026-10-12T10:15:00+05:30", "message": "WhatsApp reminder sent"},
        ...
    ]
    Oldest first; the last entry is the most recent send.
    """

    __tablename__ = "customers"
    # Display numbers are assigned max+1; a concurrent duplicate must fail the insert
    __table_args__ = (Index("ix_customers_customer_id", "customer_id", unique=True),)

    customer_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile_number: Mapped[str] = mapped_column(String(50), nullable=False)
    interest: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    preferences: Mapped[str] = mapped_column(Text, nullable=False, default="")
    visiting_date: Mapped[str] = mapped_column(String(40), nullable=False, default="")
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)

    reminder_interval: Mapped[str] = mapped_column(String(10), nullable=False, default="none")
    reminder_date: Mapped[str | None] = mapped_column(String(10), nullable=True)
    reminder_sent_dates: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    reminder_history: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<CustomerRecord(id={self.id}, customer_id={self.customer_id}, "
            f"name='{self.full_name}', phone='{self.mobile_number}')>"
        )
