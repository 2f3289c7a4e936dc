"""Charge model — a completed payment recorded against an owner."""

import uuid

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pay.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Charge(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Tracks a processor charge and the card it was paid with."""

    __tablename__ = "charges"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    processor: Mapped[str] = mapped_column(String(50), nullable=False)
    processor_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    amount: Mapped[int] = mapped_column(nullable=False)  # in cents
    amount_refunded: Mapped[int | None] = mapped_column(nullable=True)

    card_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    card_last4: Mapped[str | None] = mapped_column(String(4), nullable=True)
    card_exp_month: Mapped[str | None] = mapped_column(String(2), nullable=True)
    card_exp_year: Mapped[str | None] = mapped_column(String(4), nullable=True)

    owner: Mapped["User"] = relationship(back_populates="charges")  # type: ignore[name-defined]  # noqa: F821

    def __repr__(self) -> str:
        return f"<Charge(id={self.id}, processor={self.processor}, amount={self.amount})>"
