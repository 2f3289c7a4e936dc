"""Subscription model — one processor subscription held by an owner."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pay.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


def utcnow() -> datetime:
    """Current time as naive UTC, matching how timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Subscription(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A named subscription slot ("default", "addon", ...) backed by a processor."""

    __tablename__ = "subscriptions"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="default", index=True)

    # Processor identifiers
    processor: Mapped[str] = mapped_column(String(50), nullable=False)
    processor_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    processor_plan: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(nullable=False, default=1)

    # Status-bearing timestamps (naive UTC)
    trial_ends_at: Mapped[datetime | None] = mapped_column(nullable=True)
    ends_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="subscriptions")  # type: ignore[name-defined]  # noqa: F821

    def on_trial(self) -> bool:
        return self.trial_ends_at is not None and utcnow() < as_naive_utc(self.trial_ends_at)

    def cancelled(self) -> bool:
        return self.ends_at is not None

    def on_grace_period(self) -> bool:
        """Cancelled, but still paid up until ``ends_at``."""
        return self.cancelled() and utcnow() < as_naive_utc(self.ends_at)

    def active(self) -> bool:
        return self.ends_at is None or self.on_grace_period() or self.on_trial()

    def __repr__(self) -> str:
        return (
            f"<Subscription(id={self.id}, name={self.name}, processor={self.processor}, "
            f"plan={self.processor_plan})>"
        )
