"""User model — the default billable owner."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pay.database import Base, TimestampMixin, UUIDPrimaryKeyMixin
from pay.models.billable import BillableMixin


class User(BillableMixin, UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Account that owns subscriptions and charges."""

    __tablename__ = "users"

    email: Mapped[str | None] = mapped_column(String(255), unique=True, index=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships (oldest first, so the last entry is the most recent)
    subscriptions: Mapped[list["Subscription"]] = relationship(  # noqa: F821
        "Subscription",
        back_populates="owner",
        order_by="Subscription.created_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    charges: Mapped[list["Charge"]] = relationship(  # noqa: F821
        "Charge",
        back_populates="owner",
        order_by="Charge.created_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} processor={self.processor!r}>"
