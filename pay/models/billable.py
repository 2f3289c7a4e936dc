"""Billable columns shared by any owner model."""

import logging
from datetime import datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, validates

logger = logging.getLogger(__name__)


class BillableMixin:
    """Adds processor identity, generic trial and card columns to an owner table."""

    # Processor identity
    processor: Mapped[str | None] = mapped_column(String(50), nullable=True)
    processor_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)

    # Generic trial (not tied to any subscription)
    trial_ends_at: Mapped[datetime | None] = mapped_column(nullable=True)

    # Default card, as reported by the processor
    card_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    card_last4: Mapped[str | None] = mapped_column(String(4), nullable=True)
    card_exp_month: Mapped[str | None] = mapped_column(String(2), nullable=True)
    card_exp_year: Mapped[str | None] = mapped_column(String(4), nullable=True)

    @validates("processor")
    def _clear_processor_id_on_switch(self, key: str, value: str | None) -> str | None:
        """Switching to a different processor invalidates the old customer handle."""
        current = self.processor
        if current and current != value and self.processor_id is not None:
            logger.info(
                "Processor changed from %s to %s, clearing processor_id %s",
                current,
                value,
                self.processor_id,
            )
            self.processor_id = None
        return value
