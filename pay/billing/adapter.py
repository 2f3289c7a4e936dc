"""Processor adapter interface — one implementation per payment processor."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pay.billing.billable import Billable

CAPABILITIES: tuple[str, ...] = (
    "customer",
    "subscribe",
    "update_card",
    "subscription",
    "invoice",
    "upcoming_invoice",
)


class ProcessorAdapter(ABC):
    """Interface for payment processors (Stripe, Braintree, etc.).

    Every method receives the ``Billable`` facade of the owner first. Return
    values are opaque to the dispatcher and handed back to the caller as-is;
    processor errors propagate unchanged.
    """

    name: str

    @abstractmethod
    def customer(self, billable: Billable) -> Any:
        """Return the processor-side customer, creating it if needed."""

    @abstractmethod
    def subscribe(self, billable: Billable, name: str, plan: str, options: dict[str, Any]) -> Any:
        """Start a subscription to ``plan`` in the ``name`` slot."""

    @abstractmethod
    def update_card(self, billable: Billable, token: str) -> Any:
        """Replace the customer's default payment method with ``token``."""

    @abstractmethod
    def subscription(self, billable: Billable, subscription_id: str) -> Any:
        """Fetch the processor's view of a subscription."""

    @abstractmethod
    def invoice(self, billable: Billable) -> Any:
        """Invoice the customer for pending items and pay it."""

    @abstractmethod
    def upcoming_invoice(self, billable: Billable) -> Any:
        """Preview the customer's next invoice."""
