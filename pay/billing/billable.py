"""Billable facade — the billing surface of an owner, independent of its processor.

Wraps an owner model (anything with the ``BillableMixin`` columns and a
``subscriptions`` collection) and routes processor operations through a
``ProcessorRegistry``::

    billable = Billable(user)
    billable.processor = "stripe"
    billable.subscribe(plan="price_pro")
    billable.subscribed(plan="price_pro")  # True

Processor operations block for one remote round trip. Reads (``subscription``,
``subscribed``, ``on_trial``, ...) only look at already-loaded state.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pay.billing import evaluator
from pay.billing.registry import ProcessorRegistry
from pay.billing.registry import registry as default_registry
from pay.config import settings
from pay.exceptions import ConfigurationError
from pay.models import Subscription

logger = logging.getLogger(__name__)

# on_trial always looks at this slot, independent of default_subscription_name
TRIAL_SUBSCRIPTION_NAME = "default"


class Billable:
    """Processor-agnostic billing operations for one owner."""

    def __init__(self, owner: Any, registry: ProcessorRegistry | None = None) -> None:
        self.owner = owner
        self.registry = default_registry if registry is None else registry

    # ------------------------------------------------------------------
    # Processor identity
    # ------------------------------------------------------------------

    @property
    def processor(self) -> str | None:
        return self.owner.processor

    @processor.setter
    def processor(self, value: str | None) -> None:
        # The owner model clears processor_id when the processor changes
        self.owner.processor = value

    @property
    def processor_id(self) -> str | None:
        return self.owner.processor_id

    @processor_id.setter
    def processor_id(self, value: str | None) -> None:
        self.owner.processor_id = value

    def _dispatch(self, capability: str, *args: Any) -> Any:
        return self.registry.dispatch(self.processor, capability, self, *args)

    # ------------------------------------------------------------------
    # Processor operations
    # ------------------------------------------------------------------

    def customer(self) -> Any:
        """Return the processor's customer object for this owner."""
        return self._dispatch("customer")

    def subscribe(
        self,
        name: str | None = None,
        plan: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Subscribe to ``plan`` in the ``name`` slot; returns the processor's subscription."""
        name = settings.default_subscription_name if name is None else name
        plan = settings.default_plan_name if plan is None else plan
        return self._dispatch("subscribe", name, plan, {} if options is None else options)

    def update_card(self, token: str) -> Any:
        """Set the default payment card from a processor token."""
        if not self.processor:
            raise ConfigurationError()
        if not self.processor_id:
            raise ConfigurationError("processor_id not set", field="processor_id")
        return self._dispatch("update_card", token)

    def processor_subscription(self, subscription_id: str) -> Any:
        """Fetch the processor's view of a subscription by its processor-side ID."""
        return self._dispatch("subscription", subscription_id)

    def invoice(self) -> Any:
        """Invoice and pay any pending items now."""
        return self._dispatch("invoice")

    def upcoming_invoice(self) -> Any:
        """Preview the next invoice the processor will generate."""
        return self._dispatch("upcoming_invoice")

    # ------------------------------------------------------------------
    # Subscription state
    # ------------------------------------------------------------------

    @property
    def subscriptions(self) -> list[Subscription]:
        return self.owner.subscriptions

    @property
    def charges(self) -> list:
        return self.owner.charges

    def subscriptions_for(self, name: str) -> list[Subscription]:
        return evaluator.for_name(self.subscriptions, name)

    def subscription(self, name: str | None = None) -> Subscription | None:
        """The most recent subscription in the ``name`` slot, or None."""
        name = settings.default_subscription_name if name is None else name
        return evaluator.latest(self.subscriptions, name)

    def subscribed(self, name: str | None = None, plan: str | None = None) -> bool:
        """True if the ``name`` subscription is active (and on ``plan``, if given)."""
        return evaluator.is_subscribed(self.subscription(name), plan)

    def on_trial(self, plan: str | None = None) -> bool:
        """True if the default subscription is trialing (on ``plan``, if given).

        Without a plan, an owner-level generic trial also counts. Only the
        "default" slot is consulted; there is no name argument.
        """
        if plan is None and self.on_generic_trial():
            return True
        matches = self.subscriptions_for(TRIAL_SUBSCRIPTION_NAME)
        sub = matches[-1] if matches else None
        return evaluator.is_on_subscription_trial(sub, plan)

    def on_generic_trial(self, now: datetime | None = None) -> bool:
        return evaluator.is_on_generic_trial(self.owner.trial_ends_at, now)

    # ------------------------------------------------------------------
    # Write-back used by processor adapters
    # ------------------------------------------------------------------

    def create_subscription(
        self,
        *,
        name: str,
        processor: str,
        processor_id: str,
        processor_plan: str,
        quantity: int = 1,
        trial_ends_at: datetime | None = None,
    ) -> Subscription:
        """Record a new subscription on the owner (persisted with the owner's session)."""
        subscription = Subscription(
            name=name,
            processor=processor,
            processor_id=processor_id,
            processor_plan=processor_plan,
            quantity=quantity,
            trial_ends_at=trial_ends_at,
        )
        self.owner.subscriptions.append(subscription)
        logger.info(
            "Recorded %s subscription %s (%s, plan=%s) for owner %s",
            processor,
            processor_id,
            name,
            processor_plan,
            getattr(self.owner, "id", None),
        )
        return subscription

    def update_card_details(
        self,
        *,
        card_type: str | None,
        card_last4: str | None,
        card_exp_month: str | None,
        card_exp_year: str | None,
    ) -> None:
        self.owner.card_type = card_type
        self.owner.card_last4 = card_last4
        self.owner.card_exp_month = card_exp_month
        self.owner.card_exp_year = card_exp_year

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def customer_name(self) -> str:
        """First and last name joined by a space, skipping blanks."""
        parts = [self.owner.first_name, self.owner.last_name]
        return " ".join(part.strip() for part in parts if part and part.strip())
