"""Stripe processor adapter built on the synchronous StripeClient."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import stripe
from stripe import StripeClient

from pay.billing.adapter import ProcessorAdapter
from pay.config import settings

if TYPE_CHECKING:
    from pay.billing.billable import Billable

logger = logging.getLogger(__name__)


def get_stripe_client() -> StripeClient:
    """Create a StripeClient instance using the configured secret key."""
    return StripeClient(
        settings.stripe_secret_key,
        http_client=stripe.HTTPXClient(),
    )


def _ts_to_naive(ts: int | None) -> datetime | None:
    """Convert Stripe Unix timestamp to naive UTC datetime."""
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, timezone.utc).replace(tzinfo=None)


class StripeProcessor(ProcessorAdapter):
    """Stripe implementation of every billing capability."""

    name = "stripe"

    def __init__(self, client: StripeClient | None = None) -> None:
        self._client = client

    @property
    def client(self) -> StripeClient:
        # Built lazily so the registry can be created before keys are configured
        if self._client is None:
            self._client = get_stripe_client()
        return self._client

    def customer(self, billable: Billable) -> stripe.Customer:
        """Retrieve the owner's Stripe customer, creating and linking one if missing."""
        if billable.processor_id:
            return self.client.v1.customers.retrieve(billable.processor_id)

        owner = billable.owner
        logger.info("Creating Stripe customer for owner %s", owner.id)
        customer = self.client.v1.customers.create(
            params={
                "email": owner.email,
                "name": billable.customer_name() or owner.email,
                "metadata": {"pay_owner_id": str(owner.id), "app_name": settings.app_name},
            }
        )
        billable.processor_id = customer.id
        logger.info("Created Stripe customer %s for owner %s", customer.id, owner.id)
        return customer

    def subscribe(
        self, billable: Billable, name: str, plan: str, options: dict[str, Any]
    ) -> stripe.Subscription:
        """Create a Stripe subscription for ``plan`` and record it locally."""
        customer = self.customer(billable)
        quantity = options.get("quantity", 1)
        extra = {key: value for key, value in options.items() if key != "quantity"}

        logger.info(
            "Creating Stripe subscription for customer %s, plan %s (%s)",
            customer.id,
            plan,
            name,
        )
        stripe_sub = self.client.v1.subscriptions.create(
            params={
                "customer": customer.id,
                "items": [{"price": plan, "quantity": quantity}],
                **extra,
            }
        )

        billable.create_subscription(
            name=name,
            processor=self.name,
            processor_id=stripe_sub.id,
            processor_plan=plan,
            quantity=quantity,
            trial_ends_at=_ts_to_naive(getattr(stripe_sub, "trial_end", None)),
        )
        return stripe_sub

    def update_card(self, billable: Billable, token: str) -> stripe.Customer:
        """Make ``token`` the default source and copy its card details to the owner."""
        logger.info("Updating default card for Stripe customer %s", billable.processor_id)
        customer = self.client.v1.customers.update(
            billable.processor_id,
            params={"source": token, "expand": ["default_source"]},
        )
        card = customer.default_source
        if card is not None:
            billable.update_card_details(
                card_type=card.brand,
                card_last4=card.last4,
                card_exp_month=str(card.exp_month),
                card_exp_year=str(card.exp_year),
            )
        return customer

    def subscription(self, billable: Billable, subscription_id: str) -> stripe.Subscription:
        """Retrieve a Stripe subscription by ID."""
        return self.client.v1.subscriptions.retrieve(subscription_id)

    def invoice(self, billable: Billable) -> stripe.Invoice:
        """Invoice pending items for the customer and pay immediately."""
        customer = self.customer(billable)
        invoice = self.client.v1.invoices.create(params={"customer": customer.id})
        logger.info("Paying Stripe invoice %s for customer %s", invoice.id, customer.id)
        return self.client.v1.invoices.pay(invoice.id)

    def upcoming_invoice(self, billable: Billable) -> stripe.Invoice:
        """Preview the next invoice Stripe will generate for the customer."""
        customer = self.customer(billable)
        return self.client.v1.invoices.create_preview(params={"customer": customer.id})
