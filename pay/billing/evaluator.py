"""Subscription state evaluation — pure checks over already-loaded subscriptions."""

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

from pay.models.subscription import as_naive_utc, utcnow


class SubscriptionState(Protocol):
    """What the evaluator needs from a subscription record."""

    name: str
    processor_plan: str

    def active(self) -> bool: ...

    def on_trial(self) -> bool: ...


def for_name(subscriptions: Iterable[SubscriptionState], name: str) -> list[SubscriptionState]:
    """Subscriptions in the ``name`` slot, keeping creation order (oldest first)."""
    return [sub for sub in subscriptions if sub.name == name]


def latest(subscriptions: Iterable[SubscriptionState], name: str) -> SubscriptionState | None:
    """The most recently created subscription in the ``name`` slot, if any."""
    matches = for_name(subscriptions, name)
    return matches[-1] if matches else None


def _plan_matches(subscription: SubscriptionState, plan: str | None) -> bool:
    # Exact, case-sensitive comparison
    return plan is None or subscription.processor_plan == plan


def is_subscribed(subscription: SubscriptionState | None, plan: str | None = None) -> bool:
    """True for an active subscription, on ``plan`` when one is given."""
    if subscription is None:
        return False
    return subscription.active() and _plan_matches(subscription, plan)


def is_on_subscription_trial(subscription: SubscriptionState | None, plan: str | None = None) -> bool:
    """True for a trialing subscription, on ``plan`` when one is given."""
    if subscription is None:
        return False
    return subscription.on_trial() and _plan_matches(subscription, plan)


def is_on_generic_trial(trial_ends_at: datetime | None, now: datetime | None = None) -> bool:
    """True while an owner-level trial has not yet ended."""
    if trial_ends_at is None:
        return False
    return as_naive_utc(trial_ends_at) > as_naive_utc(now or utcnow())
