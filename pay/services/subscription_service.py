"""Subscription service — loading and saving billable owners and their subscriptions."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pay.models.subscription import Subscription
from pay.models.user import User

logger = logging.getLogger(__name__)


async def get_owner(db: AsyncSession, owner_id: uuid.UUID) -> User | None:
    """Load an owner with its subscriptions and charges (selectin-loaded)."""
    result = await db.execute(select(User).where(User.id == owner_id))
    return result.scalar_one_or_none()


async def get_owner_by_processor_id(
    db: AsyncSession, processor: str, processor_id: str
) -> User | None:
    """Look up an owner by its processor-side customer ID (used by webhooks)."""
    result = await db.execute(
        select(User).where(
            User.processor == processor,
            User.processor_id == processor_id,
        )
    )
    return result.scalar_one_or_none()


async def get_subscription_by_processor_id(
    db: AsyncSession, processor: str, processor_id: str
) -> Subscription | None:
    """Look up a subscription by its processor-side ID."""
    result = await db.execute(
        select(Subscription).where(
            Subscription.processor == processor,
            Subscription.processor_id == processor_id,
        )
    )
    return result.scalar_one_or_none()


async def list_subscriptions(
    db: AsyncSession, owner_id: uuid.UUID, name: str | None = None
) -> list[Subscription]:
    """An owner's subscriptions, oldest first, optionally limited to one name."""
    query = select(Subscription).where(Subscription.owner_id == owner_id)
    if name is not None:
        query = query.where(Subscription.name == name)
    result = await db.execute(query.order_by(Subscription.created_at))
    return list(result.scalars().all())


async def save_owner(db: AsyncSession, owner: User) -> User:
    """Persist an owner along with any subscriptions recorded on it."""
    db.add(owner)
    await db.flush()
    logger.info("Saved owner %s (processor=%s)", owner.id, owner.processor)
    return owner
