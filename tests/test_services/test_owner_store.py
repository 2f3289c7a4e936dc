"""Tests for the subscription service — loading and saving owners (in-memory SQLite)."""

import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from pay.billing.billable import Billable
from pay.billing.registry import ProcessorRegistry
from pay.models import Subscription, User
from pay.services.subscription_service import (
    get_owner,
    get_owner_by_processor_id,
    get_subscription_by_processor_id,
    list_subscriptions,
    save_owner,
)


async def _create_user(db_session: AsyncSession, **kwargs) -> User:
    """Create a minimal test owner."""
    unique = uuid.uuid4().hex[:8]
    user = User(email=f"store-{unique}@test.com", first_name="Store", last_name="Test", **kwargs)
    db_session.add(user)
    await db_session.flush()
    return user


def _subscription(owner: User, name: str, processor_id: str, created_at: datetime) -> Subscription:
    return Subscription(
        owner_id=owner.id,
        name=name,
        processor="stripe",
        processor_id=processor_id,
        processor_plan="default",
        quantity=1,
        created_at=created_at,
        updated_at=created_at,
    )


class TestGetOwner:
    """Test get_owner and get_owner_by_processor_id."""

    async def test_get_owner(self, db_session: AsyncSession):
        user = await _create_user(db_session, processor="stripe", processor_id="cus_store_1")

        result = await get_owner(db_session, user.id)
        assert result is not None
        assert result.id == user.id
        assert result.processor_id == "cus_store_1"

    async def test_get_owner_not_found(self, db_session: AsyncSession):
        assert await get_owner(db_session, uuid.uuid4()) is None

    async def test_get_owner_by_processor_id(self, db_session: AsyncSession):
        user = await _create_user(db_session, processor="stripe", processor_id="cus_lookup")

        result = await get_owner_by_processor_id(db_session, "stripe", "cus_lookup")
        assert result is not None
        assert result.id == user.id

    async def test_processor_must_match(self, db_session: AsyncSession):
        await _create_user(db_session, processor="stripe", processor_id="cus_lookup")
        assert await get_owner_by_processor_id(db_session, "braintree", "cus_lookup") is None


class TestSubscriptions:
    """Test subscription lookups."""

    async def test_list_subscriptions_oldest_first(self, db_session: AsyncSession):
        user = await _create_user(db_session)
        db_session.add_all(
            [
                _subscription(user, "default", "sub_new", datetime(2026, 2, 1)),
                _subscription(user, "addon", "sub_addon", datetime(2026, 1, 15)),
                _subscription(user, "default", "sub_old", datetime(2026, 1, 1)),
            ]
        )
        await db_session.flush()

        all_subs = await list_subscriptions(db_session, user.id)
        assert [s.processor_id for s in all_subs] == ["sub_old", "sub_addon", "sub_new"]

        default_subs = await list_subscriptions(db_session, user.id, name="default")
        assert [s.processor_id for s in default_subs] == ["sub_old", "sub_new"]

    async def test_list_subscriptions_empty(self, db_session: AsyncSession):
        user = await _create_user(db_session)
        assert await list_subscriptions(db_session, user.id) == []

    async def test_get_subscription_by_processor_id(self, db_session: AsyncSession):
        user = await _create_user(db_session)
        subscription = _subscription(user, "default", "sub_lookup_456", datetime(2026, 1, 1))
        db_session.add(subscription)
        await db_session.flush()

        result = await get_subscription_by_processor_id(db_session, "stripe", "sub_lookup_456")
        assert result is not None
        assert result.id == subscription.id

    async def test_get_subscription_not_found(self, db_session: AsyncSession):
        assert await get_subscription_by_processor_id(db_session, "stripe", "sub_nonexistent") is None


class TestSaveOwner:
    """Test save_owner persists write-backs made through the facade."""

    async def test_saves_recorded_subscription(self, db_session: AsyncSession):
        user = User(email="gob@bluth.com", processor="stripe", processor_id="cus_1")
        billable = Billable(user, registry=ProcessorRegistry())
        billable.create_subscription(
            name="default",
            processor="stripe",
            processor_id="sub_saved",
            processor_plan="price_pro",
        )

        await save_owner(db_session, user)

        stored = await get_subscription_by_processor_id(db_session, "stripe", "sub_saved")
        assert stored is not None
        assert stored.owner_id == user.id
        assert stored.processor_plan == "price_pro"

    async def test_saves_processor_switch(self, db_session: AsyncSession):
        user = await _create_user(db_session, processor="stripe", processor_id="cus_1")

        user.processor = "braintree"
        await save_owner(db_session, user)

        reloaded = await get_owner(db_session, user.id)
        assert reloaded.processor == "braintree"
        assert reloaded.processor_id is None
