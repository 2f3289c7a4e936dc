"""Shared test configuration and fixtures.

Store tests run against a fresh in-memory SQLite database per test, wrapped in
a transaction that always rolls back. Billing tests use a recording fake
processor registered under the name "stripe" instead of the real adapter.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from pay.billing.adapter import ProcessorAdapter
from pay.billing.billable import Billable
from pay.billing.registry import ProcessorRegistry
from pay.database import Base
from pay.models import User


# ---------------------------------------------------------------------------
# Test double: records every capability call and returns canned results
# ---------------------------------------------------------------------------


class RecordingProcessor(ProcessorAdapter):
    """Processor adapter spy — records (capability, args) and returns ``results[capability]``."""

    def __init__(self, name: str = "stripe", results: dict[str, Any] | None = None) -> None:
        self.name = name
        self.results = results or {}
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, capability: str, *args: Any) -> Any:
        self.calls.append((capability, args))
        result = self.results.get(capability)
        if isinstance(result, Exception):
            raise result
        return result

    def customer(self, billable):
        return self._record("customer")

    def subscribe(self, billable, name, plan, options):
        return self._record("subscribe", name, plan, options)

    def update_card(self, billable, token):
        return self._record("update_card", token)

    def subscription(self, billable, subscription_id):
        return self._record("subscription", subscription_id)

    def invoice(self, billable):
        return self._record("invoice")

    def upcoming_invoice(self, billable):
        return self._record("upcoming_invoice")


@pytest.fixture
def processor_factory() -> type[RecordingProcessor]:
    """The spy class itself, for tests that need extra or broken adapters."""
    return RecordingProcessor


@pytest.fixture
def fake_processor() -> RecordingProcessor:
    return RecordingProcessor(name="stripe")


@pytest.fixture
def processor_registry(fake_processor: RecordingProcessor) -> ProcessorRegistry:
    return ProcessorRegistry([fake_processor])


@pytest.fixture
def user() -> User:
    """A transient owner with no processor configured."""
    return User(email="gob@bluth.com")


@pytest.fixture
def billable(user: User, processor_registry: ProcessorRegistry) -> Billable:
    return Billable(user, registry=processor_registry)


# ---------------------------------------------------------------------------
# Per-test database: in-memory SQLite with transactional rollback
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session on a fresh schema, rolled back after the test."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()

    await engine.dispose()
