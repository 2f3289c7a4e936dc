"""Processor registry — routes a capability request to the owner's processor adapter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pay.billing.adapter import CAPABILITIES, ProcessorAdapter
from pay.config import settings
from pay.exceptions import ConfigurationError, UnknownOperationError

if TYPE_CHECKING:
    from pay.billing.billable import Billable

logger = logging.getLogger(__name__)


class ProcessorRegistry:
    """Maps processor identifiers ("stripe", ...) to adapter instances."""

    def __init__(self, adapters: list[ProcessorAdapter] | None = None) -> None:
        self._adapters: dict[str, ProcessorAdapter] = {}
        for adapter in adapters or []:
            self.register(adapter)

    def register(self, adapter: ProcessorAdapter) -> ProcessorAdapter:
        """Register an adapter under its ``name``, replacing any earlier one.

        Raises UnknownOperationError if the adapter cannot serve every capability,
        so a broken adapter fails at startup rather than mid-request.
        """
        name = getattr(adapter, "name", None)
        if not isinstance(adapter, ProcessorAdapter) or not name:
            raise UnknownOperationError(
                processor=str(name),
                message=f"{adapter!r} is not a named ProcessorAdapter",
            )
        for capability in CAPABILITIES:
            if not callable(getattr(adapter, capability, None)):
                raise UnknownOperationError(processor=name, capability=capability)

        if name in self._adapters:
            logger.info("Replacing adapter for processor %s", name)
        self._adapters[name] = adapter
        return adapter

    def unregister(self, name: str) -> None:
        self._adapters.pop(name, None)

    def get(self, name: str) -> ProcessorAdapter | None:
        return self._adapters.get(name)

    def names(self) -> list[str]:
        return sorted(self._adapters)

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def resolve(self, processor: str | None) -> ProcessorAdapter:
        """Return the adapter for ``processor``.

        Raises ConfigurationError when no processor is set and
        UnknownOperationError when it is set but nothing is registered for it.
        """
        if not processor:
            logger.warning("Billing operation attempted without a processor")
            raise ConfigurationError()

        adapter = self._adapters.get(processor)
        if adapter is None:
            logger.warning("No adapter registered for processor %s", processor)
            raise UnknownOperationError(processor=processor)
        return adapter

    def dispatch(
        self,
        processor: str | None,
        capability: str,
        billable: Billable,
        *args: Any,
    ) -> Any:
        """Invoke ``capability`` on the processor's adapter and return its result unchanged."""
        adapter = self.resolve(processor)
        if capability not in CAPABILITIES:
            raise UnknownOperationError(processor=processor, capability=capability)

        logger.debug(
            "Dispatching %s to %s processor for owner %s",
            capability,
            processor,
            getattr(billable.owner, "id", None),
        )
        return getattr(adapter, capability)(billable, *args)


def build_default_registry() -> ProcessorRegistry:
    """Create a registry holding the adapters enabled in settings."""
    registry = ProcessorRegistry()
    for name in settings.enabled_processors:
        if name == "stripe":
            from pay.billing.stripe_processor import StripeProcessor

            registry.register(StripeProcessor())
        else:
            logger.warning("Processor %s is enabled but has no built-in adapter", name)
    return registry


registry = build_default_registry()
