"""Processor dispatch, subscription state evaluation and the Billable facade."""

from pay.billing.adapter import CAPABILITIES, ProcessorAdapter
from pay.billing.billable import Billable
from pay.billing.registry import ProcessorRegistry, build_default_registry, registry

__all__ = [
    "CAPABILITIES",
    "Billable",
    "ProcessorAdapter",
    "ProcessorRegistry",
    "build_default_registry",
    "registry",
]
