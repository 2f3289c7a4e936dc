"""Pay — processor-agnostic billing for owner models."""

from pay.billing import Billable, ProcessorAdapter, ProcessorRegistry
from pay.exceptions import ConfigurationError, PayError, UnknownOperationError

__all__ = [
    "Billable",
    "ConfigurationError",
    "PayError",
    "ProcessorAdapter",
    "ProcessorRegistry",
    "UnknownOperationError",
]
