"""
Pay Exceptions

Errors raised when an owner's processor configuration cannot serve a request.
Errors raised by a processor adapter itself (e.g. ``stripe.StripeError``) are
never wrapped and reach the caller unchanged.
"""


class PayError(Exception):
    """
    Base exception for processor dispatch errors.

    Carries a machine-readable ``code`` so callers can branch on the failure
    kind (prompt for payment setup vs. report a bug).
    """

    def __init__(self, message: str, code: str = "PAY_ERROR", details: dict | None = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(PayError):
    """Raised when an operation needs a processor (or processor id) that is not set."""

    def __init__(self, message: str = "processor not set", field: str = "processor"):
        super().__init__(
            message=message,
            code="PROCESSOR_NOT_SET",
            details={"field": field},
        )
        self.field = field


class UnknownOperationError(PayError):
    """
    Raised when a processor is named but cannot serve the requested capability.

    Examples:
        - the processor name has no registered adapter ("pants")
        - an adapter is registered without one of the required capabilities
    """

    def __init__(self, processor: str, capability: str | None = None, message: str | None = None):
        if message is None:
            if capability is None:
                message = f"No adapter registered for processor {processor!r}"
            else:
                message = f"Processor {processor!r} does not support {capability!r}"
        super().__init__(
            message=message,
            code="UNKNOWN_PROCESSOR",
            details={"processor": processor, "capability": capability},
        )
        self.processor = processor
        self.capability = capability
