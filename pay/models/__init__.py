"""SQLAlchemy models for Pay.

All models are imported here so that ``Base.metadata`` sees every table.
If you add a new model, import it in this file.
"""

from pay.models.billable import BillableMixin
from pay.models.charge import Charge
from pay.models.subscription import Subscription
from pay.models.user import User

__all__ = [
    "BillableMixin",
    "Charge",
    "Subscription",
    "User",
]
