"""ORM Models — SQLAlchemy declarative models for all ledger entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Receipt and Distribution are aggregate roots; their items are never written alone

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from zakat_ledger.models.user import User  # noqa: F401
from zakat_ledger.models.donor import Donor  # noqa: F401
from zakat_ledger.models.category import Category  # noqa: F401
from zakat_ledger.models.beneficiary import Beneficiary  # noqa: F401
from zakat_ledger.models.program import Program  # noqa: F401
from zakat_ledger.models.receipt import Receipt, ReceiptItem  # noqa: F401
from zakat_ledger.models.distribution import Distribution, DistributionItem  # noqa: F401
