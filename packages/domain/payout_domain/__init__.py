"""Payout Domain Engine - pooled balance distribution and investor reimbursement.

This package provides the accounting core of a payment splitter:
- Write-once share registry of payees and integer share weights
- Pull-based proportional distribution with floor rounding
- Investor fee reimbursement from the same pool
- Per-call atomic state with an append-only notification log
- Reporting blocks that turn splitter state into DataFrames

The domain layer is designed to be:
- Framework-agnostic (authorization and value transfer are injected)
- Testable (pure Python with Pydantic validation)
"""

from .errors import (  # noqa: F401
    PayoutError,
    ValidationError,
    StateError,
    AuthorizationError,
    EconomicError,
    TransferFailedError,
)
from .collaborators import (  # noqa: F401
    AuthorizationGate,
    OwnerGate,
    AssetTransfer,
    RecordingAssetTransfer,
)
from .engine import PaymentSplitter, DistributionEngine, ReimbursementEngine  # noqa: F401
from .schemas import *  # noqa: F403, F401

__version__ = "0.1.0"
