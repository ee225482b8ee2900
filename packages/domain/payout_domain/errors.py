"""Error taxonomy for the payout domain.

Every failure raised by a splitter operation is a PayoutError subclass, so
callers can distinguish the reason for a failed call by class:

- ValidationError: malformed input (empty identity, non-positive shares,
  duplicate payee, mismatched lengths, out-of-range index, ...)
- StateError: operation not allowed in the current lifecycle state
  (re-initialization)
- AuthorizationError: caller is not allowed to perform the operation
- EconomicError: the numbers do not allow the operation (no payment due,
  empty or underfunded fee pool)
- TransferFailedError: the asset transfer collaborator reported failure
"""


class PayoutError(Exception):
    """Base class for all payout domain errors."""
    pass


class ValidationError(PayoutError, ValueError):
    """Raised when operation arguments are invalid."""
    pass


class StateError(PayoutError):
    """Raised when an operation is not allowed in the current state."""
    pass


class AuthorizationError(PayoutError, PermissionError):
    """Raised when the caller is not authorized for an operation."""
    pass


class EconomicError(PayoutError):
    """Raised when balances or amounts make an operation impossible."""
    pass


class TransferFailedError(PayoutError):
    """Raised when an asset transfer reports failure."""

    def __init__(self, destination: str, amount: int):
        self.destination = destination
        self.amount = amount
        super().__init__(f"Transfer of {amount} to '{destination}' failed")
