"""Proportional pull-based distribution.

Each payee pulls their own accrued share of everything the pool has ever
received:

    total_received = pool_balance + total_released
    entitlement    = floor(total_received * shares / total_shares)
    payment        = entitlement - released

Integer floor division leaves any remainder in the pool. Because
total_received never decreases through releases, a payee's entitlement is
monotonic, so the remainder becomes payable once further deposits push the
entitlement across the next integer boundary.
"""

import logging

from ..collaborators import AssetTransfer, send_or_raise
from ..errors import AuthorizationError, EconomicError, ValidationError
from ..schemas import PaymentReleased, SplitterState

log = logging.getLogger(__name__)


def compute_entitlement(total_received: int, shares: int, total_shares: int) -> int:
    """floor(total_received * shares / total_shares), 0 when total_shares is 0."""
    if total_shares == 0:
        return 0
    return total_received * shares // total_shares


def compute_payable(entitlement: int, released: int, pool_balance: int) -> int:
    """Amount a release would pay: the unpaid entitlement, or 0 if the pool cannot cover it."""
    due = entitlement - released
    if due <= 0 or due > pool_balance:
        return 0
    return due


class DistributionEngine:
    """Computes and executes payee withdrawals against the pool.

    The engine is stateless; it operates on the SplitterState handed to each
    call. Rolling back a failed release is the caller's job (PaymentSplitter
    checkpoints the state around every operation).

    Example:
        engine = DistributionEngine(RecordingAssetTransfer())
        engine.pending_payment(state, "alice")        # 25
        engine.release(state, caller="alice", identity="alice")   # 25
    """

    def __init__(self, rail: AssetTransfer):
        self.rail = rail

    def entitlement(self, state: SplitterState, identity: str) -> int:
        """Lifetime amount a payee is entitled to at the current balance.

        Returns:
            floor(total_received * shares / total_shares), 0 if not registered
        """
        registry = state.registry
        return compute_entitlement(
            state.ledger.total_received, registry.shares(identity), registry.total_shares
        )

    def pending_payment(self, state: SplitterState, identity: str) -> int:
        """Amount release() would pay right now.

        0 if the payee is unknown, nothing is due, or the pool balance cannot
        cover the unpaid entitlement (release() would raise EconomicError).
        """
        return compute_payable(
            self.entitlement(state, identity),
            state.registry.released(identity),
            state.ledger.pool_balance,
        )

    def release(self, state: SplitterState, caller: str, identity: str) -> int:
        """Pay a payee their currently accrued share.

        Args:
            state: Splitter state to mutate
            caller: Identity invoking the withdrawal
            identity: Payee to pay (must equal caller)

        Returns:
            Amount transferred (always > 0)

        Raises:
            AuthorizationError: If caller is not the payee
            ValidationError: If identity holds no shares
            EconomicError: If no payment is due or the pool cannot cover it
            TransferFailedError: If the asset transfer fails
        """
        if caller != identity:
            raise AuthorizationError(
                f"'{caller}' cannot release funds for '{identity}'; payees withdraw for themselves"
            )

        payee = state.registry.get(identity)
        if payee is None:
            raise ValidationError(f"'{identity}' has no shares")

        payment = self.entitlement(state, identity) - payee.released
        if payment <= 0:
            raise EconomicError(f"No payment due to '{identity}'")
        # Investor reimbursements shrink the pool without counting as releases
        if payment > state.ledger.pool_balance:
            raise EconomicError(
                f"Pool balance {state.ledger.pool_balance} cannot cover {payment} due to '{identity}'"
            )

        payee.released += payment
        state.ledger.record_release(payment)

        send_or_raise(self.rail, identity, payment)

        state.notifications.emit(PaymentReleased(to=identity, amount=payment))
        log.info("released %d to %s (released to date %d)", payment, identity, payee.released)
        return payment
