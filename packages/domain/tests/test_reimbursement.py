"""Tests for investor fee reimbursement.

Tests cover:
1. Fee registration and owner gating
2. Basic reimbursement
3. Funding preconditions
4. Repeat calls over cleared records
5. Duplicate registration policies ("reject" and "additive")
6. Mid-batch transfer failure
7. Interaction with payee distribution through the shared pool
"""

import pytest

from payout_domain import (
    AuthorizationError,
    EconomicError,
    OwnerGate,
    PaymentSplitter,
    RecordingAssetTransfer,
    TransferFailedError,
    ValidationError,
)
from payout_domain.blocks import BlockContext, PayoutStatementBlock
from payout_domain.schemas import ProjectFeesAdded, ProjectFeesReimbursed, SplitterCFG


def build_splitter(policy="reject", rail=None):
    rail = rail if rail is not None else RecordingAssetTransfer()
    config = SplitterCFG(owner="admin", duplicate_fee_policy=policy)
    splitter = PaymentSplitter(OwnerGate("admin"), rail, config=config)
    return splitter, rail


# =============================================================================
# Registration
# =============================================================================

class TestAddProjectFees:
    """Test investor fee registration."""

    def test_register_fee(self):
        splitter, _ = build_splitter()
        splitter.add_project_fees("admin", "seed_fund", 40)

        assert splitter.fee_owed("seed_fund") == 40
        assert splitter.fee_pool_total() == 40
        assert splitter.list_investors() == ["seed_fund"]

    def test_register_emits_notification(self):
        splitter, _ = build_splitter()
        splitter.add_project_fees("admin", "seed_fund", 40)

        added = [n for n in splitter.notifications if isinstance(n, ProjectFeesAdded)]
        assert len(added) == 1
        assert added[0].investor == "seed_fund"
        assert added[0].amount == 40
        assert added[0].fee_owed == 40

    def test_non_owner_cannot_register(self):
        splitter, _ = build_splitter()
        with pytest.raises(AuthorizationError):
            splitter.add_project_fees("mallory", "seed_fund", 40)
        assert splitter.fee_pool_total() == 0
        assert splitter.list_investors() == []

    @pytest.mark.parametrize("amount", [0, -1, 2.5, None])
    def test_invalid_amount(self, amount):
        splitter, _ = build_splitter()
        with pytest.raises(ValidationError, match="Fee amount"):
            splitter.add_project_fees("admin", "seed_fund", amount)

    def test_invalid_investor(self):
        splitter, _ = build_splitter()
        with pytest.raises(ValidationError, match="Investor identity"):
            splitter.add_project_fees("admin", "", 10)

    def test_fee_owed_for_unknown_investor(self):
        splitter, _ = build_splitter()
        assert splitter.fee_owed("nobody") == 0


class TestDuplicatePolicy:
    """Test both explicit duplicate-registration policies.

    fee_pool_total must equal the sum of active fees under either policy.
    """

    def test_reject_policy_refuses_active_duplicate(self):
        splitter, _ = build_splitter(policy="reject")
        splitter.add_project_fees("admin", "seed_fund", 40)

        with pytest.raises(ValidationError, match="outstanding fees"):
            splitter.add_project_fees("admin", "seed_fund", 10)

        assert splitter.fee_owed("seed_fund") == 40
        assert splitter.fee_pool_total() == 40
        assert splitter.list_investors() == ["seed_fund"]

    def test_additive_policy_accumulates(self):
        splitter, _ = build_splitter(policy="additive")
        splitter.add_project_fees("admin", "seed_fund", 40)
        splitter.add_project_fees("admin", "angel", 5)
        splitter.add_project_fees("admin", "seed_fund", 10)

        assert splitter.fee_owed("seed_fund") == 50
        assert splitter.fee_pool_total() == 55
        assert splitter.list_investors() == ["seed_fund", "angel"]

    def test_additive_policy_reimburses_accumulated_amount_once(self):
        splitter, rail = build_splitter(policy="additive")
        splitter.add_project_fees("admin", "seed_fund", 40)
        splitter.add_project_fees("admin", "seed_fund", 10)
        splitter.receive("sponsor", 50)

        assert splitter.reimburse_project_fees("admin") == 50
        assert rail.transfers == [("seed_fund", 50)]

    def test_default_policy_is_reject(self):
        splitter = PaymentSplitter(OwnerGate("admin"), RecordingAssetTransfer())
        splitter.add_project_fees("admin", "seed_fund", 40)
        with pytest.raises(ValidationError):
            splitter.add_project_fees("admin", "seed_fund", 40)

    @pytest.mark.parametrize("policy", ["reject", "additive"])
    def test_cleared_investor_can_be_registered_again(self, policy):
        """A reimbursed investor reuses its original slot."""
        splitter, rail = build_splitter(policy=policy)
        splitter.add_project_fees("admin", "seed_fund", 40)
        splitter.add_project_fees("admin", "angel", 10)
        splitter.receive("sponsor", 50)
        splitter.reimburse_project_fees("admin")

        splitter.add_project_fees("admin", "seed_fund", 7)

        assert splitter.fee_owed("seed_fund") == 7
        assert splitter.fee_pool_total() == 7
        assert splitter.list_investors(include_cleared=True) == ["seed_fund", "angel"]
        assert splitter.list_investors() == ["seed_fund"]


# =============================================================================
# Reimbursement
# =============================================================================

def test_fee_reimbursed_from_matching_deposit():
    """add_project_fees(I, 40); deposit 40; reimburse transfers 40 to I."""
    splitter, rail = build_splitter()
    splitter.add_project_fees("admin", "investor", 40)
    splitter.receive("sponsor", 40)

    assert splitter.reimburse_project_fees("admin") == 40

    assert rail.transfers == [("investor", 40)]
    assert splitter.fee_pool_total() == 0
    assert splitter.fee_owed("investor") == 0
    assert splitter.pool_balance() == 0


def test_reimburse_in_registration_order():
    splitter, rail = build_splitter()
    for investor, amount in [("c_fund", 5), ("a_fund", 20), ("b_fund", 15)]:
        splitter.add_project_fees("admin", investor, amount)
    splitter.receive("sponsor", 100)

    assert splitter.reimburse_project_fees("admin") == 40
    assert rail.transfers == [("c_fund", 5), ("a_fund", 20), ("b_fund", 15)]
    assert splitter.pool_balance() == 60

    reimbursed = [n for n in splitter.notifications if isinstance(n, ProjectFeesReimbursed)]
    assert [(n.investor, n.amount) for n in reimbursed] == [("c_fund", 5), ("a_fund", 20), ("b_fund", 15)]


def test_non_owner_cannot_reimburse():
    splitter, rail = build_splitter()
    splitter.add_project_fees("admin", "investor", 40)
    splitter.receive("sponsor", 40)

    with pytest.raises(AuthorizationError):
        splitter.reimburse_project_fees("investor")
    assert rail.transfers == []
    assert splitter.fee_pool_total() == 40


class TestFundingPreconditions:
    """Test EconomicError preconditions of reimburse_project_fees."""

    def test_no_fees_owed(self):
        splitter, _ = build_splitter()
        splitter.receive("sponsor", 100)
        with pytest.raises(EconomicError, match="No investor fees owed"):
            splitter.reimburse_project_fees("admin")

    def test_empty_pool(self):
        splitter, _ = build_splitter()
        splitter.add_project_fees("admin", "investor", 40)
        with pytest.raises(EconomicError, match="Pool balance is zero"):
            splitter.reimburse_project_fees("admin")

    def test_underfunded_pool(self):
        splitter, rail = build_splitter()
        splitter.add_project_fees("admin", "a_fund", 30)
        splitter.add_project_fees("admin", "b_fund", 30)
        splitter.receive("sponsor", 50)

        with pytest.raises(EconomicError, match="below owed investor fees"):
            splitter.reimburse_project_fees("admin")

        # Nothing is paid partially when the pool cannot cover everything
        assert rail.transfers == []
        assert splitter.fee_pool_total() == 60
        assert splitter.pool_balance() == 50


def test_reimbursement_never_exceeds_pool_balance():
    splitter, rail = build_splitter()
    splitter.add_project_fees("admin", "a_fund", 30)
    splitter.add_project_fees("admin", "b_fund", 25)
    splitter.receive("sponsor", 60)
    balance_at_call = splitter.pool_balance()

    splitter.reimburse_project_fees("admin")

    assert rail.total_sent <= balance_at_call
    assert splitter.pool_balance() == 5


class TestRepeatReimbursement:
    """Cleared records are skipped, never paid twice."""

    def test_second_call_with_nothing_owed_fails(self):
        splitter, rail = build_splitter()
        splitter.add_project_fees("admin", "investor", 40)
        splitter.receive("sponsor", 100)
        splitter.reimburse_project_fees("admin")

        with pytest.raises(EconomicError, match="No investor fees owed"):
            splitter.reimburse_project_fees("admin")
        assert rail.transfers == [("investor", 40)]

    def test_second_call_pays_only_new_registrations(self):
        splitter, rail = build_splitter()
        splitter.add_project_fees("admin", "a_fund", 10)
        splitter.add_project_fees("admin", "b_fund", 20)
        splitter.receive("sponsor", 100)
        splitter.reimburse_project_fees("admin")

        splitter.add_project_fees("admin", "c_fund", 5)
        assert splitter.reimburse_project_fees("admin") == 5

        assert rail.transfers == [("a_fund", 10), ("b_fund", 20), ("c_fund", 5)]
        assert splitter.list_investors(include_cleared=True) == ["a_fund", "b_fund", "c_fund"]


# =============================================================================
# Transfer Failure
# =============================================================================

def test_mid_batch_failure_keeps_earlier_investors_paid():
    """Fail-fast: earlier steps stay committed, the failing and later ones do not."""
    rail = RecordingAssetTransfer(failing_destinations={"b_fund"})
    splitter, _ = build_splitter(rail=rail)
    splitter.add_project_fees("admin", "a_fund", 10)
    splitter.add_project_fees("admin", "b_fund", 20)
    splitter.add_project_fees("admin", "c_fund", 30)
    splitter.receive("sponsor", 100)

    with pytest.raises(TransferFailedError) as exc_info:
        splitter.reimburse_project_fees("admin")

    assert exc_info.value.destination == "b_fund"
    assert rail.transfers == [("a_fund", 10)]
    assert splitter.fee_owed("a_fund") == 0
    assert splitter.fee_owed("b_fund") == 20
    assert splitter.fee_owed("c_fund") == 30
    assert splitter.fee_pool_total() == 50
    assert splitter.pool_balance() == 90

    reimbursed = [n for n in splitter.notifications if isinstance(n, ProjectFeesReimbursed)]
    assert [n.investor for n in reimbursed] == ["a_fund"]

    # Resubmitting after the rail recovers pays the rest exactly once
    rail.failing_destinations.clear()
    assert splitter.reimburse_project_fees("admin") == 50
    assert rail.transfers == [("a_fund", 10), ("b_fund", 20), ("c_fund", 30)]
    assert splitter.fee_pool_total() == 0


# =============================================================================
# Shared Pool
# =============================================================================

def test_reimbursement_reduces_payee_accruals():
    """Investor reimbursements come out of the same pool payees draw on."""
    splitter, _ = build_splitter()
    splitter.initialize("admin", ["p1", "p2"], [1, 1])
    splitter.add_project_fees("admin", "investor", 40)
    splitter.receive("sponsor", 100)

    splitter.reimburse_project_fees("admin")

    assert splitter.pool_balance() == 60
    assert splitter.release("p1", "p1") == 30
    assert splitter.release("p2", "p2") == 30


def test_release_cannot_overdraw_after_reimbursement():
    """A payee whose accrual outlives a reimbursement cannot pull more than the pool holds."""
    splitter, _ = build_splitter()
    splitter.initialize("admin", ["p1", "p2"], [1, 1])
    splitter.receive("sponsor", 100)
    assert splitter.release("p1", "p1") == 50

    splitter.add_project_fees("admin", "investor", 40)
    splitter.reimburse_project_fees("admin")

    # pool 10, total_received 60 → p2 entitled to 30 but only 10 is held
    assert splitter.pending_payment("p2") == 0
    with pytest.raises(EconomicError, match="cannot cover"):
        splitter.release("p2", "p2")
    assert splitter.pool_balance() == 10

    context = BlockContext()
    context.set("splitter_state", splitter.state)
    PayoutStatementBlock().execute(context)
    statement = context.get("payout_statement").set_index("identity")
    assert statement.loc["p2", "entitlement"] == 30
    assert statement.loc["p2", "pending"] == 0
