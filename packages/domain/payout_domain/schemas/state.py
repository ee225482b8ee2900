"""Complete splitter state.

SplitterState groups every piece of mutable state the engines touch, so the
splitter can checkpoint and restore it as one unit around each operation.

Rollback happens in place: the SplitterState object (and its registry, ledger,
investor queue and notification log) keeps its identity, so anything holding
a reference to it sees the restored values.
"""

from pydantic import BaseModel, Field

from .base import DomainModel
from .registry import ShareRegistry
from .ledger import LedgerTotals
from .investors import InvestorReimbursementQueue
from .notifications import NotificationLog


class StateCheckpoint(DomainModel):
    """Saved copy of a SplitterState taken before an operation.

    The notification log is append-only, so only its length is saved; the
    entries themselves are never copied.
    """

    registry: ShareRegistry
    ledger: LedgerTotals
    investors: InvestorReimbursementQueue
    notification_count: int = Field(ge=0)


class SplitterState(DomainModel):
    """Registry, balances, investor queue and notification log.

    The registry and the investor queue never interact; both only read or
    affect the pool balance held in ledger.

    Example:
        checkpoint = state.checkpoint()
        ...                                # mutate, then something fails
        state.restore(checkpoint)          # same object, previous values
    """

    registry: ShareRegistry = Field(default_factory=ShareRegistry)
    ledger: LedgerTotals = Field(default_factory=LedgerTotals)
    investors: InvestorReimbursementQueue = Field(default_factory=InvestorReimbursementQueue)
    notifications: NotificationLog = Field(default_factory=NotificationLog)

    def checkpoint(self) -> StateCheckpoint:
        """Save the current values so a failed operation can be rolled back."""
        return StateCheckpoint(
            registry=self.registry.model_copy(deep=True),
            ledger=self.ledger.model_copy(deep=True),
            investors=self.investors.model_copy(deep=True),
            notification_count=len(self.notifications),
        )

    def restore(self, checkpoint: StateCheckpoint) -> None:
        """Roll back to a checkpoint without replacing any state object."""
        _copy_fields(checkpoint.registry, self.registry)
        _copy_fields(checkpoint.ledger, self.ledger)
        _copy_fields(checkpoint.investors, self.investors)
        self.notifications.truncate(checkpoint.notification_count)


def _copy_fields(source: BaseModel, target: BaseModel) -> None:
    for name in type(target).model_fields:
        setattr(target, name, getattr(source, name))
