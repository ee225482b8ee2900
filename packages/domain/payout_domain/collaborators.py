"""External collaborator contracts.

The payout core consumes two capabilities it does not implement:

- AuthorizationGate: answers "is this caller the privileged owner?"
- AssetTransfer: moves value to a destination and reports success/failure

Default implementations are provided for local use and tests: OwnerGate (a
transferable single-owner capability) and RecordingAssetTransfer (records
transfers in memory and can be told to fail for given destinations).
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Set, Tuple

from .errors import AuthorizationError, TransferFailedError, ValidationError
from .schemas.base import is_valid_identity

log = logging.getLogger(__name__)


# =============================================================================
# Authorization Gate
# =============================================================================

class AuthorizationGate(ABC):
    """Single privileged-caller check consumed by administrative operations."""

    @abstractmethod
    def is_authorized(self, caller: str) -> bool:
        """Return True if caller holds the privileged capability."""
        pass


class OwnerGate(AuthorizationGate):
    """Transferable single-owner capability.

    Example:
        gate = OwnerGate("treasury_admin")
        gate.is_authorized("treasury_admin")   # True
        gate.transfer_ownership("treasury_admin", "new_admin")
        gate.is_authorized("treasury_admin")   # False
    """

    def __init__(self, owner: str):
        if not is_valid_identity(owner):
            raise ValidationError(f"Owner must be a non-empty string, got: {owner!r}")
        self._owner = owner

    @property
    def owner(self) -> str:
        return self._owner

    def is_authorized(self, caller: str) -> bool:
        return caller == self._owner

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """Hand the capability to a new owner.

        Raises:
            AuthorizationError: If caller is not the current owner
            ValidationError: If new_owner is empty
        """
        if not self.is_authorized(caller):
            raise AuthorizationError(f"'{caller}' is not the owner")
        if not is_valid_identity(new_owner):
            raise ValidationError(f"New owner must be a non-empty string, got: {new_owner!r}")
        log.info("ownership transferred from %s to %s", self._owner, new_owner)
        self._owner = new_owner

    def __repr__(self) -> str:
        return f"OwnerGate(owner={self._owner!r})"


# =============================================================================
# Asset Transfer
# =============================================================================

class AssetTransfer(ABC):
    """Atomic value-transfer primitive.

    Implementations either complete the whole transfer and return True, or
    move nothing and return False. The core never retries.
    """

    @abstractmethod
    def transfer(self, destination: str, amount: int) -> bool:
        """Move amount to destination. Returns True on success."""
        pass


@dataclass
class RecordingAssetTransfer(AssetTransfer):
    """In-memory transfer primitive that records what it moved.

    Example:
        rail = RecordingAssetTransfer(failing_destinations={"mallory"})
        rail.transfer("alice", 25)     # True, recorded
        rail.transfer("mallory", 10)   # False, nothing recorded
        rail.total_sent_to("alice")    # 25
    """

    failing_destinations: Set[str] = field(default_factory=set)
    transfers: List[Tuple[str, int]] = field(default_factory=list)

    def transfer(self, destination: str, amount: int) -> bool:
        if destination in self.failing_destinations:
            log.debug("transfer of %d to %s refused", amount, destination)
            return False
        self.transfers.append((destination, amount))
        return True

    def total_sent_to(self, destination: str) -> int:
        return sum(amount for dest, amount in self.transfers if dest == destination)

    @property
    def total_sent(self) -> int:
        return sum(amount for _, amount in self.transfers)


def send_or_raise(rail: AssetTransfer, destination: str, amount: int) -> None:
    """Invoke a transfer, converting a reported failure into an exception.

    Raises:
        TransferFailedError: If the collaborator returns anything but True
    """
    if rail.transfer(destination, amount) is not True:
        raise TransferFailedError(destination, amount)
