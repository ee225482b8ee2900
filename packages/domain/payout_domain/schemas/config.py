"""Splitter and statement configuration.

SplitterCFG describes how a PaymentSplitter is set up: who owns it, how
duplicate investor registrations are handled and, optionally, the payee roster
to initialize with. StatementCFG drives the Excel statement renderer.

Configurations can be written in YAML and loaded with load_splitter_config():

    owner: treasury_admin
    duplicate_fee_policy: reject
    payees:
      - identity: alice
        shares: 1
      - identity: bob
        shares: 3
"""

from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import Field, field_validator, model_validator

from .base import DomainModel, Identity, ShareWeight
from .investors import DuplicateFeePolicy


# =============================================================================
# Splitter Configuration
# =============================================================================

class PayeeCFG(DomainModel):
    """One payee entry in a configured roster."""

    identity: Identity
    shares: ShareWeight


class SplitterCFG(DomainModel):
    """Configuration for a PaymentSplitter.

    Example:
        SplitterCFG(
            owner="treasury_admin",
            duplicate_fee_policy="additive",
            payees=[PayeeCFG(identity="alice", shares=1), PayeeCFG(identity="bob", shares=3)],
        )
    """

    owner: Identity = Field(
        description="Identity holding the privileged-caller capability"
    )

    duplicate_fee_policy: DuplicateFeePolicy = Field(
        default="reject",
        description=(
            "How add_project_fees treats an investor with an active record:\n"
            "- reject: raise ValidationError\n"
            "- additive: add the new amount to the outstanding fee"
        )
    )

    payees: Optional[List[PayeeCFG]] = Field(
        default=None,
        description="Roster to initialize with on construction. None = initialize later."
    )

    @model_validator(mode='after')
    def validate_payees(self):
        """Reject empty or duplicate rosters up front."""
        if self.payees is None:
            return self
        if not self.payees:
            raise ValueError("payees must contain at least one entry when set")
        identities = [p.identity for p in self.payees]
        duplicates = sorted({i for i in identities if identities.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate payees in roster: {duplicates}")
        return self


# =============================================================================
# Statement Configuration
# =============================================================================

class StatementCFG(DomainModel):
    """Configuration for the Excel payout statement.

    Example:
        StatementCFG(title="Q3 Payout Statement", include_investors=False)
    """

    title: str = Field(
        default="Payout Statement",
        description="Title written above the payee table"
    )

    payees_sheet_name: str = Field(default="Payees")
    investors_sheet_name: str = Field(default="Investors")
    summary_sheet_name: str = Field(default="Summary")

    include_investors: bool = Field(
        default=True,
        description="Render the investor reimbursement queue sheet"
    )

    include_cleared_investors: bool = Field(
        default=True,
        description="List investors that were already reimbursed"
    )

    include_summary: bool = Field(
        default=True,
        description="Render the ledger summary sheet"
    )

    header_color: str = Field(
        default="1F4E78",
        description="Header fill colour as RRGGBB hex"
    )

    @field_validator('header_color')
    @classmethod
    def validate_header_color(cls, v: str) -> str:
        """Validate colour is a 6-digit hex string."""
        v = v.lstrip("#").upper()
        if len(v) != 6 or any(c not in "0123456789ABCDEF" for c in v):
            raise ValueError(f"header_color must be RRGGBB hex, got: {v}")
        return v


# =============================================================================
# Loading
# =============================================================================

def load_splitter_config(path: Union[str, Path]) -> SplitterCFG:
    """Load and validate a SplitterCFG from a YAML file.

    Args:
        path: Path to the YAML document

    Returns:
        Validated SplitterCFG

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document is not a mapping
        pydantic.ValidationError: If the mapping fails validation
    """
    payload = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Splitter config must be a YAML mapping: {path}")
    return SplitterCFG.model_validate(payload)
