"""Base classes and type system for payout domain models.

This module provides the foundational types and base class used throughout
the payout schema system. All amounts are integers in a single base unit.
"""

from typing import Annotated
from pydantic import BaseModel, Field, ConfigDict

# =============================================================================
# Base Model
# =============================================================================

class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for all Pydantic models in the domain layer:
    - Validation on assignment for runtime safety
    - Enum value serialization
    - Arbitrary types for collaborator handles
    """

    model_config = ConfigDict(
        frozen=False,  # State models are mutated by the engines
        validate_assignment=True,  # Validate on field assignment
        use_enum_values=True,  # Use enum values in JSON
        arbitrary_types_allowed=True,
    )


# =============================================================================
# Type Aliases - Numeric
# =============================================================================

Amount = Annotated[
    int,
    Field(ge=0, description="Value in the pool's base unit (non-negative integer)")
]

ShareWeight = Annotated[
    int,
    Field(gt=0, description="Share weight of a payee (positive integer)")
]


# =============================================================================
# ID Conventions
# =============================================================================

Identity = Annotated[
    str,
    Field(
        min_length=1,
        description="Identity of a payee, investor, depositor or owner (e.g., 'alice', '0xab12...')"
    )
]


def is_valid_identity(identity) -> bool:
    """Check that a raw identity is a non-empty string.

    Engines validate raw caller input with this before building models so the
    failure surfaces as a payout ValidationError instead of a pydantic one.
    """
    return isinstance(identity, str) and len(identity) > 0


def is_positive_int(value) -> bool:
    """Check that a raw value is a strictly positive integer (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
