"""
ARBITER - Events

Notifications published for indexers and UIs after a call commits.
"""

from dataclasses import dataclass

from shared import Principal, QuestionId


@dataclass(frozen=True)
class ArbitrationRequested:
    """A payment was taken toward a question's dispute fee."""
    question: QuestionId
    amount_paid: int  # This call only
    payer: Principal
    remaining_to_threshold: int


@dataclass(frozen=True)
class OracleChanged:
    oracle: Principal


@dataclass(frozen=True)
class QuestionFeeChanged:
    fee: int


@dataclass(frozen=True)
class DefaultFeeChanged:
    fee: int


@dataclass(frozen=True)
class OverrideFeeChanged:
    question: QuestionId
    fee: int


@dataclass(frozen=True)
class MetadataChanged:
    metadata: str


@dataclass(frozen=True)
class OwnershipTransferred:
    previous_owner: Principal | None
    new_owner: Principal | None


Event = (
    ArbitrationRequested
    | OracleChanged
    | QuestionFeeChanged
    | DefaultFeeChanged
    | OverrideFeeChanged
    | MetadataChanged
    | OwnershipTransferred
)
