"""
ARBITER - Dispute Arbitration Authority

Takes payment toward a question's dispute fee, freezes the question on
the oracle once the fee is met and submits the owner's binding answer.
"""

from .access import Ownership, require_owner
from .fees import FeeSchedule, get_effective_fee
from .ledger import BountyLedger
from .oracle_client import Oracle, OracleClient
from .service import Arbitrator, ArbitratorState
from .treasury import Asset, NativeTransport, Treasury

__all__ = [
    "Arbitrator",
    "ArbitratorState",
    "FeeSchedule",
    "get_effective_fee",
    "BountyLedger",
    "Oracle",
    "OracleClient",
    "Treasury",
    "Asset",
    "NativeTransport",
    "Ownership",
    "require_owner",
]
